"""jsonflow.server - Flask REST API server for the live diagram.

Exposes a VisualizerSession over HTTP: input text, display mode, the
diagram, and the drag-start / drag-move / drag-stop events.
"""

from jsonflow.server.app import create_app

__all__ = ["create_app"]
