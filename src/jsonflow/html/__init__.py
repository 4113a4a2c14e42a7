"""HTML Generation module for JSON flow diagrams.

This module provides HTML rendering of interactive node-link diagrams.
"""

from jsonflow.html.generator import HTMLGenerator

__all__ = ["HTMLGenerator"]
