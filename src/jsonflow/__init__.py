"""
jsonflow - JSON formatting and interactive node-link diagrams

jsonflow pretty-prints JSON and renders any JSON value as a tree-shaped
diagram whose nodes can be dragged: moving a node carries its whole
subtree with it.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("jsonflow")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from jsonflow.graph import (
    DragSessionManager,
    FlowGraph,
    GraphBuilder,
    LayoutPolicy,
    Position,
    PositionStore,
    build_graph,
)
from jsonflow.session import Mode, VisualizerSession

__all__ = [
    "__version__",
    "DragSessionManager",
    "FlowGraph",
    "GraphBuilder",
    "LayoutPolicy",
    "Mode",
    "Position",
    "PositionStore",
    "VisualizerSession",
    "build_graph",
]
