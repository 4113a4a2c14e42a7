"""Graph module - Core graph data structures.

Exports:
- NodeKind: Enum of node types
- Position: Immutable canvas point
- GraphNode: Positioned diagram node
- GraphEdge: Parent→child edge
- RelationIndex: Parent→children index built with the edges
- LayoutPolicy: Row/slot geometry of the diagram
- PositionStore: Live positions read and written by renderers and drags
- DragSessionManager: Snapshot-based subtree dragging

Note: FlowGraph is in jsonflow.graph.builder (use build_graph() to construct)
"""

from jsonflow.graph.builder import FlowGraph, GraphBuilder, build_graph
from jsonflow.graph.drag import DragSessionManager, DragSnapshot, OverlapPolicy
from jsonflow.graph.GraphNode import GraphNode, NodeKind, Position
from jsonflow.graph.layout import LayoutPolicy
from jsonflow.graph.positions import PositionStore
from jsonflow.graph.relations import GraphEdge, RelationIndex

__all__ = [
    "NodeKind",
    "Position",
    "GraphNode",
    "GraphEdge",
    "RelationIndex",
    "LayoutPolicy",
    "PositionStore",
    "FlowGraph",
    "GraphBuilder",
    "build_graph",
    "DragSessionManager",
    "DragSnapshot",
    "OverlapPolicy",
]
