"""Graph Serialization - Export a FlowGraph for renderers and humans.

This module provides functions to serialize FlowGraph, GraphNode and
GraphEdge to JSON-compatible dicts, and a plain-text outline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from jsonflow.graph.builder import FlowGraph
    from jsonflow.graph.GraphNode import GraphNode, Position
    from jsonflow.graph.relations import GraphEdge


def serialize_node(node: GraphNode) -> dict[str, Any]:
    """Serialize a GraphNode to a JSON-compatible dict.

    Args:
        node: The node to serialize.

    Returns:
        Dict in the renderer's node format.
    """
    return {
        "id": node.id,
        "label": node.label,
        "kind": node.kind.value,
        "depth": node.depth,
        "position": node.position.as_dict(),
        "draggable": node.draggable,
    }


def serialize_edge(edge: GraphEdge) -> dict[str, str]:
    """Serialize a GraphEdge to a JSON-compatible dict."""
    return {"id": edge.id, "source": edge.source, "target": edge.target}


def serialize_positions(positions: Mapping[str, Position]) -> dict[str, dict[str, float]]:
    """Serialize a position update keyed by node id."""
    return {node_id: position.as_dict() for node_id, position in positions.items()}


def serialize_graph(graph: FlowGraph) -> dict[str, Any]:
    """Serialize a FlowGraph to a JSON-compatible dict.

    Args:
        graph: The graph to serialize.

    Returns:
        Dict with nodes, edges, relations, and metadata.
    """
    nodes = [serialize_node(node) for node in graph.iter_nodes()]
    edges = [serialize_edge(edge) for edge in graph.iter_edges()]
    root = graph.root
    return {
        "nodes": nodes,
        "edges": edges,
        "relations": graph.relations.as_dict(),
        "metadata": {
            "node_count": len(nodes),
            "edge_count": len(edges),
            "root": root.id if root else None,
            "layout": {
                "row_height": graph.policy.row_height,
                "spacing": graph.policy.spacing,
            },
        },
    }


def to_outline(graph: FlowGraph, indent: str = "  ") -> str:
    """Render the graph as an indented tree of labels.

    Args:
        graph: The FlowGraph to render.
        indent: Text repeated once per nesting level.

    Returns:
        One line per node, ``"<id> <label>"``, children below their parent.
    """
    root = graph.root
    if root is None:
        return ""

    lines: list[str] = []

    def _walk(node: GraphNode, level: int) -> None:
        lines.append(f"{indent * level}[{node.id}] {node.label}")
        for child in graph.iter_children(node.id):
            _walk(child, level + 1)

    _walk(root, 0)
    return "\n".join(lines) + "\n"
