"""Graph Builder - Constructs a FlowGraph from a parsed JSON value.

The builder walks the value depth-first in pre-order. Every container
gets a node, every entry of a container gets a node one row below it,
and nested containers continue two rows below their parent container.
Node ids, edges and the relation index are all produced in that one pass.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator

from jsonflow.graph.GraphNode import GraphNode, NodeKind, Position
from jsonflow.graph.layout import DEFAULT_LAYOUT, LayoutPolicy
from jsonflow.graph.positions import PositionStore
from jsonflow.graph.relations import GraphEdge, RelationIndex


def is_container(value: Any) -> bool:
    """True for JSON objects and arrays."""
    return isinstance(value, (dict, list))


def format_primitive(value: Any) -> str:
    """Render a JSON primitive the way it reads in JSON text.

    Strings are shown verbatim (no quotes), literals as ``true``/``false``/
    ``null``, and integral floats without a trailing ``.0``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def container_label(value: Any) -> str:
    return "Array" if isinstance(value, list) else "Object"


def entry_label(key: Any, value: Any) -> str:
    """Label of an entry node: the key alone when the value nests further."""
    if is_container(value):
        return str(key)
    return f"{key}: {format_primitive(value)}"


def _iter_entries(value: Any) -> list[tuple[Any, Any]]:
    if isinstance(value, dict):
        return list(value.items())
    if isinstance(value, list):
        return list(enumerate(value))
    return []


@dataclass
class FlowGraph:
    """A complete, positioned diagram of one JSON value.

    The node set, edge set and relation index are always built together
    and replaced together; the graph is a tree rooted at node ``"1"``.
    """

    policy: LayoutPolicy = field(default=DEFAULT_LAYOUT)

    # Internal storage (prefixed) - populated by GraphBuilder
    _nodes: dict[str, GraphNode] = field(default_factory=dict, init=False)
    _edges: list[GraphEdge] = field(default_factory=list, init=False, repr=False)
    _relations: RelationIndex = field(default_factory=RelationIndex, init=False, repr=False)

    @property
    def relations(self) -> RelationIndex:
        return self._relations

    @property
    def root(self) -> GraphNode | None:
        """Return the node for the JSON value itself."""
        return next(iter(self._nodes.values()), None)

    def find_by_id(self, node_id: str) -> GraphNode | None:
        """Find node by ID.

        Args:
            node_id: The node ID to find.

        Returns:
            The matching GraphNode, or None if not found.
        """
        return self._nodes.get(node_id)

    def iter_nodes(self) -> Iterator[GraphNode]:
        """Iterate nodes in id allocation order."""
        yield from self._nodes.values()

    def iter_edges(self) -> Iterator[GraphEdge]:
        """Iterate edges in creation order."""
        yield from self._edges

    def iter_children(self, node_id: str) -> Iterator[GraphNode]:
        for child_id in self._relations.children_of(node_id):
            yield self._nodes[child_id]

    def has_edge(self, source: str, target: str) -> bool:
        return any(e.source == source and e.target == target for e in self._edges)

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def position_store(self) -> PositionStore:
        """Return a live position store over this graph's nodes."""
        return PositionStore(self._nodes)

    def layout(self) -> dict[str, Position]:
        """Return the current position of every node."""
        return {node.id: node.position for node in self._nodes.values()}


class GraphBuilder:
    """Builder for constructing a FlowGraph from a JSON value.

    Usage:
        builder = GraphBuilder()
        graph = builder.build({"a": 1, "b": [true, null]})

    Each call to ``build`` starts a fresh id counter and a fresh relation
    index, so the same builder can be reused and identical input always
    produces identical ids, labels and positions.
    """

    def __init__(self, policy: LayoutPolicy | None = None) -> None:
        self.policy = policy or DEFAULT_LAYOUT
        self._next_id = 1
        self._graph: FlowGraph | None = None

    def build(self, value: Any) -> FlowGraph:
        """Build the diagram of a parsed JSON value.

        Args:
            value: Object, array, string, number, boolean or None.

        Returns:
            A new FlowGraph; nothing is shared with earlier builds.
        """
        self._next_id = 1
        self._graph = FlowGraph(policy=self.policy)
        try:
            self._visit(value, depth=0, center_x=0.0, parent_id=None)
            return self._graph
        finally:
            self._graph = None

    def _allocate_id(self) -> str:
        node_id = str(self._next_id)
        self._next_id += 1
        return node_id

    def _add_node(
        self,
        label: str,
        kind: NodeKind,
        depth: int,
        x: float,
        parent_id: str | None,
    ) -> str:
        graph = self._graph
        node_id = self._allocate_id()
        graph._nodes[node_id] = GraphNode(
            id=node_id,
            label=label,
            position=Position(x, self.policy.row_y(depth)),
            kind=kind,
            depth=depth,
        )
        if parent_id is not None:
            # Edge and relation are recorded together so they cannot disagree
            graph._edges.append(GraphEdge.between(parent_id, node_id))
            graph._relations.add(parent_id, node_id)
        return node_id

    def _visit(self, value: Any, depth: int, center_x: float, parent_id: str | None) -> None:
        if isinstance(value, list):
            kind, label = NodeKind.ARRAY, container_label(value)
        elif isinstance(value, dict):
            kind, label = NodeKind.OBJECT, container_label(value)
        else:
            kind, label = NodeKind.VALUE, format_primitive(value)

        current_id = self._add_node(label, kind, depth, center_x, parent_id)

        entries = _iter_entries(value)
        if not entries:
            return

        entry_depth = self.policy.entry_depth(depth)
        xs = self.policy.child_xs(center_x, len(entries))
        for (key, child), x in zip(entries, xs):
            entry_id = self._add_node(
                entry_label(key, child), NodeKind.ENTRY, entry_depth, x, current_id
            )
            if is_container(child):
                self._visit(child, self.policy.nested_depth(depth), x, entry_id)


def build_graph(value: Any, policy: LayoutPolicy | None = None) -> FlowGraph:
    """Build a FlowGraph for ``value`` with a one-off builder."""
    return GraphBuilder(policy).build(value)
