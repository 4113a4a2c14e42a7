"""Live position store for a built diagram.

Renderers and the drag session manager read and write node positions
through this store only. Bulk writes skip ids the store does not know,
mirroring how a renderer applies an update onto its own node set.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from jsonflow.graph.GraphNode import Position

if TYPE_CHECKING:
    from jsonflow.graph.GraphNode import GraphNode


class PositionStore:
    """Mapping from node id to current position, backed by graph nodes."""

    def __init__(self, nodes: Mapping[str, GraphNode]) -> None:
        self._nodes = nodes

    def get(self, node_id: str) -> Position | None:
        """Return a node's current position, or None if it is not in the store."""
        node = self._nodes.get(node_id)
        return node.position if node is not None else None

    def set(self, node_id: str, position: Position) -> bool:
        """Move one node. Returns False if the id is unknown."""
        node = self._nodes.get(node_id)
        if node is None:
            return False
        node.move_to(position)
        return True

    def set_many(self, updates: Mapping[str, Position]) -> list[str]:
        """Apply a bulk position update.

        Args:
            updates: New positions keyed by node id.

        Returns:
            Ids that were present and moved, in update order.
        """
        applied = []
        for node_id, position in updates.items():
            if self.set(node_id, position):
                applied.append(node_id)
        return applied

    def snapshot(self) -> dict[str, Position]:
        """Return a copy of every current position."""
        return {node_id: node.position for node_id, node in self._nodes.items()}

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
