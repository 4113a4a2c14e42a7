"""Drag sessions - rigid subtree movement driven by drag events.

A drag captures the positions of the dragged node and all of its
descendants when it starts. Every move recomputes each captured position
as ``snapshot + (new - snapshot[root])``; nothing is derived from the
previous move, so repeated or duplicated events cannot accumulate drift.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from jsonflow.graph.GraphNode import Position
from jsonflow.graph.positions import PositionStore
from jsonflow.graph.relations import RelationIndex

MISSING_NODE_OFFSET = 10.0


class OverlapPolicy(Enum):
    """What to do with a drag-start whose subtree overlaps an active drag.

    - REJECT: the new drag is refused; its moves are ignored until stopped
      and restarted once the other drag has ended.
    - LAST_WRITER_WINS: both drags run; a shared node ends up wherever the
      most recent move put it.
    """

    REJECT = "reject"
    LAST_WRITER_WINS = "last-writer-wins"

    @classmethod
    def parse(cls, value: str | OverlapPolicy) -> OverlapPolicy:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown overlap policy {value!r} (expected one of: {valid})")


@dataclass(frozen=True)
class DragSnapshot:
    """Positions of a dragged subtree at the moment the drag started.

    Attributes:
        root_id: The node the user grabbed.
        positions: Start positions of the root and every descendant.
    """

    root_id: str
    positions: Mapping[str, Position]

    @property
    def origin(self) -> Position:
        return self.positions[self.root_id]

    def node_ids(self) -> frozenset[str]:
        return frozenset(self.positions)

    def translated(self, new_position: Position) -> dict[str, Position]:
        """Return every captured position shifted so the root lands on ``new_position``."""
        delta = new_position - self.origin
        return {node_id: start + delta for node_id, start in self.positions.items()}


class DragSessionManager:
    """Tracks in-progress drags for one built graph.

    Args:
        relations: Relation index from the build the positions belong to.
        positions: Live position store the moves are written to.
        overlap_policy: Handling of drags whose subtrees overlap.
        missing_offset: Vertical offset used to seed a descendant that is
            missing from the position store.
    """

    def __init__(
        self,
        relations: RelationIndex,
        positions: PositionStore,
        overlap_policy: OverlapPolicy | str = OverlapPolicy.REJECT,
        missing_offset: float = MISSING_NODE_OFFSET,
    ) -> None:
        self.relations = relations
        self.positions = positions
        self.overlap_policy = OverlapPolicy.parse(overlap_policy)
        self.missing_offset = missing_offset
        self._snapshots: dict[str, DragSnapshot] = {}

    def start(self, node_id: str, current_position: Position) -> DragSnapshot | None:
        """Begin dragging ``node_id`` from ``current_position``.

        Returns:
            The captured snapshot, or None when the overlap policy refused
            the drag.
        """
        # A restart of the same id replaces its own snapshot
        self._snapshots.pop(node_id, None)

        captured: dict[str, Position] = {node_id: current_position}
        for descendant in self.relations.iter_descendants(node_id):
            live = self.positions.get(descendant)
            if live is None:
                # Breadth-first order guarantees the parent was captured already
                parent = self.relations.parent_of(descendant)
                base = captured.get(parent, current_position)
                live = base + Position(0.0, self.missing_offset)
            captured[descendant] = live

        if self.overlap_policy is OverlapPolicy.REJECT and self._overlaps(captured):
            return None

        snapshot = DragSnapshot(root_id=node_id, positions=MappingProxyType(captured))
        self._snapshots[node_id] = snapshot
        return snapshot

    def move(self, node_id: str, new_position: Position) -> dict[str, Position]:
        """Move a dragged subtree so its root sits at ``new_position``.

        Returns:
            The positions written to the store; empty when ``node_id`` has
            no active drag.
        """
        snapshot = self._snapshots.get(node_id)
        if snapshot is None:
            return {}
        updates = snapshot.translated(new_position)
        self.positions.set_many(updates)
        return updates

    def stop(self, node_id: str) -> bool:
        """End the drag of ``node_id``. Returns False if none was active."""
        return self._snapshots.pop(node_id, None) is not None

    def reset(self) -> None:
        """Discard every active drag."""
        self._snapshots.clear()

    def is_active(self, node_id: str) -> bool:
        return node_id in self._snapshots

    def active_ids(self) -> list[str]:
        return list(self._snapshots)

    def snapshot_for(self, node_id: str) -> DragSnapshot | None:
        return self._snapshots.get(node_id)

    def _overlaps(self, captured: Mapping[str, Position]) -> bool:
        ids = captured.keys()
        return any(not ids.isdisjoint(s.positions.keys()) for s in self._snapshots.values())
