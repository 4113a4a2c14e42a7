"""Relations - Edges and the parent→children index.

This module defines the structure connecting diagram nodes:
- GraphEdge: An immutable parent→child edge
- RelationIndex: Ordered child lists per parent, kept in lockstep with edges
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass


def edge_id(source: str, target: str) -> str:
    """Return the deterministic id of the edge source→target."""
    return f"e{source}-{target}"


@dataclass(frozen=True)
class GraphEdge:
    """A directed edge from a parent node to one of its children.

    Attributes:
        id: Derived from the endpoints, e.g. ``"e1-2"``.
        source: Parent node id.
        target: Child node id.
    """

    id: str
    source: str
    target: str

    @classmethod
    def between(cls, source: str, target: str) -> GraphEdge:
        """Create the edge source→target with its derived id."""
        return cls(id=edge_id(source, target), source=source, target=target)

    def __str__(self) -> str:
        return f"{self.source} --> {self.target}"


class RelationIndex:
    """Mapping from a node id to its ordered list of direct child ids.

    Each child has exactly one parent. Nodes without children have no
    entry, so an index built from a single-node graph is empty.

    Example:
        >>> index = RelationIndex()
        >>> index.add("1", "2")
        >>> index.add("1", "3")
        >>> index.children_of("1")
        ('2', '3')
    """

    def __init__(self) -> None:
        self._children: dict[str, list[str]] = {}
        self._parent: dict[str, str] = {}

    def add(self, parent_id: str, child_id: str) -> None:
        """Append a child to a parent's list.

        Raises:
            ValueError: If the child already has a parent, or is its own parent.
        """
        if parent_id == child_id:
            raise ValueError(f"Node {child_id} cannot be its own child")
        existing = self._parent.get(child_id)
        if existing is not None:
            raise ValueError(f"Node {child_id} already has parent {existing}")
        self._children.setdefault(parent_id, []).append(child_id)
        self._parent[child_id] = parent_id

    def children_of(self, node_id: str) -> tuple[str, ...]:
        """Return the direct children of a node, in insertion order."""
        return tuple(self._children.get(node_id, ()))

    def parent_of(self, node_id: str) -> str | None:
        """Return the parent of a node, or None for the root/unknown ids."""
        return self._parent.get(node_id)

    def has_children(self, node_id: str) -> bool:
        return node_id in self._children

    def iter_descendants(self, node_id: str) -> Iterator[str]:
        """Breadth-first walk of every transitive descendant of a node.

        The node itself is not yielded. A parent is always yielded before
        its children.
        """
        queue = deque(self._children.get(node_id, ()))
        while queue:
            current = queue.popleft()
            yield current
            queue.extend(self._children.get(current, ()))

    def subtree(self, node_id: str) -> list[str]:
        """Return the node followed by all of its descendants."""
        return [node_id, *self.iter_descendants(node_id)]

    def iter_pairs(self) -> Iterator[tuple[str, str]]:
        """Iterate (parent, child) pairs in insertion order."""
        for parent_id, children in self._children.items():
            for child_id in children:
                yield parent_id, child_id

    def as_dict(self) -> dict[str, list[str]]:
        """Return a JSON-compatible copy of the index."""
        return {parent: list(children) for parent, children in self._children.items()}

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._children

    def __len__(self) -> int:
        """Return the number of parents in the index."""
        return len(self._children)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RelationIndex):
            return NotImplemented
        return self._children == other._children

    def __repr__(self) -> str:
        return f"RelationIndex({self._children!r})"


__all__ = ["GraphEdge", "RelationIndex", "edge_id"]
