"""GraphNode - Node representation for the JSON flow diagram.

This module provides the core data structures of a built diagram:
- NodeKind: What part of the JSON value a node stands for
- Position: Immutable (x, y) point with vector arithmetic
- GraphNode: A positioned, draggable node
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any


class NodeKind(Enum):
    """Types of nodes in the diagram."""

    OBJECT = "object"
    ARRAY = "array"
    ENTRY = "entry"
    VALUE = "value"

    @property
    def is_container(self) -> bool:
        """True for nodes that stand for a JSON object or array."""
        return self in (NodeKind.OBJECT, NodeKind.ARRAY)


@dataclass(frozen=True)
class Position:
    """A point on the diagram canvas.

    Positions are values: arithmetic returns new instances, so a stored
    position can never be changed through an alias.
    """

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Position) -> Position:
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x - other.x, self.y - other.y)

    def as_dict(self) -> dict[str, float]:
        """Return the ``{"x": ..., "y": ...}`` form used by renderers."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_any(cls, value: Any) -> Position:
        """Coerce a Position, a mapping with x/y, or an (x, y) pair.

        Raises:
            ValueError: If the value has no usable coordinates.
        """
        if isinstance(value, Position):
            return value
        try:
            if isinstance(value, dict):
                x, y = float(value["x"]), float(value["y"])
            else:
                raw_x, raw_y = value
                x, y = float(raw_x), float(raw_y)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Not a position: {value!r}") from e
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Not a position: {value!r} (coordinates must be finite)")
        return cls(x, y)

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


@dataclass
class GraphNode:
    """A node in the diagram.

    Attributes:
        id: Identifier unique within one build ("1", "2", ...).
        label: Display text derived from the JSON value or entry key.
        position: Current canvas position; moved by drags.
        kind: Which part of the JSON value this node represents.
        depth: Layout row the node was placed on.
        draggable: Always True; carried for renderers.
    """

    id: str
    label: str
    position: Position
    kind: NodeKind = NodeKind.VALUE
    depth: int = 0
    draggable: bool = True

    @property
    def is_container(self) -> bool:
        return self.kind.is_container

    def move_to(self, position: Position) -> None:
        """Place the node at a new position."""
        self.position = position
