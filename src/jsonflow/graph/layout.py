"""Layout policy for the JSON flow diagram.

Children are centred under their parent, one fixed-width slot each. Entry
nodes sit one row below their container; a nested container sits one more
row below its entry node, so key labels never share a row with the values
they nest.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ROW_HEIGHT = 80.0
SPACING = 250.0
ENTRY_ROW_OFFSET = 1
NESTED_DEPTH_STEP = 2


@dataclass(frozen=True)
class LayoutPolicy:
    """Row and slot geometry used by the graph builder.

    Attributes:
        row_height: Vertical distance between layout rows.
        spacing: Horizontal slot width given to each child.
        entry_row_offset: Rows between a container and its entry nodes.
        nested_depth_step: Rows between a container and a nested container.
    """

    row_height: float = ROW_HEIGHT
    spacing: float = SPACING
    entry_row_offset: int = ENTRY_ROW_OFFSET
    nested_depth_step: int = NESTED_DEPTH_STEP

    def __post_init__(self) -> None:
        if self.row_height <= 0:
            raise ValueError(f"row_height must be positive, got {self.row_height}")
        if self.spacing <= 0:
            raise ValueError(f"spacing must be positive, got {self.spacing}")
        if self.entry_row_offset < 1:
            raise ValueError(f"entry_row_offset must be >= 1, got {self.entry_row_offset}")
        if self.nested_depth_step <= self.entry_row_offset:
            raise ValueError(
                "nested_depth_step must place nested containers below their entry row "
                f"(got {self.nested_depth_step} <= {self.entry_row_offset})"
            )

    def row_y(self, depth: int) -> float:
        """Return the y coordinate of a layout row."""
        return depth * self.row_height

    def entry_depth(self, depth: int) -> int:
        return depth + self.entry_row_offset

    def nested_depth(self, depth: int) -> int:
        return depth + self.nested_depth_step

    def child_xs(self, center_x: float, count: int) -> list[float]:
        """Return x coordinates of ``count`` children centred under ``center_x``."""
        total_width = count * self.spacing
        start_x = center_x - total_width / 2 + self.spacing / 2
        return [start_x + i * self.spacing for i in range(count)]

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> LayoutPolicy:
        """Build a policy from the ``[layout]`` section of a config dict."""
        section = config.get("layout", {}) or {}
        return cls(
            row_height=float(section.get("row_height", ROW_HEIGHT)),
            spacing=float(section.get("spacing", SPACING)),
            entry_row_offset=int(section.get("entry_row_offset", ENTRY_ROW_OFFSET)),
            nested_depth_step=int(section.get("nested_depth_step", NESTED_DEPTH_STEP)),
        )


DEFAULT_LAYOUT = LayoutPolicy()
