"""
jsonflow.session - Visualizer session state.

A VisualizerSession is what sits behind one editor window: the input text,
the display mode, the formatted JSON or the parse error, and in visualize
mode the diagram with its live positions and drag manager.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from jsonflow.graph.builder import FlowGraph, GraphBuilder
from jsonflow.graph.drag import MISSING_NODE_OFFSET, DragSessionManager, OverlapPolicy
from jsonflow.graph.GraphNode import Position
from jsonflow.graph.layout import LayoutPolicy
from jsonflow.graph.positions import PositionStore

INVALID_JSON = "Invalid JSON!"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def loads_json(text: str) -> Any:
    """Parse JSON text strictly.

    ``NaN``, ``Infinity`` and ``-Infinity`` are refused: they are not JSON,
    and formatting them would produce text that is not JSON either.

    Raises:
        ValueError: If the text is not valid JSON.
    """
    return json.loads(text, parse_constant=_reject_constant)


class Mode(Enum):
    """Display mode of the session."""

    FORMAT = "format"
    VISUALIZE = "visualize"

    @classmethod
    def parse(cls, value: str | Mode) -> Mode:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown mode {value!r} (expected 'format' or 'visualize')")


class VisualizerSession:
    """Input text, display mode and the derived formatted text / diagram.

    Every change of text or mode recomputes the derived state from scratch.
    In visualize mode that means a full rebuild of the diagram, which also
    ends any drag in progress.
    """

    def __init__(
        self,
        policy: LayoutPolicy | None = None,
        overlap_policy: OverlapPolicy | str = OverlapPolicy.REJECT,
        missing_offset: float = MISSING_NODE_OFFSET,
        indent: int = 2,
        mode: Mode | str = Mode.FORMAT,
    ) -> None:
        self.builder = GraphBuilder(policy)
        self.overlap_policy = OverlapPolicy.parse(overlap_policy)
        self.missing_offset = missing_offset
        self.indent = indent
        self.text = ""
        self.mode = Mode.parse(mode)
        self.formatted = ""
        self.error = ""
        self.error_detail = ""
        self.graph: FlowGraph | None = None
        self.positions: PositionStore | None = None
        self.drags: DragSessionManager | None = None
        self.build_count = 0

    @classmethod
    def from_config(cls, config: dict[str, Any], **kwargs: Any) -> VisualizerSession:
        """Create a session from a resolved config dict."""
        drag = config.get("drag", {}) or {}
        fmt = config.get("format", {}) or {}
        return cls(
            policy=LayoutPolicy.from_config(config),
            overlap_policy=drag.get("overlap_policy", OverlapPolicy.REJECT),
            missing_offset=float(drag.get("missing_node_offset", MISSING_NODE_OFFSET)),
            indent=int(fmt.get("indent", 2)),
            **kwargs,
        )

    # ─────────────────────────────────────────────────────────────────
    # Input
    # ─────────────────────────────────────────────────────────────────

    def set_text(self, text: str) -> None:
        """Replace the input text and recompute."""
        self.text = text
        self._recompute()

    def set_mode(self, mode: Mode | str) -> None:
        """Switch display mode and recompute; selecting the current mode does nothing.

        Raises:
            ValueError: If the mode is not ``format`` or ``visualize``.
        """
        parsed = Mode.parse(mode)
        if parsed is self.mode:
            return
        self.mode = parsed
        self._recompute()

    def _recompute(self) -> None:
        # Only the empty string counts as no input; whitespace is invalid JSON
        if not self.text:
            self.formatted = ""
            self._set_error("", "")
            self._clear_graph()
            return

        try:
            value = loads_json(self.text)
        except ValueError as e:
            self.formatted = ""
            self._set_error(INVALID_JSON, str(e))
            self._clear_graph()
            return

        self.formatted = json.dumps(value, indent=self.indent, ensure_ascii=False)
        self._set_error("", "")
        if self.mode is Mode.VISUALIZE:
            self.rebuild(value)
        else:
            self._clear_graph()

    def _set_error(self, error: str, detail: str) -> None:
        self.error = error
        self.error_detail = detail

    # ─────────────────────────────────────────────────────────────────
    # Graph
    # ─────────────────────────────────────────────────────────────────

    def rebuild(self, value: Any) -> FlowGraph:
        """Replace the diagram with a fresh build of ``value``.

        Active drags reference the old node set, so they are discarded
        together with it.
        """
        if self.drags is not None:
            self.drags.reset()
        graph = self.builder.build(value)
        positions = graph.position_store()
        self.graph = graph
        self.positions = positions
        self.drags = DragSessionManager(
            graph.relations,
            positions,
            overlap_policy=self.overlap_policy,
            missing_offset=self.missing_offset,
        )
        self.build_count += 1
        return graph

    def _clear_graph(self) -> None:
        if self.drags is not None:
            self.drags.reset()
        self.graph = None
        self.positions = None
        self.drags = None

    # ─────────────────────────────────────────────────────────────────
    # Drag events
    # ─────────────────────────────────────────────────────────────────

    def drag_start(self, node_id: str, position: Position) -> bool:
        """Forward a drag-start. Returns True if a drag is now active."""
        if self.drags is None:
            return False
        return self.drags.start(node_id, position) is not None

    def drag_move(self, node_id: str, position: Position) -> dict[str, Position]:
        """Forward a drag-move. Returns the positions written."""
        if self.drags is None:
            return {}
        return self.drags.move(node_id, position)

    def drag_stop(self, node_id: str) -> bool:
        if self.drags is None:
            return False
        return self.drags.stop(node_id)

    # ─────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────

    def copy_text(self) -> str:
        """Return the text the copy action puts on the clipboard."""
        return self.formatted

    def status(self) -> dict[str, Any]:
        """Return a JSON-compatible summary of the session."""
        return {
            "mode": self.mode.value,
            "has_input": bool(self.text),
            "error": self.error,
            "error_detail": self.error_detail,
            "has_graph": self.graph is not None,
            "node_count": self.graph.node_count() if self.graph else 0,
            "edge_count": self.graph.edge_count() if self.graph else 0,
            "active_drags": self.drags.active_ids() if self.drags else [],
            "build_count": self.build_count,
        }
