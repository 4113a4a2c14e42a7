"""HTML Generator for JSON flow diagrams.

This module renders a FlowGraph as an interactive SVG page.
Uses Jinja2 templates; the formatted JSON panel is highlighted with Pygments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, PackageLoader, select_autoescape

from jsonflow import __version__
from jsonflow.graph.serialize import serialize_graph
from jsonflow.html.highlighting import get_pygments_css, highlight_json

if TYPE_CHECKING:
    from jsonflow.graph.builder import FlowGraph

VIEW_MODES = ("view", "edit")

NODE_WIDTH = 160.0
NODE_HEIGHT = 40.0
CANVAS_PADDING = 60.0


@dataclass
class ViewStats:
    """Statistics for the header display."""

    node_count: int = 0
    edge_count: int = 0
    container_count: int = 0
    max_depth: int = 0


@dataclass
class ViewBox:
    """SVG viewBox enclosing every node of the initial layout."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def __str__(self) -> str:
        return f"{self.x:g} {self.y:g} {self.width:g} {self.height:g}"


class HTMLGenerator:
    """Generates an interactive HTML diagram from a FlowGraph.

    In ``view`` mode the page is self-contained: dragging is computed in
    the browser from the embedded relation index. In ``edit`` mode the page
    expects the jsonflow server and posts drag events to its API.

    Args:
        graph: The diagram to render, or None for an empty page.
        formatted: Formatted JSON text shown beside the diagram.
        version: Version string for display (defaults to package version).
    """

    def __init__(
        self,
        graph: FlowGraph | None,
        formatted: str = "",
        version: str | None = None,
    ) -> None:
        self.graph = graph
        self.formatted = formatted
        self.version = version if version is not None else __version__

    def generate(self, mode: str = "view", **extra: Any) -> str:
        """Generate the complete HTML document.

        Args:
            mode: ``"view"`` for a standalone file, ``"edit"`` for the server page.
            **extra: Additional template context (e.g. ``text``, ``error``).

        Returns:
            Complete HTML document as string.

        Raises:
            ValueError: If mode is unknown.
        """
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode {mode!r} (expected one of {VIEW_MODES})")

        template = self._environment().get_template("diagram.html.j2")
        return template.render(**self.context(mode), **extra)

    def context(self, mode: str) -> dict[str, Any]:
        """Build the template context shared by both view modes."""
        highlighted = highlight_json(self.formatted)
        return {
            "mode": mode,
            "version": self.version,
            "stats": self._compute_stats(),
            "viewbox": self._compute_viewbox(),
            "graph_data": serialize_graph(self.graph) if self.graph else None,
            "node_width": NODE_WIDTH,
            "node_height": NODE_HEIGHT,
            "formatted": self.formatted,
            "highlighted_lines": highlighted["lines"],
            "pygments_css": get_pygments_css(),
        }

    @staticmethod
    def _environment() -> Environment:
        return Environment(
            loader=PackageLoader("jsonflow.html", "templates"),
            autoescape=select_autoescape(["html", "xml", "j2"]),
        )

    def _compute_stats(self) -> ViewStats:
        stats = ViewStats()
        if self.graph is None:
            return stats
        stats.node_count = self.graph.node_count()
        stats.edge_count = self.graph.edge_count()
        for node in self.graph.iter_nodes():
            if node.is_container:
                stats.container_count += 1
            stats.max_depth = max(stats.max_depth, node.depth)
        return stats

    def _compute_viewbox(self) -> ViewBox:
        if self.graph is None or self.graph.node_count() == 0:
            return ViewBox(0, 0, NODE_WIDTH + 2 * CANVAS_PADDING, NODE_HEIGHT + 2 * CANVAS_PADDING)
        xs = [n.position.x for n in self.graph.iter_nodes()]
        ys = [n.position.y for n in self.graph.iter_nodes()]
        # Node positions are box centres horizontally and box tops vertically
        left = min(xs) - NODE_WIDTH / 2 - CANVAS_PADDING
        top = min(ys) - CANVAS_PADDING
        right = max(xs) + NODE_WIDTH / 2 + CANVAS_PADDING
        bottom = max(ys) + NODE_HEIGHT + CANVAS_PADDING
        return ViewBox(left, top, right - left, bottom - top)
