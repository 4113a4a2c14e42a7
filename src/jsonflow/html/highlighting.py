"""Syntax highlighting for the formatted JSON panel.

Shared by the static HTML generator (view mode) and the Flask server
(edit mode), so both pages render the formatted text identically.
"""

from __future__ import annotations

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import JsonLexer


def highlight_json(raw_content: str) -> dict:
    """Highlight JSON text with Pygments.

    Args:
        raw_content: Formatted JSON text.

    Returns:
        Dictionary with keys:
        - ``lines``: list of HTML strings (one per line)
        - ``language``: always ``"json"``
        - ``raw``: the original raw content
    """
    if not raw_content:
        return {"lines": [], "language": "json", "raw": raw_content}

    formatter = HtmlFormatter(nowrap=True)
    # Highlight the full content, then split by line so multi-line tokens keep state
    highlighted_lines = pygments_highlight(raw_content, JsonLexer(), formatter).split("\n")

    # Pygments adds a trailing empty string after the final newline
    if highlighted_lines and highlighted_lines[-1] == "":
        highlighted_lines.pop()

    return {
        "lines": highlighted_lines,
        "language": "json",
        "raw": raw_content,
    }


def get_pygments_css(style: str = "default", scope: str = ".highlight") -> str:
    """Generate scoped Pygments CSS for syntax highlighting.

    Args:
        style: Pygments style name (e.g., ``"default"``, ``"monokai"``).
        scope: CSS selector to scope the rules under.
    """
    return HtmlFormatter(style=style).get_style_defs(scope)
