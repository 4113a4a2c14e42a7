"""
jsonflow.commands.common - Helpers shared by the CLI commands.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from jsonflow.session import INVALID_JSON, loads_json


def read_source(source: str | Path | None) -> str:
    """Read input text from a file, or from stdin for ``-`` / None."""
    if source is None or str(source) == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    return path.read_text(encoding="utf-8")


def parse_json_text(text: str) -> Any:
    """Parse JSON text.

    Raises:
        ValueError: With the parser's message when the text is not valid JSON.
    """
    try:
        return loads_json(text)
    except ValueError as e:
        raise ValueError(f"{INVALID_JSON} {e}") from e


def load_config(args: argparse.Namespace) -> dict[str, Any]:
    from jsonflow.config import get_config

    return get_config(getattr(args, "config", None))


def write_output(content: str, output: Path | None, args: argparse.Namespace) -> None:
    """Write to ``output`` if given, otherwise to stdout."""
    if output is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    if not getattr(args, "quiet", False):
        print(f"Wrote {output}", file=sys.stderr)
