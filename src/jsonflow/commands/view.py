"""
jsonflow.commands.view - Write a standalone interactive HTML diagram.
"""

from __future__ import annotations

import argparse
import json
import sys
import webbrowser
from pathlib import Path

from jsonflow.commands.common import load_config, parse_json_text, read_source
from jsonflow.graph.builder import build_graph
from jsonflow.graph.layout import LayoutPolicy
from jsonflow.html.generator import HTMLGenerator


def default_output(source: str | None) -> Path:
    """``data.json`` → ``data.html``; stdin → ``jsonflow.html``."""
    if source is None or source == "-":
        return Path("jsonflow.html")
    return Path(source).with_suffix(".html")


def run(args: argparse.Namespace) -> int:
    """Run the view command."""
    config = load_config(args)
    value = parse_json_text(read_source(args.input))
    graph = build_graph(value, LayoutPolicy.from_config(config))
    formatted = json.dumps(value, indent=int(config["format"]["indent"]), ensure_ascii=False)

    html = HTMLGenerator(graph, formatted=formatted).generate(mode="view")

    output: Path = args.output or default_output(args.input)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")

    if not args.quiet:
        print(f"Wrote {output} ({graph.node_count()} nodes)", file=sys.stderr)
    if args.open:
        webbrowser.open(output.resolve().as_uri())
    return 0
