"""
jsonflow.commands.graph_cmd - Print the diagram of a JSON document.

- `jsonflow graph data.json` - Nodes, edges and relations as JSON
- `jsonflow graph data.json --format outline` - Indented label tree
"""

from __future__ import annotations

import argparse
import json
import sys

from jsonflow.commands.common import load_config, parse_json_text, read_source, write_output
from jsonflow.graph.builder import build_graph
from jsonflow.graph.layout import LayoutPolicy
from jsonflow.graph.serialize import serialize_graph, to_outline


def run(args: argparse.Namespace) -> int:
    """Run the graph command."""
    config = load_config(args)
    value = parse_json_text(read_source(args.input))
    graph = build_graph(value, LayoutPolicy.from_config(config))

    if args.format == "outline":
        content = to_outline(graph)
    else:
        content = json.dumps(serialize_graph(graph), indent=2)

    write_output(content, args.output, args)
    if args.verbose:
        print(
            f"{graph.node_count()} nodes, {graph.edge_count()} edges",
            file=sys.stderr,
        )
    return 0
