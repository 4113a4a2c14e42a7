"""
jsonflow.commands.format_cmd - Pretty-print JSON.
"""

from __future__ import annotations

import argparse
import json

from jsonflow.commands.common import load_config, parse_json_text, read_source, write_output


def run(args: argparse.Namespace) -> int:
    """Run the format command."""
    config = load_config(args)
    indent = args.indent if args.indent is not None else int(config["format"]["indent"])

    value = parse_json_text(read_source(args.input))
    formatted = json.dumps(value, indent=indent, ensure_ascii=False)
    write_output(formatted, args.output, args)
    return 0
