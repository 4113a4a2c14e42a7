"""
jsonflow.cli - Command-line interface.

Main entry point for the jsonflow CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from jsonflow import __version__
from jsonflow.commands import format_cmd, graph_cmd, init, serve, view


def _add_input_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="JSON file to read ('-' or omitted: stdin)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="jsonflow",
        description="JSON formatting and interactive node-link diagrams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jsonflow format data.json             # Pretty-print JSON
  jsonflow graph data.json              # Diagram nodes/edges as JSON
  jsonflow graph data.json -f outline   # Diagram as an indented tree
  jsonflow view data.json --open        # Standalone draggable HTML diagram
  jsonflow serve data.json              # Live editor with drag API

Configuration:
  jsonflow init                         # Create .jsonflow.toml in current directory

For detailed command help: jsonflow <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"jsonflow {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # format command
    format_parser = subparsers.add_parser(
        "format",
        help="Pretty-print a JSON document",
    )
    _add_input_argument(format_parser)
    format_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indentation width (default: [format].indent from config)",
    )
    format_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write to file instead of stdout",
        metavar="PATH",
    )

    # graph command
    graph_parser = subparsers.add_parser(
        "graph",
        help="Build the diagram of a JSON document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output formats:
  json      Nodes {id, label, kind, position, draggable}, edges {id, source, target},
            and the parent -> children relation index
  outline   One line per node, children indented under their parent
""",
    )
    _add_input_argument(graph_parser)
    graph_parser.add_argument(
        "-f",
        "--format",
        choices=["json", "outline"],
        default="json",
        help="Output format (default: json)",
    )
    graph_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write to file instead of stdout",
        metavar="PATH",
    )

    # view command
    view_parser = subparsers.add_parser(
        "view",
        help="Write a standalone interactive HTML diagram",
    )
    _add_input_argument(view_parser)
    view_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="HTML file to write (default: input name with .html)",
        metavar="PATH",
    )
    view_parser.add_argument(
        "--open",
        action="store_true",
        help="Open the diagram in a browser",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the live editor and drag API server",
    )
    serve_parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="JSON file to preload",
    )
    serve_parser.add_argument("--host", help="Bind address (default: [server].host)")
    serve_parser.add_argument("--port", type=int, help="Port (default: [server].port)")
    serve_parser.add_argument(
        "--open",
        action="store_true",
        help="Open the editor in a browser",
    )

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Create .jsonflow.toml configuration",
    )
    init_parser.add_argument(
        "--directory",
        type=Path,
        help="Where to create the file (default: current directory)",
        metavar="PATH",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing configuration",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install jsonflow[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Dispatch to command handlers
        if args.command == "format":
            return format_cmd.run(args)
        elif args.command == "graph":
            return graph_cmd.run(args)
        elif args.command == "view":
            return view.run(args)
        elif args.command == "serve":
            return serve.run(args)
        elif args.command == "init":
            return init.run(args)
        elif args.command == "version":
            return version_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"jsonflow {__version__}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
