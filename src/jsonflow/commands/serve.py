"""
jsonflow.commands.serve - Run the live diagram server.
"""

from __future__ import annotations

import argparse
import sys
import threading
import webbrowser

from jsonflow.commands.common import load_config, read_source
from jsonflow.session import Mode, VisualizerSession


def build_session(args: argparse.Namespace, config: dict) -> VisualizerSession:
    """Create the session the server edits, preloaded with the input file."""
    session = VisualizerSession.from_config(config, mode=Mode.VISUALIZE)
    if args.input is not None:
        session.set_text(read_source(args.input))
        if session.error and not args.quiet:
            print(f"Warning: {session.error} {session.error_detail}", file=sys.stderr)
    return session


def run(args: argparse.Namespace) -> int:
    """Run the serve command."""
    from jsonflow.server import create_app

    config = load_config(args)
    host = args.host or config["server"]["host"]
    port = args.port or int(config["server"]["port"])

    session = build_session(args, config)
    app = create_app(session, config)

    url = f"http://{host}:{port}/"
    if not args.quiet:
        print(f"jsonflow serving on {url} (Ctrl+C to stop)", file=sys.stderr)
    if args.open:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()

    # Single-threaded: drag moves must be applied in the order they arrive
    app.run(host=host, port=port, threaded=False, debug=False, use_reloader=False)
    return 0
