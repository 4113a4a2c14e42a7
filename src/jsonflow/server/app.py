"""jsonflow.server.app - Flask app factory and REST API routes.

This is a THIN REST wrapper: all state lives in a VisualizerSession and all
graph logic in jsonflow.graph. Nothing here computes positions itself.

State pattern:
    _state = {"session": session, "config": config, "start_time": time.time()}
"""

from __future__ import annotations

import time
from typing import Any

from flask import Flask, jsonify, request
from flask_cors import CORS

from jsonflow.graph.GraphNode import Position
from jsonflow.graph.serialize import serialize_graph, serialize_positions
from jsonflow.html.generator import HTMLGenerator
from jsonflow.html.highlighting import highlight_json
from jsonflow.session import VisualizerSession


def _bad_request(message: str):
    return jsonify({"success": False, "error": message}), 400


def _read_drag_event(require_position: bool) -> tuple[str, Position | None] | str:
    """Extract ``node_id`` (and ``position``) from a drag event body.

    Returns the parsed values, or an error message string.
    """
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return "JSON object body required"
    node_id = data.get("node_id")
    if not isinstance(node_id, (str, int)) or node_id == "":
        return "node_id required"
    if not require_position:
        return str(node_id), None
    try:
        position = Position.from_any(data.get("position"))
    except ValueError as e:
        return str(e)
    return str(node_id), position


def create_app(session: VisualizerSession, config: dict[str, Any]) -> Flask:
    """Create the Flask application with REST API routes.

    Args:
        session: The session the browser page edits.
        config: Resolved jsonflow configuration dict.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    CORS(app)

    # Disable browser caching (the page always reflects live session state)
    @app.after_request
    def _no_cache(response):
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response

    _state: dict[str, Any] = {
        "session": session,
        "config": config,
        "start_time": time.time(),
    }

    # ─────────────────────────────────────────────────────────────────
    # Template route
    # ─────────────────────────────────────────────────────────────────

    @app.route("/")
    def index():
        """Serve the live diagram page."""
        s: VisualizerSession = _state["session"]
        gen = HTMLGenerator(s.graph, formatted=s.formatted)
        return gen.generate(mode="edit", text=s.text, error=s.error)

    # ─────────────────────────────────────────────────────────────────
    # Read-only GET endpoints
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/status")
    def api_status():
        """GET /api/status - Session summary."""
        result = _state["session"].status()
        result["uptime"] = round(time.time() - _state["start_time"], 3)
        return jsonify(result)

    @app.route("/api/graph")
    def api_graph():
        """GET /api/graph - Nodes, edges and relations at their live positions."""
        s: VisualizerSession = _state["session"]
        if s.graph is None:
            return jsonify({"nodes": [], "edges": [], "relations": {}, "metadata": None})
        return jsonify(serialize_graph(s.graph))

    @app.route("/api/formatted")
    def api_formatted():
        """GET /api/formatted - Formatted JSON with highlighted lines."""
        s: VisualizerSession = _state["session"]
        highlighted = highlight_json(s.formatted)
        return jsonify(
            {
                "formatted": s.copy_text(),
                "highlighted_lines": highlighted["lines"],
                "error": s.error,
                "error_detail": s.error_detail,
            }
        )

    # ─────────────────────────────────────────────────────────────────
    # Input POST endpoints
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/input", methods=["POST"])
    def api_input():
        """POST /api/input - Replace the input text."""
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("text"), str):
            return _bad_request("text required")
        s: VisualizerSession = _state["session"]
        s.set_text(data["text"])
        return jsonify({"success": True, **s.status()})

    @app.route("/api/mode", methods=["POST"])
    def api_mode():
        """POST /api/mode - Switch between format and visualize."""
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict) or not data.get("mode"):
            return _bad_request("mode required")
        s: VisualizerSession = _state["session"]
        try:
            s.set_mode(data["mode"])
        except ValueError as e:
            return _bad_request(str(e))
        return jsonify({"success": True, **s.status()})

    # ─────────────────────────────────────────────────────────────────
    # Drag event endpoints
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/drag/start", methods=["POST"])
    def api_drag_start():
        """POST /api/drag/start - Capture the subtree under node_id."""
        parsed = _read_drag_event(require_position=True)
        if isinstance(parsed, str):
            return _bad_request(parsed)
        node_id, position = parsed
        active = _state["session"].drag_start(node_id, position)
        return jsonify({"success": True, "node_id": node_id, "active": active})

    @app.route("/api/drag/move", methods=["POST"])
    def api_drag_move():
        """POST /api/drag/move - Move the captured subtree; returns written positions."""
        parsed = _read_drag_event(require_position=True)
        if isinstance(parsed, str):
            return _bad_request(parsed)
        node_id, position = parsed
        updates = _state["session"].drag_move(node_id, position)
        return jsonify(
            {"success": True, "node_id": node_id, "positions": serialize_positions(updates)}
        )

    @app.route("/api/drag/stop", methods=["POST"])
    def api_drag_stop():
        """POST /api/drag/stop - End the drag of node_id."""
        parsed = _read_drag_event(require_position=False)
        if isinstance(parsed, str):
            return _bad_request(parsed)
        node_id, _ = parsed
        stopped = _state["session"].drag_stop(node_id)
        return jsonify({"success": True, "node_id": node_id, "stopped": stopped})

    # ─────────────────────────────────────────────────────────────────
    # Server lifecycle endpoints
    # ─────────────────────────────────────────────────────────────────

    @app.route("/api/shutdown", methods=["POST"])
    def api_shutdown():
        """POST /api/shutdown - Gracefully stop the server."""
        import os
        import sys
        import threading

        print("\nShutdown requested via API.", file=sys.stderr)
        # Respond before exiting so the caller gets confirmation
        response = jsonify({"success": True, "message": "Server shutting down"})
        if not app.config.get("TESTING"):
            threading.Timer(0.5, lambda: os._exit(0)).start()
        return response

    return app
