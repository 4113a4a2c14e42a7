"""
jsonflow.commands - CLI command implementations
"""

__all__ = [
    "format_cmd",
    "graph_cmd",
    "init",
    "serve",
    "view",
]
