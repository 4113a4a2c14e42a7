"""
jsonflow.commands.init - Create a .jsonflow.toml with the default settings.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import tomlkit

from jsonflow.config import CONFIG_FILENAME, default_config_document


def run(args: argparse.Namespace) -> int:
    """Run the init command."""
    directory: Path = args.directory or Path.cwd()
    config_path = directory / CONFIG_FILENAME

    if config_path.exists() and not args.force:
        print(f"{config_path} already exists (use --force to overwrite).", file=sys.stderr)
        return 1

    directory.mkdir(parents=True, exist_ok=True)
    config_path.write_text(tomlkit.dumps(default_config_document()), encoding="utf-8")
    if not args.quiet:
        print(f"Created {config_path}")
    return 0
