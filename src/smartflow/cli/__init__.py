"""CLI package: Typer-based command-line interface.

Usage:
    python -m smartflow.cli --help
    python -m smartflow.cli evaluate --help
"""

from smartflow.cli._app import app

# Register command modules (side-effect imports)
import smartflow.cli.cmd_conditions  # noqa: F401
import smartflow.cli.cmd_forms  # noqa: F401
import smartflow.cli.cmd_serve  # noqa: F401

__all__ = ["app"]
