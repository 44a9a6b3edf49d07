"""The `smartflow` Typer application and its global options."""

from pathlib import Path
from typing import Optional

import typer

from smartflow import __version__

app = typer.Typer(
    name="smartflow",
    help="Conditional visibility for SmartFlow forms.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"smartflow {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug diagnostics (parse errors, unknown operators)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show warnings and errors"),
    json_output: bool = typer.Option(False, "--json", help="Write results as JSON to stdout"),
    forms_dir: Optional[Path] = typer.Option(
        None,
        "--forms-dir",
        envvar="SMARTFLOW_FORMS_DIR",
        help="Directory where form commands look up definitions given by name",
    ),
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Print the version and exit"
    ),
):
    """Evaluate visibility conditions and inspect form definitions."""
    if verbose and quiet:
        raise typer.BadParameter("--verbose and --quiet cannot be combined")
    ctx.obj = {
        "verbose": verbose,
        "quiet": quiet,
        "json": json_output,
        "forms_dir": forms_dir,
    }
