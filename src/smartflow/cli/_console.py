"""Rich consoles for the smartflow CLI.

Status lines and tables go to stderr; JSON results go to stdout so they
can be piped.
"""

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console(stderr=True)
stdout_console = Console()

_STATUS = {
    "ok": "[green]✓[/green]",
    "warn": "[yellow]![/yellow]",
    "err": "[red]✗[/red]",
}


def _status(kind: str, msg: str) -> None:
    console.print(f"{_STATUS[kind]} {escape(msg)}")


def print_ok(msg: str) -> None:
    _status("ok", msg)


def print_warn(msg: str) -> None:
    _status("warn", msg)


def print_err(msg: str) -> None:
    _status("err", msg)


def output_json(data: Any) -> None:
    """Write a result as JSON to stdout."""
    stdout_console.print_json(data=data)


def output_table(rows: List[Dict[str, Any]], *, title: str = "", columns: Optional[List[str]] = None) -> None:
    """Render rows as a table on stderr."""
    if not rows:
        console.print("[dim]Nothing to show[/dim]")
        return

    cols = columns or list(rows[0])
    table = Table(title=title or None)
    for col in cols:
        table.add_column(col)
    for row in rows:
        table.add_row(*[escape(str(row.get(c, ""))) for c in cols])
    console.print(table)


def visibility_table(report: List[Dict[str, Any]], *, title: str = "") -> None:
    """Render a form visibility report: one row per screen, hidden screens dimmed."""
    table = Table(title=title or None)
    table.add_column("screen")
    table.add_column("title")
    table.add_column("shown")
    table.add_column("visible fields")
    for entry in report:
        shown = entry["visible"]
        table.add_row(
            escape(entry["screen_id"]),
            escape(entry["title"] or ""),
            "[green]yes[/green]" if shown else "[red]no[/red]",
            escape(", ".join(entry["visible_fields"])) or "[dim]-[/dim]",
            style=None if shown else "dim",
        )
    console.print(table)
