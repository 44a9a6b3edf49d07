"""Form commands: visibility report and condition field pickers."""

import typer

from smartflow.cli._app import app
from smartflow.cli._common import load_answers_arg, load_form_arg, setup_logging
from smartflow.cli._console import output_json, output_table, print_err, visibility_table
from smartflow.forms import available_fields, visibility_report

FORM_ARG_HELP = "Form definition file (.yaml/.yml/.json), or its name in --forms-dir"


@app.command("visibility", help="Show which screens and fields are visible for given answers.")
def visibility_cmd(
    ctx: typer.Context,
    form: str = typer.Argument(..., help=FORM_ARG_HELP),
    answers: str = typer.Option(None, "--answers", "-a", help="Answers as inline JSON or a JSON/YAML file"),
):
    """Print the per-screen visibility report."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    definition = load_form_arg(form, ctx.obj["forms_dir"])
    report = visibility_report(definition, load_answers_arg(answers))

    if ctx.obj["json"]:
        output_json(report)
    else:
        visibility_table(report, title=definition.title or definition.template_id)


@app.command("fields", help="List fields a screen's (or field's) conditions may reference.")
def fields_cmd(
    ctx: typer.Context,
    form: str = typer.Argument(..., help=FORM_ARG_HELP),
    screen_id: str = typer.Argument(..., help="Screen being edited"),
    field_id: str = typer.Option(None, "--field-id", help="Field being edited on that screen"),
):
    """Print available fields for the condition editor."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    definition = load_form_arg(form, ctx.obj["forms_dir"])
    if definition.get_screen(screen_id) is None:
        print_err(f"Screen not found: {screen_id}")
        raise SystemExit(1)

    rows = [f.model_dump() for f in available_fields(definition, screen_id, field_id)]
    if ctx.obj["json"]:
        output_json(rows)
    else:
        output_table(rows, title=f"Fields available to {screen_id}", columns=["name", "label", "screen_title", "type"])
