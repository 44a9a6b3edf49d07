"""Condition commands: evaluate, describe, validate, list operators."""

import typer
from rich.markup import escape

from smartflow.cli._app import app
from smartflow.cli._common import load_answers_arg, load_conditions_arg, setup_logging
from smartflow.cli._console import console, output_json, output_table, print_err, print_ok, print_warn
from smartflow.conditions import (
    OPERATOR_CATALOG,
    ConditionOperator,
    ConditionParseError,
    coerce_conditions,
    describe_conditions,
    evaluate_conditions,
    serialize_conditions,
)


@app.command("evaluate", help="Decide whether conditions make an element visible.")
def evaluate_cmd(
    ctx: typer.Context,
    conditions: str = typer.Argument(..., help="Conditions as inline JSON or a JSON/YAML file"),
    answers: str = typer.Option(None, "--answers", "-a", help="Answers as inline JSON or a JSON/YAML file"),
):
    """Evaluate conditions against answers. Malformed conditions evaluate as visible."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    visible = evaluate_conditions(load_conditions_arg(conditions), load_answers_arg(answers))

    if ctx.obj["json"]:
        output_json({"visible": visible})
    elif visible:
        print_ok("Visible")
    else:
        print_warn("Hidden")


@app.command("describe", help="Print the visibility preview sentence for conditions.")
def describe_cmd(
    ctx: typer.Context,
    conditions: str = typer.Argument(..., help="Conditions as inline JSON or a JSON/YAML file"),
):
    """Describe conditions in plain language."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    try:
        group = coerce_conditions(load_conditions_arg(conditions))
    except ConditionParseError as e:
        print_err(str(e))
        raise SystemExit(1)

    description = describe_conditions(group)
    if ctx.obj["json"]:
        output_json({"description": description})
    elif description:
        console.print(escape(description))
    else:
        console.print("[dim]No conditions (always visible)[/dim]")


@app.command("validate", help="Strictly validate conditions before storing them.")
def validate_cmd(
    ctx: typer.Context,
    conditions: str = typer.Argument(..., help="Conditions as inline JSON or a JSON/YAML file"),
):
    """Validate conditions; exit code 1 if invalid or using unknown operators."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    try:
        group = coerce_conditions(load_conditions_arg(conditions))
    except ConditionParseError as e:
        if ctx.obj["json"]:
            output_json({"valid": False, "error": str(e)})
        else:
            print_err(str(e))
        raise SystemExit(1)

    unknown = [r.operator for r in group.rules if ConditionOperator.from_tag(r.operator) is None]
    if ctx.obj["json"]:
        output_json(
            {"valid": not unknown, "unknown_operators": unknown, "serialized": serialize_conditions(group)}
        )
    elif unknown:
        print_err(f"Unknown operators: {', '.join(unknown)}")
    else:
        print_ok(f"Valid ({len(group.rules)} rule{'s' if len(group.rules) != 1 else ''}, {group.operator.upper()})")

    if unknown:
        raise SystemExit(1)


@app.command("operators", help="List supported condition operators.")
def operators_cmd(ctx: typer.Context):
    """Show the operator catalog."""
    rows = [
        {"operator": info.operator.value, "label": info.label, "needs_value": info.needs_value}
        for info in OPERATOR_CATALOG
    ]
    if ctx.obj["json"]:
        output_json(rows)
    else:
        output_table(rows, title="Condition operators")
