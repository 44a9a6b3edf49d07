"""Apply stored visibility conditions to a form definition.

This is what the form renderer calls on every change to the answers: it
filters screens and fields down to the ones that should be shown.
"""

import logging
from typing import Any, Dict, List, Optional

from smartflow.conditions.evaluator import evaluate_conditions
from smartflow.forms.schemas import FormDefinition, FormField, FormScreen


def is_screen_visible(
    screen: FormScreen,
    answers: Any,
    diagnostics: Optional[logging.Logger] = None,
) -> bool:
    return evaluate_conditions(screen.conditions, answers, diagnostics)


def is_field_visible(
    field: FormField,
    answers: Any,
    diagnostics: Optional[logging.Logger] = None,
) -> bool:
    return evaluate_conditions(field.conditions, answers, diagnostics)


def visible_screens(
    form: FormDefinition,
    answers: Any,
    diagnostics: Optional[logging.Logger] = None,
) -> List[FormScreen]:
    """Screens to show, in form order."""
    return [s for s in form.screens if is_screen_visible(s, answers, diagnostics)]


def visible_fields(
    screen: FormScreen,
    answers: Any,
    diagnostics: Optional[logging.Logger] = None,
) -> List[FormField]:
    """Fields of a screen to show, in screen order."""
    return [f for f in screen.fields if is_field_visible(f, answers, diagnostics)]


def visibility_report(
    form: FormDefinition,
    answers: Any,
    diagnostics: Optional[logging.Logger] = None,
) -> List[Dict[str, Any]]:
    """Per-screen visibility summary.

    Returns:
        One entry per screen in form order:
        {"screen_id", "title", "visible", "visible_fields"}.
        Hidden screens report no visible fields.
    """
    report = []
    for screen in form.screens:
        visible = is_screen_visible(screen, answers, diagnostics)
        fields = visible_fields(screen, answers, diagnostics) if visible else []
        report.append({
            "screen_id": screen.id,
            "title": screen.title,
            "visible": visible,
            "visible_fields": [f.name for f in fields],
        })
    return report
