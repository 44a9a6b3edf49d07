"""Human-readable preview of a condition group.

Produces the sentence shown under the condition editor, e.g.:

    Show when Employment type equals "full-time" AND Salary greater than "50000"
"""

import json
from typing import Any, Iterable, Mapping, Optional

from smartflow.conditions.operators import get_operator_info
from smartflow.conditions.schemas import AvailableField, ConditionGroup, ConditionRule


def format_value(value: Any) -> str:
    """Render a rule value the way it is displayed in the editor."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _describe_rule(rule: ConditionRule, labels: Mapping[str, str]) -> str:
    info = get_operator_info(rule.operator)
    operator_label = info.label if info else rule.operator
    needs_value = info.needs_value if info else True

    text = f"{labels.get(rule.field) or rule.field} {operator_label.lower()}"
    if needs_value and rule.has_value and rule.value not in (None, ""):
        text += f' "{format_value(rule.value)}"'
    return text


def describe_conditions(
    conditions: Optional[ConditionGroup],
    fields: Optional[Iterable[AvailableField]] = None,
) -> Optional[str]:
    """
    Build the visibility preview sentence for a condition group.

    Args:
        conditions: Group to describe
        fields: Fields the rules may reference; their labels replace raw paths

    Returns:
        Preview sentence, or None if there are no rules
    """
    if conditions is None or not conditions.rules:
        return None

    labels = {f.name: f.label for f in fields or []}
    joiner = f" {conditions.operator.upper()} "
    return "Show when " + joiner.join(_describe_rule(rule, labels) for rule in conditions.rules)
