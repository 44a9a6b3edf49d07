"""Rule-list edits performed by the form builder's condition editor.

Each function returns a new ConditionGroup and leaves its input untouched.
"""

from typing import Any, Optional

from smartflow.conditions.schemas import (
    ConditionGroup,
    ConditionOperator,
    ConditionRule,
    GroupOperator,
)


def add_rule(conditions: Optional[ConditionGroup], field: str = "") -> ConditionGroup:
    """Append a blank `equals` rule, creating an AND group if there is none yet."""
    new_rule = ConditionRule(field=field, operator=ConditionOperator.EQUALS, value="")
    if conditions is None:
        return ConditionGroup(operator=GroupOperator.AND, rules=[new_rule])
    return ConditionGroup(
        operator=conditions.operator,
        rules=[*conditions.rules, new_rule],
    )


def update_rule(conditions: ConditionGroup, index: int, **changes: Any) -> ConditionGroup:
    """Replace fields of the rule at `index` (field, operator and/or value).

    Raises:
        IndexError: If there is no rule at `index`
    """
    if not 0 <= index < len(conditions.rules):
        raise IndexError(f"No rule at index {index} (group has {len(conditions.rules)})")

    unknown = set(changes) - set(ConditionRule.model_fields)
    if unknown:
        raise TypeError(f"Unknown rule attributes: {sorted(unknown)}")

    rules = list(conditions.rules)
    rules[index] = ConditionRule.model_validate({**rules[index].to_dict(), **changes})
    return ConditionGroup(operator=conditions.operator, rules=rules)


def remove_rule(conditions: ConditionGroup, index: int) -> Optional[ConditionGroup]:
    """Drop the rule at `index`. Removing the last rule clears the conditions (None)."""
    if not 0 <= index < len(conditions.rules):
        raise IndexError(f"No rule at index {index} (group has {len(conditions.rules)})")

    rules = [rule for i, rule in enumerate(conditions.rules) if i != index]
    if not rules:
        return None
    return ConditionGroup(operator=conditions.operator, rules=rules)


def toggle_operator(conditions: ConditionGroup) -> ConditionGroup:
    """Switch between matching ALL rules (and) and ANY rule (or)."""
    operator = GroupOperator.OR if conditions.operator == GroupOperator.AND.value else GroupOperator.AND
    return ConditionGroup(operator=operator, rules=list(conditions.rules))
