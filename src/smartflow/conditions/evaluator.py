"""
Conditional visibility evaluator.

Decides whether a form screen or field is shown, given its condition
specification and the answers collected so far.

Every failure path resolves to visible (True):
- no conditions configured
- an empty rule list
- unparseable or structurally invalid conditions (logged as an error)
- an operator tag that is not registered (logged as a warning)

Type mismatches (e.g. greaterThan against a string) are not errors; they
are defined per operator and usually evaluate to False.

Diagnostics go to the module logger unless the caller passes its own
logger as `diagnostics`.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from smartflow.conditions.schemas import (
    MISSING,
    ConditionGroup,
    ConditionOperator,
    ConditionRule,
    GroupOperator,
)
from smartflow.conditions.serialization import ConditionParseError, coerce_conditions

logger = logging.getLogger(__name__)

Conditions = Union[ConditionGroup, Mapping[str, Any], str, bytes, None]


def get_nested_value(answers: Any, path: str) -> Any:
    """
    Resolve a dotted path against nested answer mappings.

    Only mapping traversal is supported (no list indexes). Any missing key,
    or a step into something that is not a mapping, yields MISSING.

    Example:
        >>> get_nested_value({"employer": {"address": {"country": "CH"}}}, "employer.address.country")
        'CH'
        >>> get_nested_value({"employer": {}}, "employer.address.country")
        MISSING
    """
    current = answers
    for part in path.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return MISSING
    return current


# =============================================================================
# VALUE HELPERS
# =============================================================================


def _is_number(value: Any) -> bool:
    # bool is an int subclass but is not a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _values_equal(left: Any, right: Any) -> bool:
    """Type-strict equality: True never equals 1, "1" never equals 1."""
    if left is MISSING or right is MISSING or left is None or right is None:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if _is_number(left) or _is_number(right):
        return _is_number(left) and _is_number(right) and left == right
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    if _is_array(left) or _is_array(right):
        return (
            _is_array(left)
            and _is_array(right)
            and len(left) == len(right)
            and all(_values_equal(a, b) for a, b in zip(left, right))
        )
    if isinstance(left, Mapping) or isinstance(right, Mapping):
        return (
            isinstance(left, Mapping)
            and isinstance(right, Mapping)
            and left.keys() == right.keys()
            and all(_values_equal(left[k], right[k]) for k in left)
        )
    return left == right


def _includes(items: Any, value: Any) -> bool:
    return any(_values_equal(item, value) for item in items)


def _is_true_like(value: Any) -> bool:
    return value is True or (isinstance(value, str) and value == "true")


def _is_false_like(value: Any) -> bool:
    return value is False or (isinstance(value, str) and value == "false")


def _both_strings(field_value: Any, compare_value: Any) -> bool:
    return isinstance(field_value, str) and isinstance(compare_value, str)


def _both_numbers(field_value: Any, compare_value: Any) -> bool:
    return _is_number(field_value) and _is_number(compare_value)


# =============================================================================
# OPERATORS
# =============================================================================


def _equals(field_value: Any, compare_value: Any) -> bool:
    # Checkbox answers arrive as either booleans or "true"/"false" strings
    if isinstance(compare_value, bool):
        if _is_true_like(field_value):
            return compare_value is True
        if _is_false_like(field_value):
            return compare_value is False
    if isinstance(compare_value, str) and compare_value in ("true", "false"):
        expected = compare_value == "true"
        if _is_true_like(field_value):
            return expected
        if _is_false_like(field_value):
            return not expected
    return _values_equal(field_value, compare_value)


def _not_equals(field_value: Any, compare_value: Any) -> bool:
    return not _equals(field_value, compare_value)


def _contains(field_value: Any, compare_value: Any) -> bool:
    if _both_strings(field_value, compare_value):
        return compare_value.lower() in field_value.lower()
    if _is_array(field_value):
        return _includes(field_value, compare_value)
    return False


def _not_contains(field_value: Any, compare_value: Any) -> bool:
    if _both_strings(field_value, compare_value):
        return compare_value.lower() not in field_value.lower()
    if _is_array(field_value):
        return not _includes(field_value, compare_value)
    return True


def _is_empty(field_value: Any, compare_value: Any = MISSING) -> bool:
    return (
        field_value is MISSING
        or field_value is None
        or (isinstance(field_value, str) and field_value == "")
        or (_is_array(field_value) and len(field_value) == 0)
    )


def _is_not_empty(field_value: Any, compare_value: Any = MISSING) -> bool:
    return not _is_empty(field_value)


def _greater_than(field_value: Any, compare_value: Any) -> bool:
    return _both_numbers(field_value, compare_value) and field_value > compare_value


def _less_than(field_value: Any, compare_value: Any) -> bool:
    return _both_numbers(field_value, compare_value) and field_value < compare_value


def _greater_than_or_equal(field_value: Any, compare_value: Any) -> bool:
    return _both_numbers(field_value, compare_value) and field_value >= compare_value


def _less_than_or_equal(field_value: Any, compare_value: Any) -> bool:
    return _both_numbers(field_value, compare_value) and field_value <= compare_value


def _in(field_value: Any, compare_value: Any) -> bool:
    if _is_array(compare_value):
        return _includes(compare_value, field_value)
    return False


def _not_in(field_value: Any, compare_value: Any) -> bool:
    if _is_array(compare_value):
        return not _includes(compare_value, field_value)
    return True


def _starts_with(field_value: Any, compare_value: Any) -> bool:
    if _both_strings(field_value, compare_value):
        return field_value.lower().startswith(compare_value.lower())
    return False


def _ends_with(field_value: Any, compare_value: Any) -> bool:
    if _both_strings(field_value, compare_value):
        return field_value.lower().endswith(compare_value.lower())
    return False


_OPERATOR_HANDLERS: Dict[ConditionOperator, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUALS: _equals,
    ConditionOperator.NOT_EQUALS: _not_equals,
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.NOT_CONTAINS: _not_contains,
    ConditionOperator.IS_EMPTY: _is_empty,
    ConditionOperator.IS_NOT_EMPTY: _is_not_empty,
    ConditionOperator.GREATER_THAN: _greater_than,
    ConditionOperator.LESS_THAN: _less_than,
    ConditionOperator.GREATER_THAN_OR_EQUAL: _greater_than_or_equal,
    ConditionOperator.LESS_THAN_OR_EQUAL: _less_than_or_equal,
    ConditionOperator.IN: _in,
    ConditionOperator.NOT_IN: _not_in,
    ConditionOperator.STARTS_WITH: _starts_with,
    ConditionOperator.ENDS_WITH: _ends_with,
}


# =============================================================================
# EVALUATION
# =============================================================================


def evaluate_rule(
    rule: ConditionRule,
    answers: Any,
    diagnostics: Optional[logging.Logger] = None,
) -> bool:
    """
    Evaluate a single rule against the answers.

    Args:
        rule: Rule to check
        answers: Current form answers (any shape)
        diagnostics: Logger for warnings; module logger if not given

    Returns:
        Whether the rule passes. Unknown operators pass, as do comparisons
        of values nested beyond the recursion limit.
    """
    log = diagnostics or logger
    operator = rule.known_operator
    if operator is None:
        log.warning(f"Unknown condition operator: {rule.operator}")
        return True

    field_value = get_nested_value(answers, rule.field)
    try:
        return _OPERATOR_HANDLERS[operator](field_value, rule.compare_value)
    except RecursionError:
        log.error(f"Values compared by rule on '{rule.field}' are nested too deeply")
        return True


def evaluate(
    conditions: ConditionGroup,
    answers: Any,
    diagnostics: Optional[logging.Logger] = None,
) -> bool:
    """
    Evaluate a parsed condition group.

    An empty rule list is always visible. With operator 'and' every rule must
    pass; any other operator needs at least one passing rule. All rules are
    evaluated so that every unknown operator gets reported.
    """
    if not conditions.rules:
        return True

    results = [evaluate_rule(rule, answers, diagnostics) for rule in conditions.rules]

    if conditions.operator == GroupOperator.AND.value:
        return all(results)
    return any(results)


def evaluate_serialized(
    conditions_json: Union[str, bytes],
    answers: Any,
    diagnostics: Optional[logging.Logger] = None,
) -> bool:
    """Parse stored condition JSON and evaluate it, failing open on bad input."""
    try:
        group = coerce_conditions(conditions_json)
    except ConditionParseError as e:
        (diagnostics or logger).error(f"Failed to parse conditions JSON: {e}")
        return True
    return evaluate(group, answers, diagnostics)


def evaluate_conditions(
    conditions: Conditions,
    answers: Any,
    diagnostics: Optional[logging.Logger] = None,
) -> bool:
    """
    Decide whether a screen or field is visible.

    Args:
        conditions: ConditionGroup, its dict form, stored JSON text, or None
        answers: Current form answers, possibly nested
        diagnostics: Logger for parse errors and unknown operators

    Returns:
        True if the element should be shown. Never raises.

    Example:
        >>> evaluate_conditions(
        ...     {"operator": "or", "rules": [
        ...         {"field": "salary", "operator": "greaterThan", "value": 50000},
        ...         {"field": "hasEquity", "operator": "equals", "value": True},
        ...     ]},
        ...     {"salary": 40000, "hasEquity": True},
        ... )
        True
    """
    if conditions is None:
        return True

    if isinstance(conditions, ConditionGroup):
        return evaluate(conditions, answers, diagnostics)

    if isinstance(conditions, (str, bytes, bytearray)):
        if not conditions:
            return True
        return evaluate_serialized(conditions, answers, diagnostics)

    try:
        group = coerce_conditions(conditions)
    except ConditionParseError as e:
        (diagnostics or logger).error(f"Invalid conditions: {e}")
        return True
    return evaluate(group, answers, diagnostics)
