"""Conditional visibility rules for form screens and fields.

Screens and fields can be shown or hidden based on earlier form answers.
Rules compare one (possibly nested) answer against a literal and are
combined with AND/OR.
"""

from smartflow.conditions.schemas import (
    MISSING,
    AvailableField,
    ConditionGroup,
    ConditionOperator,
    ConditionRule,
    GroupOperator,
)
from smartflow.conditions.serialization import (
    ConditionParseError,
    coerce_conditions,
    parse_conditions,
    serialize_conditions,
)
from smartflow.conditions.evaluator import (
    evaluate,
    evaluate_conditions,
    evaluate_rule,
    evaluate_serialized,
    get_nested_value,
)
from smartflow.conditions.operators import (
    OPERATOR_CATALOG,
    OperatorInfo,
    get_operator_info,
    operator_needs_value,
)
from smartflow.conditions.editing import add_rule, remove_rule, toggle_operator, update_rule
from smartflow.conditions.describe import describe_conditions

__all__ = [
    "MISSING",
    "AvailableField",
    "ConditionGroup",
    "ConditionOperator",
    "ConditionRule",
    "GroupOperator",
    "ConditionParseError",
    "coerce_conditions",
    "parse_conditions",
    "serialize_conditions",
    "evaluate",
    "evaluate_conditions",
    "evaluate_rule",
    "evaluate_serialized",
    "get_nested_value",
    "OPERATOR_CATALOG",
    "OperatorInfo",
    "get_operator_info",
    "operator_needs_value",
    "add_rule",
    "remove_rule",
    "toggle_operator",
    "update_rule",
    "describe_conditions",
]
