"""Operator catalog shown in the form builder's condition editor."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from smartflow.conditions.schemas import ConditionOperator


@dataclass(frozen=True)
class OperatorInfo:
    """Display metadata for a condition operator."""

    operator: ConditionOperator
    label: str
    # isEmpty/isNotEmpty ignore the rule value
    needs_value: bool = True


OPERATOR_CATALOG: Tuple[OperatorInfo, ...] = (
    OperatorInfo(ConditionOperator.EQUALS, "Equals"),
    OperatorInfo(ConditionOperator.NOT_EQUALS, "Not equals"),
    OperatorInfo(ConditionOperator.CONTAINS, "Contains"),
    OperatorInfo(ConditionOperator.NOT_CONTAINS, "Does not contain"),
    OperatorInfo(ConditionOperator.IS_EMPTY, "Is empty", needs_value=False),
    OperatorInfo(ConditionOperator.IS_NOT_EMPTY, "Is not empty", needs_value=False),
    OperatorInfo(ConditionOperator.GREATER_THAN, "Greater than"),
    OperatorInfo(ConditionOperator.LESS_THAN, "Less than"),
    OperatorInfo(ConditionOperator.GREATER_THAN_OR_EQUAL, "Greater than or equal"),
    OperatorInfo(ConditionOperator.LESS_THAN_OR_EQUAL, "Less than or equal"),
    OperatorInfo(ConditionOperator.IN, "Is one of"),
    OperatorInfo(ConditionOperator.NOT_IN, "Is not one of"),
    OperatorInfo(ConditionOperator.STARTS_WITH, "Starts with"),
    OperatorInfo(ConditionOperator.ENDS_WITH, "Ends with"),
)

_BY_OPERATOR: Dict[ConditionOperator, OperatorInfo] = {
    info.operator: info for info in OPERATOR_CATALOG
}


def get_operator_info(tag: str) -> Optional[OperatorInfo]:
    """Look up catalog metadata for an operator tag (None if unregistered)."""
    operator = ConditionOperator.from_tag(tag)
    if operator is None:
        return None
    return _BY_OPERATOR[operator]


def operator_needs_value(tag: str) -> bool:
    """Whether the editor should ask for a value. Unknown tags default to True."""
    info = get_operator_info(tag)
    return info.needs_value if info else True
