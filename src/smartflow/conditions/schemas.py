"""Pydantic schemas for condition specifications.

A condition specification is stored as JSON text next to a form screen or
field definition:

    {"operator": "and", "rules": [{"field": "employmentType",
                                   "operator": "equals",
                                   "value": "full-time"}]}
"""

import math
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator


class _Missing:
    """Marker for a value that is absent, as opposed to an explicit null."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class ConditionOperator(str, Enum):
    """Comparison operators a rule can apply to a field."""

    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    CONTAINS = "contains"
    NOT_CONTAINS = "notContains"
    IS_EMPTY = "isEmpty"
    IS_NOT_EMPTY = "isNotEmpty"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    IN = "in"
    NOT_IN = "notIn"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["ConditionOperator"]:
        """Return the operator for a tag, or None if the tag is not registered."""
        try:
            return cls(tag)
        except ValueError:
            return None


class GroupOperator(str, Enum):
    """How the rules of a group are combined."""

    AND = "and"
    OR = "or"


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _contains_non_finite(value: Any) -> bool:
    """True if a literal holds NaN or an infinity at any depth."""
    stack = [value]
    seen = set()
    while stack:
        item = stack.pop()
        if isinstance(item, float) and not math.isfinite(item):
            return True
        if id(item) in seen:
            continue
        if isinstance(item, (Mapping, list, tuple)):
            seen.add(id(item))
        if isinstance(item, Mapping):
            stack.extend(item.values())
        elif isinstance(item, (list, tuple)):
            stack.extend(item)
    return False


class ConditionRule(BaseModel):
    """A single check of one form field against a literal.

    The operator tag is kept as the raw string so that configs written with
    operators this version does not know still load (they evaluate as visible).
    """

    field: str = Field(..., description="Dotted path into the answers, e.g. 'employer.address.country'")
    operator: str = Field(..., description="Operator tag, e.g. 'equals'")
    value: Any = Field(None, description="Literal to compare against (unused by isEmpty/isNotEmpty)")

    @field_validator("operator", mode="before")
    @classmethod
    def normalize_operator(cls, v: Any) -> Any:
        """Accept ConditionOperator members as well as raw tags."""
        return _enum_value(v)

    @field_validator("value")
    @classmethod
    def reject_non_finite(cls, v: Any) -> Any:
        """NaN and Infinity have no JSON form, so such a rule could not be stored."""
        if _contains_non_finite(v):
            raise ValueError("Rule value must not contain NaN or Infinity")
        return v

    @property
    def has_value(self) -> bool:
        """True if a value was supplied (explicit null counts as supplied)."""
        return "value" in self.model_fields_set

    @property
    def compare_value(self) -> Any:
        """The literal to compare against, or MISSING if none was supplied."""
        return self.value if self.has_value else MISSING

    @property
    def known_operator(self) -> Optional[ConditionOperator]:
        return ConditionOperator.from_tag(self.operator)

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form; 'value' is omitted when it was never supplied."""
        return self.model_dump(mode="json", exclude_unset=True)


class ConditionGroup(BaseModel):
    """Rules combined with a single AND/OR operator.

    Groups are flat: a rule list cannot contain another group.
    """

    operator: str = Field(
        default=GroupOperator.AND.value,
        description="'and' requires all rules to pass, 'or' requires at least one",
    )
    rules: List[ConditionRule] = Field(default_factory=list)

    @field_validator("operator", mode="before")
    @classmethod
    def normalize_operator(cls, v: Any) -> Any:
        return _enum_value(v)

    @field_validator("rules", mode="before")
    @classmethod
    def default_rules(cls, v: Any) -> Any:
        """A null rule list means no rules."""
        return [] if v is None else v

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operator": self.operator,
            "rules": [rule.to_dict() for rule in self.rules],
        }


class AvailableField(BaseModel):
    """A form field that a condition may reference."""

    name: str
    label: str = ""
    screen_title: str = ""
    type: str = "text"
