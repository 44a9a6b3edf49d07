"""
SmartFlow - Conditional visibility for guided legal document forms.

This package decides which form screens and fields are shown to a user,
based on the answers they have given on earlier screens.
"""

__version__ = "0.1.0"

from smartflow.conditions import (
    ConditionGroup,
    ConditionRule,
    evaluate_conditions,
    parse_conditions,
    serialize_conditions,
)

__all__ = [
    "ConditionGroup",
    "ConditionRule",
    "evaluate_conditions",
    "parse_conditions",
    "serialize_conditions",
]
