"""Parsing and serialization of stored condition specifications.

Conditions are persisted as JSON text alongside form screen and field
definitions. `parse_conditions` is lenient (logs and returns None on bad
input) because it runs on every form render; `coerce_conditions` is the
strict variant used where a caller wants to report the problem.
"""

import json
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from smartflow.conditions.schemas import ConditionGroup

logger = logging.getLogger(__name__)


class ConditionParseError(ValueError):
    """Raised when a condition specification cannot be turned into a ConditionGroup."""
    pass


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Unsupported JSON constant: {name}")


def coerce_conditions(conditions: Any) -> ConditionGroup:
    """Convert JSON text, a mapping, or a ConditionGroup into a ConditionGroup.

    Args:
        conditions: Serialized JSON (str/bytes), a mapping, or a ConditionGroup

    Returns:
        Validated ConditionGroup

    Raises:
        ConditionParseError: If the input is not valid JSON (including
            NaN/Infinity and nesting beyond the recursion limit) or does not
            describe a condition group
    """
    if isinstance(conditions, ConditionGroup):
        return conditions

    if isinstance(conditions, (str, bytes, bytearray)):
        try:
            conditions = json.loads(conditions, parse_constant=_reject_constant)
        except ValueError as e:
            raise ConditionParseError(f"Invalid conditions JSON: {e}") from e
        except RecursionError as e:
            raise ConditionParseError("Invalid conditions JSON: nested too deeply") from e

    if not isinstance(conditions, Mapping):
        raise ConditionParseError(
            f"Conditions must be a JSON object, got {type(conditions).__name__}"
        )

    try:
        return ConditionGroup.model_validate(dict(conditions))
    except ValidationError as e:
        raise ConditionParseError(f"Invalid condition group: {e}") from e


def parse_conditions(
    conditions_json: Optional[str],
    diagnostics: Optional[logging.Logger] = None,
) -> Optional[ConditionGroup]:
    """Parse stored condition JSON into a ConditionGroup.

    Returns None for empty input or when parsing fails. Failures are logged
    to `diagnostics` (module logger by default) and never raised.
    """
    if not conditions_json:
        return None

    log = diagnostics or logger
    try:
        return coerce_conditions(conditions_json)
    except ConditionParseError as e:
        log.error(f"Failed to parse conditions JSON: {e}")
        return None


def serialize_conditions(conditions: Optional[ConditionGroup]) -> Optional[str]:
    """Serialize a ConditionGroup to compact JSON text for storage."""
    if conditions is None:
        return None
    return json.dumps(conditions.to_dict(), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
