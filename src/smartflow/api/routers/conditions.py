"""Condition endpoints: evaluate, describe, validate, operator catalog."""

import logging
from typing import List

from fastapi import APIRouter

from smartflow.api.models import (
    DescribeRequest,
    DescribeResponse,
    EvaluateRequest,
    EvaluateResponse,
    OperatorResponse,
    ValidateRequest,
    ValidateResponse,
)
from smartflow.conditions import (
    OPERATOR_CATALOG,
    ConditionOperator,
    ConditionParseError,
    coerce_conditions,
    describe_conditions,
    evaluate_conditions,
    parse_conditions,
    serialize_conditions,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/conditions", tags=["conditions"])


@router.get("/operators", response_model=List[OperatorResponse])
def list_operators() -> List[OperatorResponse]:
    """Operators offered by the condition editor, in display order."""
    return [
        OperatorResponse(operator=info.operator.value, label=info.label, needs_value=info.needs_value)
        for info in OPERATOR_CATALOG
    ]


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(request: EvaluateRequest) -> EvaluateResponse:
    """Decide visibility. Malformed conditions evaluate as visible."""
    return EvaluateResponse(visible=evaluate_conditions(request.conditions, request.answers))


@router.post("/describe", response_model=DescribeResponse)
def describe(request: DescribeRequest) -> DescribeResponse:
    """Preview sentence for the condition editor."""
    if isinstance(request.conditions, str):
        group = parse_conditions(request.conditions)
    elif request.conditions is None:
        group = None
    else:
        try:
            group = coerce_conditions(request.conditions)
        except ConditionParseError as e:
            logger.error(f"Cannot describe invalid conditions: {e}")
            group = None
    return DescribeResponse(description=describe_conditions(group, request.fields))


@router.post("/validate", response_model=ValidateResponse)
def validate(request: ValidateRequest) -> ValidateResponse:
    """Strictly validate conditions before they are stored."""
    if request.conditions is None or request.conditions == "":
        return ValidateResponse(valid=True)

    try:
        group = coerce_conditions(request.conditions)
    except ConditionParseError as e:
        return ValidateResponse(valid=False, error=str(e))

    unknown = [r.operator for r in group.rules if ConditionOperator.from_tag(r.operator) is None]
    return ValidateResponse(
        valid=not unknown,
        error=f"Unknown operators: {', '.join(unknown)}" if unknown else None,
        conditions=group,
        serialized=serialize_conditions(group),
        unknown_operators=unknown,
    )
