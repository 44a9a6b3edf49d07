"""Request and response models for the SmartFlow API."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from smartflow.conditions.schemas import AvailableField, ConditionGroup
from smartflow.forms.schemas import FormDefinition

ConditionsPayload = Optional[Union[str, Dict[str, Any]]]


class EvaluateRequest(BaseModel):
    """Conditions (stored JSON text or object) plus the current answers."""

    conditions: ConditionsPayload = None
    answers: Dict[str, Any] = Field(default_factory=dict)


class EvaluateResponse(BaseModel):
    visible: bool


class DescribeRequest(BaseModel):
    conditions: ConditionsPayload = None
    fields: List[AvailableField] = Field(default_factory=list)


class DescribeResponse(BaseModel):
    description: Optional[str] = None


class ValidateRequest(BaseModel):
    conditions: ConditionsPayload = None


class ValidateResponse(BaseModel):
    """Strict validation result for the condition editor."""

    valid: bool
    error: Optional[str] = None
    conditions: Optional[ConditionGroup] = None
    serialized: Optional[str] = None
    unknown_operators: List[str] = Field(default_factory=list)


class OperatorResponse(BaseModel):
    operator: str
    label: str
    needs_value: bool


class FormVisibilityRequest(BaseModel):
    form: FormDefinition
    answers: Dict[str, Any] = Field(default_factory=dict)


class ScreenVisibility(BaseModel):
    screen_id: str
    title: str
    visible: bool
    visible_fields: List[str] = Field(default_factory=list)


class FormVisibilityResponse(BaseModel):
    template_id: str
    screens: List[ScreenVisibility]


class AvailableFieldsRequest(BaseModel):
    form: FormDefinition
    screen_id: str
    field_id: Optional[str] = None


class FormSummary(BaseModel):
    """A form definition available in the forms directory."""

    template_id: str
    title: str
    screen_count: int
    file_name: str
