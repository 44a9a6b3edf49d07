"""Form endpoints: stored definitions, visibility of screens/fields, condition field pickers."""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from smartflow.api.dependencies import get_forms_dir
from smartflow.api.models import (
    AvailableFieldsRequest,
    FormSummary,
    FormVisibilityRequest,
    FormVisibilityResponse,
    ScreenVisibility,
)
from smartflow.conditions import AvailableField
from smartflow.forms import (
    FormDefinition,
    FormLoadError,
    available_fields,
    list_form_definitions,
    load_form_definition,
    visibility_report,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/forms", tags=["forms"])


def _load_all_forms():
    """Valid form definitions in the forms directory with their files; invalid files are skipped."""
    forms = []
    for path in list_form_definitions(get_forms_dir()):
        try:
            forms.append((path, load_form_definition(path)))
        except FormLoadError as e:
            logger.warning(f"Skipping form definition: {e}")
    return forms


@router.get("", response_model=List[FormSummary])
def list_forms() -> List[FormSummary]:
    """Form definitions found in the configured forms directory."""
    return [
        FormSummary(
            template_id=form.template_id,
            title=form.title,
            screen_count=len(form.screens),
            file_name=path.name,
        )
        for path, form in _load_all_forms()
    ]


@router.get("/{template_id}", response_model=FormDefinition)
def get_form(template_id: str) -> FormDefinition:
    """A single stored form definition by template id."""
    for _, form in _load_all_forms():
        if form.template_id == template_id:
            return form
    raise HTTPException(status_code=404, detail=f"Form not found: {template_id}")


@router.post("/visibility", response_model=FormVisibilityResponse)
def form_visibility(request: FormVisibilityRequest) -> FormVisibilityResponse:
    """Which screens and fields are shown for the given answers."""
    report = visibility_report(request.form, request.answers)
    return FormVisibilityResponse(
        template_id=request.form.template_id,
        screens=[ScreenVisibility(**entry) for entry in report],
    )


@router.post("/available-fields", response_model=List[AvailableField])
def list_available_fields(request: AvailableFieldsRequest) -> List[AvailableField]:
    """Fields that conditions on the given screen (or field) may reference."""
    screen = request.form.get_screen(request.screen_id)
    if screen is None:
        raise HTTPException(status_code=404, detail=f"Screen not found: {request.screen_id}")
    if request.field_id is not None and screen.get_field(request.field_id) is None:
        raise HTTPException(status_code=404, detail=f"Field not found: {request.field_id}")
    return available_fields(request.form, request.screen_id, request.field_id)
