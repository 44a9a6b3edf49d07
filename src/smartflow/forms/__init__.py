"""Form definitions and visibility filtering."""

from smartflow.forms.schemas import FormDefinition, FormField, FormScreen
from smartflow.forms.loader import FormLoadError, list_form_definitions, load_form_definition
from smartflow.forms.visibility import (
    is_field_visible,
    is_screen_visible,
    visibility_report,
    visible_fields,
    visible_screens,
)
from smartflow.forms.available_fields import available_fields

__all__ = [
    "FormDefinition",
    "FormField",
    "FormScreen",
    "FormLoadError",
    "list_form_definitions",
    "load_form_definition",
    "is_field_visible",
    "is_screen_visible",
    "visibility_report",
    "visible_fields",
    "visible_screens",
    "available_fields",
]
