"""Pydantic schemas for guided form definitions.

A form definition is an ordered list of screens, each with an ordered list
of fields. Screens and fields may carry conditions controlling visibility;
these are kept exactly as stored (JSON text, or a mapping when authored
inline in YAML) and only interpreted at evaluation time.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

StoredConditions = Optional[Union[str, Dict[str, Any]]]


class FormField(BaseModel):
    """A single question on a form screen."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, description="Answer key, referenced by conditions")
    label: str = ""
    type: str = Field("text", description="Input type, e.g. text, number, select, checkbox")
    required: bool = False
    placeholder: Optional[str] = None
    help_text: Optional[str] = None
    options: List[str] = Field(default_factory=list)
    conditions: StoredConditions = None


class FormScreen(BaseModel):
    """One step of a guided form."""

    id: str = Field(..., min_length=1)
    title: str = ""
    description: Optional[str] = None
    type: str = "standard"
    fields: List[FormField] = Field(default_factory=list)
    conditions: StoredConditions = None

    def get_field(self, field_id: str) -> Optional[FormField]:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None


class FormDefinition(BaseModel):
    """A complete template form: screens in display order."""

    template_id: str = Field(..., min_length=1)
    title: str = ""
    description: Optional[str] = None
    screens: List[FormScreen] = Field(default_factory=list)

    @field_validator("screens")
    @classmethod
    def validate_unique_screen_ids(cls, v: List[FormScreen]) -> List[FormScreen]:
        """Screen ids must be unique within a form."""
        seen = set()
        for screen in v:
            if screen.id in seen:
                raise ValueError(f"Duplicate screen id '{screen.id}'")
            seen.add(screen.id)
        return v

    def get_screen(self, screen_id: str) -> Optional[FormScreen]:
        for screen in self.screens:
            if screen.id == screen_id:
                return screen
        return None
