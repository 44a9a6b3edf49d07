"""Fields a condition may reference.

A screen's conditions can only depend on answers from earlier screens. A
field's conditions can additionally depend on fields placed before it on
its own screen.
"""

from typing import List, Optional

from smartflow.conditions.schemas import AvailableField
from smartflow.forms.schemas import FormDefinition, FormScreen


def _as_available(screen: FormScreen, fields) -> List[AvailableField]:
    return [
        AvailableField(name=f.name, label=f.label, screen_title=screen.title, type=f.type)
        for f in fields
    ]


def available_fields(
    form: FormDefinition,
    screen_id: str,
    field_id: Optional[str] = None,
) -> List[AvailableField]:
    """
    List the fields that conditions on a screen (or on one of its fields) may use.

    Args:
        form: Form definition
        screen_id: Screen being edited
        field_id: Field being edited; None when editing the screen's own conditions

    Returns:
        Fields of all earlier screens in order, followed by fields before
        `field_id` on the current screen. Empty if the screen is unknown.
    """
    result: List[AvailableField] = []
    for screen in form.screens:
        if screen.id == screen_id:
            if field_id is not None:
                earlier = []
                for field in screen.fields:
                    if field.id == field_id:
                        break
                    earlier.append(field)
                else:
                    # field not on this screen
                    earlier = []
                result.extend(_as_available(screen, earlier))
            return result
        result.extend(_as_available(screen, screen.fields))
    return []
