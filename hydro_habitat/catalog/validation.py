"""
Client-side checks for the add/edit form.

The form holds text only (TankFormValues). Before anything is sent to the
store, the text is validated and coerced into a typed TankCreate payload.
Failures are reported with one fixed message, never per field.
"""

import re
from typing import Optional

from hydro_habitat.models.tank import WaterType
from hydro_habitat.schemas.tank import TankCreate, TankFormValues

VALIDATION_MESSAGE = "Tank Name and a valid positive Volume are required."

# Leading ASCII integer, as a lenient parse reads it: "  42", "+7", "50 L" -> 50
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


class TankValidationError(ValueError):
    """The form cannot be submitted as it stands."""

    def __init__(self, message: str = VALIDATION_MESSAGE):
        super().__init__(message)
        self.message = message


def parse_volume(text: Optional[str]) -> Optional[int]:
    """Return the integer the volume text starts with, or None."""
    if not text:
        return None
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))


def _water_type(text: str) -> Optional[WaterType]:
    if not text:
        return WaterType.tap
    try:
        return WaterType(text)
    except ValueError:
        return None


def validate_tank_form(values: TankFormValues) -> Optional[str]:
    """Return the validation message if the form is not submittable, else None."""
    if not values.name.strip():
        return VALIDATION_MESSAGE
    volume = parse_volume(values.volume_liters)
    if volume is None or volume <= 0:
        return VALIDATION_MESSAGE
    # the form only offers the three known water types
    if _water_type(values.water) is None:
        return VALIDATION_MESSAGE
    return None


def to_tank_input(values: TankFormValues) -> TankCreate:
    """
    Coerce form text into the payload sent to the store.

    The payload is exactly the form fields, with volume as an integer and an
    unset water type defaulting to tap. Raises TankValidationError when the
    form does not validate.
    """
    message = validate_tank_form(values)
    if message is not None:
        raise TankValidationError(message)

    return TankCreate(
        name=values.name,
        volume_liters=parse_volume(values.volume_liters),
        water=_water_type(values.water),
        room=values.room,
        rack_location=values.rack_location,
        inventory_number=values.inventory_number,
        notes=values.notes,
    )
