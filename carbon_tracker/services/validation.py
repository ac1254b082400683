from collections.abc import Mapping
from typing import Any

from ..errors import invalid_input

ACTIVITY_TYPES = ("transport", "electricity", "food")

# activity_type -> (required fields, message when one is missing)
REQUIRED_FIELDS = {
    "transport": (("distance", "vehicle"), "Transport details must include distance and vehicle"),
    "electricity": (("energy", "country"), "Electricity details must include energy and country"),
    "food": (("food_type", "quantity"), "Food details must include food type and quantity"),
}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def validate_activity(activity_type: Any, details: Any) -> None:
    """Check presence of the fields each activity type needs.

    Only presence is checked; numeric ranges are left to the provider mappers.
    """
    if _is_missing(activity_type):
        raise invalid_input("Activity type is required")

    if activity_type not in ACTIVITY_TYPES:
        raise invalid_input(f"Invalid activity type: {activity_type}")

    if not isinstance(details, Mapping):
        raise invalid_input("Activity details are required and must be an object")

    fields, message = REQUIRED_FIELDS[activity_type]
    if any(_is_missing(details.get(field)) for field in fields):
        raise invalid_input(message)
