from collections.abc import Mapping
from typing import Any

CARPOOL_THRESHOLD_KG = 5

RED_MEATS = ("beef", "lamb")

TIPS = {
    "carpool": "Consider carpooling or using public transport to reduce emissions",
    "motorbike": "Consider biking for short distances to reduce emissions",
    "plane": "Consider offsetting your flight emissions or taking direct routes when possible",
    "transport": "Consider using more eco-friendly transportation options",
    "electricity": "Try to reduce energy consumption during peak hours and consider renewable energy sources",
    "red_meat": "Consider reducing red meat consumption to lower your carbon footprint",
    "food": "Try to buy local and seasonal food to reduce transportation emissions",
    "default": "Small changes in daily habits can significantly reduce your carbon footprint",
}


def generate_tip(activity_type: str, details: Any, carbon_kg: float) -> str:
    """Pick advice for an activity; the first matching rule wins."""
    if not isinstance(details, Mapping):
        details = {}

    if activity_type == "transport":
        vehicle = details.get("vehicle")
        if vehicle == "car" and carbon_kg > CARPOOL_THRESHOLD_KG:
            return TIPS["carpool"]
        if vehicle == "motorbike":
            return TIPS["motorbike"]
        if vehicle == "plane":
            return TIPS["plane"]
        return TIPS["transport"]

    if activity_type == "electricity":
        return TIPS["electricity"]

    if activity_type == "food":
        food_type = details.get("food_type")
        if isinstance(food_type, str) and food_type.strip().lower() in RED_MEATS:
            return TIPS["red_meat"]
        return TIPS["food"]

    return TIPS["default"]
