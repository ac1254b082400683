from collections.abc import Mapping
from typing import Any, Optional

# kg CO2e per km when the provider has no factor for a transport activity
FALLBACK_KG_PER_KM = 0.2

FALLBACK_NOTE = "Fallback estimation due to unavailable emission factor"


def _numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def estimate_transport_fallback(details: Mapping) -> Optional[float]:
    """Distance based estimate, or None when the distance is not numeric."""
    distance = details.get("distance")
    if not _numeric(distance):
        return None
    return FALLBACK_KG_PER_KM * distance


def fallback_activity_data() -> dict:
    return {
        "note": FALLBACK_NOTE,
        "source": "fallback",
        "coefficient_kg_per_km": FALLBACK_KG_PER_KM,
    }
