import logging
from collections.abc import Mapping
from typing import Any, Dict

from ...errors import CarbonTrackerError, ErrorKind, invalid_input
from .base import (
    ZERO_EMISSION,
    EmissionsProvider,
    check_transport_details,
    is_non_empty_string,
    is_positive_number,
)

logger = logging.getLogger(__name__)

ZERO_EMISSION_VEHICLES = frozenset({"bicycle"})


class CarbonInterfaceProvider(EmissionsProvider):
    """Vehicle-model provider: transport is keyed by a ``vehicle_model_id``."""

    name = "Carbon Interface"

    def build_request(self, activity_type: str, details: Mapping) -> Mapping:
        if activity_type == "transport":
            return self._vehicle_request(details)
        if activity_type == "electricity":
            return self._electricity_request(details)
        raise CarbonTrackerError(
            ErrorKind.UNSUPPORTED_CATEGORY,
            f"Carbon Interface does not support {activity_type} activities",
        )

    @staticmethod
    def _vehicle_request(details: Mapping) -> Mapping:
        vehicle = check_transport_details(details)
        if vehicle in ZERO_EMISSION_VEHICLES:
            return ZERO_EMISSION

        model_id = details.get("vehicle_model_id")
        if not is_non_empty_string(model_id):
            raise invalid_input("vehicle_model_id is required for vehicle estimates")

        return {
            "type": "vehicle",
            "distance_unit": "km",
            "distance_value": float(details["distance"]),
            "vehicle_model_id": model_id,
        }

    @staticmethod
    def _electricity_request(details: Mapping) -> Mapping:
        if not is_positive_number(details.get("energy")):
            raise invalid_input("Energy must be a positive number")

        country = details.get("country")
        if not is_non_empty_string(country):
            raise invalid_input("Country must be a valid string")

        return {
            "type": "electricity",
            "electricity_unit": "kwh",
            "electricity_value": float(details["energy"]),
            "country": country.strip().lower(),
        }

    def extract_carbon_kg(self, data: Dict[str, Any]) -> float:
        try:
            return float(data["data"]["attributes"]["carbon_kg"])
        except (KeyError, TypeError, ValueError):
            logger.error("Carbon Interface response missing carbon_kg: %s", data)
            raise CarbonTrackerError(
                ErrorKind.PROVIDER_ERROR, "Carbon Interface API response is missing carbon_kg"
            )

    def parse_error(self, status_code: int, body: Any) -> CarbonTrackerError:
        message = body.get("message") if isinstance(body, dict) else None
        return CarbonTrackerError(
            ErrorKind.PROVIDER_ERROR,
            f"Carbon Interface API error: {message or f'HTTP {status_code}'}",
        )
