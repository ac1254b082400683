import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Optional

import httpx

from ...errors import CarbonTrackerError, ErrorKind, invalid_input
from .base import (
    ZERO_EMISSION,
    EmissionsProvider,
    check_transport_details,
    is_non_empty_string,
    is_positive_number,
)

logger = logging.getLogger(__name__)

NO_EMISSION_FACTORS_FOUND = "no_emission_factors_found"

# vehicle keyword -> (activity_id, region); None marks a zero-emission vehicle
VEHICLE_FACTORS = MappingProxyType(
    {
        "car": ("passenger_vehicle-vehicle_type_car-fuel_source_petrol-engine_size_na", "global"),
        "bus": ("passenger_vehicle-vehicle_type_bus-fuel_source_na", "global"),
        "train": ("passenger_train-route_type_commuter_rail-fuel_source_na", "global"),
        "plane": (
            "passenger_flight-route_type_domestic-aircraft_type_jet-distance_na-class_na",
            "global",
        ),
        "bicycle": None,
    }
)

ELECTRICITY_ACTIVITY_ID = "electricity-supply_grid-source_residual_mix"

FOOD_FACTORS = MappingProxyType(
    {
        "beef": "consumer_goods-type_meat_products_beef",
        "lamb": "consumer_goods-type_meat_products_lamb",
        "pork": "consumer_goods-type_meat_products_pork",
        "chicken": "consumer_goods-type_meat_products_poultry",
        "fish": "consumer_goods-type_fish_products",
        "dairy": "consumer_goods-type_dairy_products",
        "rice": "consumer_goods-type_rice",
        "vegetables": "consumer_goods-type_vegetables",
    }
)


def _emission_factor(activity_id: str, region: str, data_version: str) -> Dict[str, str]:
    return {"activity_id": activity_id, "region": region, "data_version": data_version}


def map_transport_request(details: Mapping, data_version: str) -> Mapping:
    vehicle = check_transport_details(details)

    if vehicle not in VEHICLE_FACTORS:
        raise CarbonTrackerError(
            ErrorKind.UNSUPPORTED_VEHICLE, f"Unsupported vehicle type: {vehicle}"
        )

    factor = VEHICLE_FACTORS[vehicle]
    if factor is None:
        return ZERO_EMISSION

    activity_id, region = factor
    return {
        "emission_factor": _emission_factor(activity_id, region, data_version),
        "parameters": {"distance": float(details["distance"]), "distance_unit": "km"},
    }


def map_electricity_request(details: Mapping, data_version: str) -> Mapping:
    if not is_positive_number(details.get("energy")):
        raise invalid_input("Energy must be a positive number")

    country = details.get("country")
    if not is_non_empty_string(country):
        raise invalid_input("Country must be a valid string")

    return {
        "emission_factor": _emission_factor(
            ELECTRICITY_ACTIVITY_ID, country.strip().upper(), data_version
        ),
        "parameters": {"energy": float(details["energy"]), "energy_unit": "kWh"},
    }


def map_food_request(details: Mapping, data_version: str) -> Mapping:
    if not is_positive_number(details.get("quantity")):
        raise invalid_input("Quantity must be a positive number")

    food_type = details.get("food_type")
    if not is_non_empty_string(food_type):
        raise invalid_input("Food type must be a valid string")

    activity_id = FOOD_FACTORS.get(food_type.strip().lower())
    if activity_id is None:
        raise CarbonTrackerError(
            ErrorKind.UNSUPPORTED_CATEGORY, f"Unsupported food type: {food_type}"
        )

    return {
        "emission_factor": _emission_factor(activity_id, "global", data_version),
        "parameters": {"weight": float(details["quantity"]), "weight_unit": "kg"},
    }


MAPPERS = {
    "transport": map_transport_request,
    "electricity": map_electricity_request,
    "food": map_food_request,
}


class ClimatiqProvider(EmissionsProvider):
    """Factor-table provider: each category maps to a fixed emission factor."""

    name = "Climatiq"

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str],
        data_version: str,
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(api_url, api_key, timeout, transport)
        self.data_version = data_version

    def build_request(self, activity_type: str, details: Mapping) -> Mapping:
        mapper = MAPPERS.get(activity_type)
        if mapper is None:
            raise invalid_input(f"Unsupported activity type: {activity_type}")
        return mapper(details, self.data_version)

    def extract_carbon_kg(self, data: Dict[str, Any]) -> float:
        try:
            return float(data["co2e"])
        except (KeyError, TypeError, ValueError):
            logger.error("Climatiq response missing co2e: %s", data)
            raise CarbonTrackerError(
                ErrorKind.PROVIDER_ERROR, "Climatiq API response is missing co2e"
            )

    def parse_error(self, status_code: int, body: Any) -> CarbonTrackerError:
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or f"HTTP {status_code}"
        return CarbonTrackerError(
            ErrorKind.PROVIDER_ERROR,
            f"Climatiq API error: {message}",
            error_code=body.get("error_code"),
        )
