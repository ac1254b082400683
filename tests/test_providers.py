import pytest

from carbon_tracker.errors import CarbonTrackerError, ErrorKind
from carbon_tracker.services.providers.base import ZERO_EMISSION
from carbon_tracker.services.providers.carbon_interface import CarbonInterfaceProvider
from carbon_tracker.services.providers.climatiq import (
    VEHICLE_FACTORS,
    map_electricity_request,
    map_food_request,
    map_transport_request,
)

DATA_VERSION = "21.21"


def _kind(call):
    with pytest.raises(CarbonTrackerError) as exc_info:
        call()
    return exc_info.value.kind


def test_car_maps_to_factor_table_entry():
    payload = map_transport_request({"distance": 10, "vehicle": "car"}, DATA_VERSION)

    assert payload["parameters"] == {"distance": 10, "distance_unit": "km"}
    assert payload["emission_factor"]["activity_id"] == VEHICLE_FACTORS["car"][0]
    assert payload["emission_factor"]["region"] == "global"
    assert payload["emission_factor"]["data_version"] == DATA_VERSION


def test_bicycle_is_zero_emission_sentinel():
    assert map_transport_request({"distance": 10, "vehicle": "bicycle"}, DATA_VERSION) is ZERO_EMISSION


@pytest.mark.parametrize("distance", [-1, 0, "10", True, None])
def test_distance_must_be_positive_number(distance):
    kind = _kind(lambda: map_transport_request({"distance": distance, "vehicle": "car"}, DATA_VERSION))
    assert kind is ErrorKind.INVALID_INPUT


@pytest.mark.parametrize("vehicle", ["", 7, None])
def test_vehicle_must_be_non_empty_string(vehicle):
    kind = _kind(lambda: map_transport_request({"distance": 10, "vehicle": vehicle}, DATA_VERSION))
    assert kind is ErrorKind.INVALID_INPUT


@pytest.mark.parametrize("vehicle", ["motorbike", "motorcycle"])
def test_disallowed_vehicles_are_rejected(vehicle):
    with pytest.raises(CarbonTrackerError) as exc_info:
        map_transport_request({"distance": 10, "vehicle": vehicle}, DATA_VERSION)
    assert exc_info.value.kind is ErrorKind.INVALID_INPUT
    assert "motorbike/motorcycle" in exc_info.value.message


def test_unmapped_vehicle_is_unsupported_not_disallowed():
    kind = _kind(lambda: map_transport_request({"distance": 10, "vehicle": "ferry"}, DATA_VERSION))
    assert kind is ErrorKind.UNSUPPORTED_VEHICLE


def test_vehicle_table_is_immutable():
    with pytest.raises(TypeError):
        VEHICLE_FACTORS["ferry"] = ("ferry-id", "global")


def test_electricity_mapping():
    payload = map_electricity_request({"energy": 120, "country": "vn"}, DATA_VERSION)

    assert payload["emission_factor"]["region"] == "VN"
    assert payload["parameters"] == {"energy": 120, "energy_unit": "kWh"}


def test_electricity_requires_positive_energy():
    kind = _kind(lambda: map_electricity_request({"energy": 0, "country": "VN"}, DATA_VERSION))
    assert kind is ErrorKind.INVALID_INPUT


def test_food_mapping():
    payload = map_food_request({"food_type": "Beef", "quantity": 0.5}, DATA_VERSION)

    assert payload["emission_factor"]["activity_id"].endswith("beef")
    assert payload["parameters"] == {"weight": 0.5, "weight_unit": "kg"}


def test_unknown_food_type_is_unsupported_category():
    kind = _kind(lambda: map_food_request({"food_type": "durian", "quantity": 1}, DATA_VERSION))
    assert kind is ErrorKind.UNSUPPORTED_CATEGORY


class TestCarbonInterfaceProvider:
    provider = CarbonInterfaceProvider(api_url="https://ci.test", api_key="key", timeout=5)

    def test_vehicle_request_uses_model_id(self):
        payload = self.provider.build_request(
            "transport", {"distance": 12, "vehicle": "car", "vehicle_model_id": "abc-123"}
        )
        assert payload == {
            "type": "vehicle",
            "distance_unit": "km",
            "distance_value": 12,
            "vehicle_model_id": "abc-123",
        }

    def test_vehicle_request_requires_model_id(self):
        kind = _kind(lambda: self.provider.build_request("transport", {"distance": 12, "vehicle": "car"}))
        assert kind is ErrorKind.INVALID_INPUT

    def test_bicycle_skips_model_lookup(self):
        payload = self.provider.build_request("transport", {"distance": 3, "vehicle": "bicycle"})
        assert payload is ZERO_EMISSION

    def test_motorbike_is_still_disallowed(self):
        kind = _kind(
            lambda: self.provider.build_request(
                "transport", {"distance": 3, "vehicle": "motorbike", "vehicle_model_id": "m"}
            )
        )
        assert kind is ErrorKind.INVALID_INPUT

    def test_electricity_request(self):
        payload = self.provider.build_request("electricity", {"energy": 42, "country": "US"})
        assert payload["electricity_value"] == 42
        assert payload["country"] == "us"

    def test_food_is_unsupported(self):
        kind = _kind(lambda: self.provider.build_request("food", {"food_type": "beef", "quantity": 1}))
        assert kind is ErrorKind.UNSUPPORTED_CATEGORY

    def test_reads_carbon_kg_from_attributes(self):
        data = {"data": {"attributes": {"carbon_kg": 3.25}}}
        assert self.provider.extract_carbon_kg(data) == 3.25
