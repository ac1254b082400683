"""
Common plumbing for external emissions providers.

A provider turns validated activity details into a request payload, posts it
with a bearer credential and reads the CO2e value back. Failures reported by
the provider are raised as ``PROVIDER_ERROR``; transport-level failures from
httpx are left to propagate.
"""
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Optional

import httpx

from ...errors import CarbonTrackerError, ErrorKind, invalid_input

logger = logging.getLogger(__name__)

# Returned by a mapper for activities that emit nothing; no request is sent.
ZERO_EMISSION = MappingProxyType({"co2e": 0.0})

DISALLOWED_VEHICLES = frozenset({"motorbike", "motorcycle"})

DISALLOWED_VEHICLE_MESSAGE = (
    "Emission estimates for motorbike/motorcycle are not supported yet. "
    "Please choose another vehicle type."
)


def is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def check_transport_details(details: Mapping) -> str:
    """Checks shared by every transport mapper; returns the vehicle keyword."""
    if not is_positive_number(details.get("distance")):
        raise invalid_input("Distance must be a positive number")

    vehicle = details.get("vehicle")
    if not is_non_empty_string(vehicle):
        raise invalid_input("Vehicle must be a valid string")

    if vehicle in DISALLOWED_VEHICLES:
        raise invalid_input(DISALLOWED_VEHICLE_MESSAGE)

    return vehicle


class EmissionsProvider(ABC):
    name: str = "provider"

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str],
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        # injected by tests; None means the default network transport
        self._transport = transport

    @abstractmethod
    def build_request(self, activity_type: str, details: Mapping) -> Mapping:
        """Map validated details to a request body, or return ``ZERO_EMISSION``."""

    @abstractmethod
    def extract_carbon_kg(self, data: Dict[str, Any]) -> float:
        """Read the CO2e value in kilograms from a successful response."""

    @abstractmethod
    def parse_error(self, status_code: int, body: Any) -> CarbonTrackerError:
        """Turn an error response into a ``PROVIDER_ERROR``."""

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            logger.error("%s API key is not configured", self.name)
            raise CarbonTrackerError(ErrorKind.FATAL, f"{self.name} API key is not configured")
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, payload: Mapping) -> Dict[str, Any]:
        headers = self._headers()

        # single attempt, bounded timeout, no retry
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.api_url, json=dict(payload), headers=headers)

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {"message": response.text}
            logger.error("%s API error %s: %s", self.name, response.status_code, body)
            raise self.parse_error(response.status_code, body)

        try:
            data = response.json()
        except ValueError:
            logger.exception("%s returned invalid JSON", self.name)
            raise CarbonTrackerError(
                ErrorKind.PROVIDER_ERROR, f"{self.name} API returned invalid JSON"
            )

        if not isinstance(data, dict):
            raise CarbonTrackerError(
                ErrorKind.PROVIDER_ERROR, f"{self.name} API returned an unexpected payload"
            )
        return data
