"""
Emission estimation pipeline.

validate -> map to a provider request -> call the provider -> interpret the
answer (or fall back) -> attach a tip.

Two identical calls may return different values: the provider's factor
tables change over time, while the fallback coefficient is fixed.
"""
import json
import logging
from collections.abc import Mapping
from typing import Any

from ..errors import CarbonTrackerError, ErrorKind
from ..schemas import EstimationResult
from .fallback import estimate_transport_fallback, fallback_activity_data
from .providers.base import ZERO_EMISSION, EmissionsProvider
from .providers.climatiq import NO_EMISSION_FACTORS_FOUND
from .tips import generate_tip
from .validation import validate_activity

logger = logging.getLogger(__name__)

UNSUPPORTED_ESTIMATE_MESSAGE = "Unable to estimate emissions: Invalid or unsupported activity type"


def _describe(details: Any) -> str:
    try:
        return json.dumps(details, default=str)
    except (TypeError, ValueError):
        return repr(details)


def _zero_emission_result(activity_type: str, details: Mapping) -> EstimationResult:
    return EstimationResult(
        carbon_kg=0.0,
        activity_data={"note": "Zero-emission activity", "source": "local", **ZERO_EMISSION},
        tip=generate_tip(activity_type, details, 0.0),
    )


def _fallback_or_raise(
    activity_type: str, details: Mapping, exc: CarbonTrackerError
) -> EstimationResult:
    if exc.error_code != NO_EMISSION_FACTORS_FOUND:
        raise exc

    logger.warning("No emission factor found for %s, using fallback", activity_type)
    if activity_type == "transport":
        carbon_kg = estimate_transport_fallback(details)
        if carbon_kg is not None:
            return EstimationResult(
                carbon_kg=carbon_kg,
                activity_data=fallback_activity_data(),
                tip=generate_tip(activity_type, details, carbon_kg),
            )

    raise CarbonTrackerError(ErrorKind.PROVIDER_ERROR, UNSUPPORTED_ESTIMATE_MESSAGE) from exc


async def estimate_emissions(
    activity_type: str, details: Any, provider: EmissionsProvider
) -> EstimationResult:
    validate_activity(activity_type, details)
    logger.info("Estimating emissions for %s: %s", activity_type, _describe(details))

    payload = provider.build_request(activity_type, details)
    if payload is ZERO_EMISSION:
        return _zero_emission_result(activity_type, details)

    try:
        data = await provider.send(payload)
    except CarbonTrackerError as exc:
        if exc.kind is not ErrorKind.PROVIDER_ERROR:
            raise
        return _fallback_or_raise(activity_type, details, exc)

    carbon_kg = provider.extract_carbon_kg(data)
    return EstimationResult(
        carbon_kg=carbon_kg,
        activity_data=data,
        tip=generate_tip(activity_type, details, carbon_kg),
    )
