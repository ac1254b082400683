from ...errors import CarbonTrackerError, ErrorKind
from ...settings import settings
from .base import EmissionsProvider
from .carbon_interface import CarbonInterfaceProvider
from .climatiq import ClimatiqProvider


def get_provider() -> EmissionsProvider:
    name = settings.emissions_provider.strip().lower()

    if name == "climatiq":
        return ClimatiqProvider(
            api_url=settings.climatiq_api_url,
            api_key=settings.climatiq_api_key,
            data_version=settings.climatiq_data_version,
            timeout=settings.provider_timeout_seconds,
        )
    if name == "carbon_interface":
        return CarbonInterfaceProvider(
            api_url=settings.carbon_interface_api_url,
            api_key=settings.carbon_interface_api_key,
            timeout=settings.provider_timeout_seconds,
        )
    raise CarbonTrackerError(ErrorKind.FATAL, f"Unknown emissions provider: {name}")
