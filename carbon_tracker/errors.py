"""
Error taxonomy shared by every layer.

A single exception type carries an ``ErrorKind`` tag. Every kind except
``FATAL`` is operational: its message is safe to return to the caller as-is.
The HTTP layer maps kinds to status codes via ``STATUS_CODES``.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UNSUPPORTED_VEHICLE = "unsupported_vehicle"
    UNSUPPORTED_CATEGORY = "unsupported_category"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    PROVIDER_ERROR = "provider_error"
    FATAL = "fatal"


STATUS_CODES = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.UNSUPPORTED_VEHICLE: 400,
    ErrorKind.UNSUPPORTED_CATEGORY: 400,
    ErrorKind.PROVIDER_ERROR: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FATAL: 500,
}

GENERIC_ERROR_MESSAGE = "Internal server error"


class CarbonTrackerError(Exception):
    def __init__(self, kind: ErrorKind, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        # machine-readable code reported by an upstream provider, if any
        self.error_code = error_code

    @property
    def operational(self) -> bool:
        return self.kind is not ErrorKind.FATAL

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @property
    def public_message(self) -> str:
        return self.message if self.operational else GENERIC_ERROR_MESSAGE

    def __repr__(self) -> str:
        return f"CarbonTrackerError({self.kind.value!r}, {self.message!r})"


def invalid_input(message: str) -> CarbonTrackerError:
    return CarbonTrackerError(ErrorKind.INVALID_INPUT, message)


def not_found(message: str = "Activity not found") -> CarbonTrackerError:
    return CarbonTrackerError(ErrorKind.NOT_FOUND, message)


def unauthorized(message: str = "Unauthorized access") -> CarbonTrackerError:
    return CarbonTrackerError(ErrorKind.UNAUTHORIZED, message)
