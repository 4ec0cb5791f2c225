"""Exception hierarchy for the Griffin integration."""
from __future__ import annotations

from typing import Optional

__all__ = [
    "GriffinError",
    "GriffinAPIError",
    "GriffinTransportError",
    "GriffinResponseError",
    "GriffinValidationError",
]


class GriffinError(Exception):
    """Base class for every failure raised by this package."""

    error_type = "error"
    status_code: Optional[int] = None


class GriffinAPIError(GriffinError):
    """The API answered with a non-2xx status; ``body`` is the raw response text."""

    error_type = "api"

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Griffin API error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class GriffinTransportError(GriffinError):
    """No usable response: connection failure or timeout after all retries."""

    error_type = "transport"


class GriffinResponseError(GriffinError):
    """A 2xx response whose body does not match the expected resource shape.

    The request itself succeeded, so any write it carried has taken effect.
    """

    error_type = "response"


class GriffinValidationError(GriffinError):
    """Caller input rejected before any request was sent."""

    error_type = "validation"
