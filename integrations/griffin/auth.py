"""API-key helpers for the Griffin API.

Griffin authenticates every request with a long-lived API key sent as
``Authorization: GriffinAPIKey <key>``. Keys are loaded through the secrets
manager (JSON file or environment), never hard-coded.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from common.secrets import get_secret

from .errors import GriffinError

__all__ = ["ApiKeyProvider", "StaticApiKeyProvider", "authorization_header"]


@runtime_checkable
class ApiKeyProvider(Protocol):
    """Return the API key to send with the next request."""

    def api_key(self) -> str:
        ...


class StaticApiKeyProvider:
    """Fixed key, given explicitly or read from the ``GRIFFIN_API_KEY`` secret."""

    def __init__(self, key: str | None = None) -> None:
        key = key or get_secret("GRIFFIN_API_KEY")
        if not key:
            raise GriffinError("GRIFFIN_API_KEY must be provided")
        self._key = key

    def api_key(self) -> str:
        return self._key


def authorization_header(key: str) -> dict[str, str]:
    return {"Authorization": f"GriffinAPIKey {key}"}
