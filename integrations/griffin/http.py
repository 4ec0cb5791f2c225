"""Shared HTTP transport for the Griffin REST API.

Uses `httpx.AsyncClient` with:
* Base URL from env vars (see `integrations.griffin`); resource URLs returned
  by the API are relative paths and are resolved against it
* `GriffinAPIKey` authorization header on every request
* Per-request timeout
* Exponential back-off retry on transport errors and 429 / 502 / 503 / 504,
  for GET only (max 3 attempts). Writes are sent exactly once.
* A numeric `Retry-After` is honoured up to `HTTP_MAX_RETRY_AFTER`; a longer
  one ends the retries so no caller deadline is overrun
* Prometheus counters + histogram (labels: endpoint, method, status)

Non-2xx responses raise `GriffinAPIError` carrying the status code and the
raw body. Tests patch the transport with `httpx.MockTransport`.
"""
from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Any, Awaitable, Callable, Optional

import httpx

from treasury_observability.metrics import (
    griffin_http_latency_seconds,
    griffin_http_requests_total,
    griffin_http_retries_total,
)

from . import BASE_URL, HTTP_MAX_ATTEMPTS, HTTP_MAX_RETRY_AFTER, HTTP_TIMEOUT
from .auth import ApiKeyProvider, StaticApiKeyProvider, authorization_header
from .errors import GriffinAPIError, GriffinError, GriffinTransportError

__all__ = ["GriffinHTTP"]

_LOG = logging.getLogger(__name__)

_RETRY_STATUSES = frozenset({429, 502, 503, 504})
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class GriffinHTTP:
    def __init__(
        self,
        *,
        api_key: str | None = None,
        key_provider: Optional[ApiKeyProvider] = None,
        base_url: str = BASE_URL,
        timeout: float = HTTP_TIMEOUT,
        max_attempts: int = HTTP_MAX_ATTEMPTS,
        backoff_base: float = 0.1,
        max_retry_after: float = HTTP_MAX_RETRY_AFTER,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._key_provider = key_provider or StaticApiKeyProvider(api_key)
        self._max_attempts = max(1, max_attempts)
        self._backoff_base = backoff_base
        self._max_retry_after = max_retry_after
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    async def fetch(self, url: str, method: str = "GET", body: Any = None) -> Any:
        """Send one request and return the decoded JSON body.

        *url* may be absolute or a path relative to the base URL (including a
        pre-encoded query string).
        """
        method = method.upper()
        resp = await self._request(method, url, body)
        if not resp.is_success:
            raise GriffinAPIError(resp.status_code, resp.text)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise GriffinError(
                f"Griffin API returned invalid JSON ({resp.status_code}) for {method} {url}"
            ) from exc

    async def _request(self, method: str, url: str, body: Any) -> httpx.Response:
        headers = authorization_header(self._key_provider.api_key())
        kwargs: dict[str, Any] = {"headers": headers}
        if body is not None and method in _BODY_METHODS:
            kwargs["json"] = body
        retryable = method == "GET"
        endpoint_label = url.split("?", 1)[0]

        attempt = 0
        while True:
            attempt += 1
            start = time.perf_counter()
            try:
                resp = await self._client.request(method, url, **kwargs)
            except httpx.TransportError as exc:
                griffin_http_requests_total.labels(endpoint_label, method.lower(), "error").inc()
                if not retryable or attempt >= self._max_attempts:
                    raise GriffinTransportError(f"{method} {url} failed: {exc!r}") from exc
                griffin_http_retries_total.labels("transport").inc()
                _LOG.debug("retrying %s %s after %r (attempt %d)", method, url, exc, attempt)
                await self._sleep(self._backoff(attempt))
                continue
            griffin_http_latency_seconds.labels(method.lower()).observe(time.perf_counter() - start)
            griffin_http_requests_total.labels(endpoint_label, method.lower(), resp.status_code).inc()
            if retryable and resp.status_code in _RETRY_STATUSES and attempt < self._max_attempts:
                retry_after = resp.headers.get("Retry-After")
                if retry_after and retry_after.isdigit():
                    delay = float(retry_after)
                    if delay > self._max_retry_after:
                        _LOG.warning(
                            "not retrying %s %s: Retry-After %ss exceeds %ss",
                            method, url, retry_after, self._max_retry_after,
                        )
                        return resp
                else:
                    delay = self._backoff(attempt)
                griffin_http_retries_total.labels(str(resp.status_code)).inc()
                _LOG.debug("retrying %s %s after HTTP %d in %.2fs", method, url, resp.status_code, delay)
                await self._sleep(delay)
                continue
            return resp

    def _backoff(self, attempt: int) -> float:
        delay = 2 ** attempt * self._backoff_base
        return delay * (1 + random.random() * 0.2)  # jitter +20%

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
