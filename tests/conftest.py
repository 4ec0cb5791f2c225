from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from common import secrets as secrets_module
from integrations.griffin.client import GriffinClient
from integrations.griffin.http import GriffinHTTP

BASE_URL = "https://api.griffin.test"
ORG_URL = "/v0/organizations/org1"


@pytest.fixture
def anyio_backend():
    return "asyncio"


# ---------------------------------------------------------------------------
# Default API key for tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _secrets() -> None:
    """Provide a dummy Griffin key via the secrets manager."""

    secrets_module.secrets.set_override({"GRIFFIN_API_KEY": "test-key"})
    yield
    secrets_module.secrets.set_override({})


# ---------------------------------------------------------------------------
# Fake Griffin API
# ---------------------------------------------------------------------------


class FakeGriffin:
    """Route table for ``httpx.MockTransport``.

    Each route holds a queue of canned replies; the last one repeats. A reply
    is either ``(status, json_body)``, ``(status, text)`` or an exception
    instance to raise from the transport.
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], List[Any]] = {}

    def add(self, method: str, path: str, *replies: Any) -> "FakeGriffin":
        self._routes.setdefault((method, path), []).extend(replies)
        return self

    def replace(self, method: str, path: str, *replies: Any) -> "FakeGriffin":
        self._routes[(method, path)] = list(replies)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, text=f"no route for {request.method} {request.url.path}")
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(reply, Exception):
            raise reply
        status, body = reply
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: Optional[str] = None) -> List[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> FakeGriffin:
    api = FakeGriffin()
    api.add("GET", "/v0/index", (200, {"organization-url": ORG_URL, "api-key-url": "/v0/api-keys/ak.1"}))
    return api


@pytest.fixture
def client(fake_api: FakeGriffin) -> GriffinClient:
    http = GriffinHTTP(
        api_key="test-key",
        base_url=BASE_URL,
        transport=fake_api.transport(),
        backoff_base=0,
    )
    return GriffinClient(http=http)
