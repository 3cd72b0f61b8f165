"""Shared test fixtures.

  backend: an in-process fake of the REST backend (httpx.MockTransport)
             that records every request it receives.
  client:  BlueMoonClient wired to ``backend`` with a bearer token set.
"""
import json

import httpx
import pytest

from bluemoon.api.schemas.users import SessionUser
from bluemoon.ui.api_client import BlueMoonClient


class FakeBackend:
    """Routes ``(method, path)`` to canned responses; unknown routes answer 404."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, body=None, status: int = 200) -> None:
        if body is None:
            self.routes[(method, path)] = httpx.Response(status)
        else:
            self.routes[(method, path)] = httpx.Response(status, json=body)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes[(method, path)] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if isinstance(route, Exception):
            raise route
        return route

    def calls(self, method: str | None = None, path: str | None = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if (method is None or r.method == method) and (path is None or r.url.path == path)
        ]

    @staticmethod
    def json_of(request: httpx.Request) -> dict:
        return json.loads(request.content)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(backend):
    c = BlueMoonClient(
        base_url="http://backend.test", token="tok-123",
        transport=httpx.MockTransport(backend.handler),
    )
    yield c
    c.close()


@pytest.fixture
def anonymous_client(backend):
    c = BlueMoonClient(base_url="http://backend.test", transport=httpx.MockTransport(backend.handler))
    yield c
    c.close()


@pytest.fixture
def admin() -> SessionUser:
    return SessionUser(_id="u-admin", username="admin", full_name="Quản trị", role="admin", token="tok-123")


@pytest.fixture
def accountant() -> SessionUser:
    return SessionUser(_id="u-acc", username="ketoan", role="accountant", token="tok-123")
