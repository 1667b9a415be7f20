import sys
import time
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# Ensure project root is on sys.path so `api_gateway.*` imports work
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


# Explicitly enable pytest-asyncio plugin for async tests/fixtures
pytest_plugins = ("pytest_asyncio",)


from api_gateway.main import app
from core.session import Session, get_session
from services.backend_client import BackendClient, get_backend_client

BACKEND_URL = "http://backend.test"


class FakeBackend:
    """Stands in for the backend service behind an httpx.MockTransport.

    Routes are keyed by (METHOD, path). Every request that reaches the
    transport is recorded in `calls`, so tests can assert that nothing was
    forwarded.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], httpx.Response] = {}
        self.calls: list[httpx.Request] = []

    def on(self, method: str, path: str, status_code: int = 200, json=None, text: str | None = None):
        if text is not None:
            self.routes[(method, path)] = httpx.Response(status_code, text=text)
        elif json is not None:
            self.routes[(method, path)] = httpx.Response(status_code, json=json)
        else:
            self.routes[(method, path)] = httpx.Response(status_code)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        resp = self.routes.get((request.method, request.url.path))
        if resp is None:
            return httpx.Response(404, json={"error": "not found"})
        return resp

    def client(self) -> BackendClient:
        return BackendClient(BACKEND_URL, timeout=5.0, transport=httpx.MockTransport(self.handler))


def build_session(
    sub: str | None = "user-123",
    email: str | None = "rider@example.com",
    access_token: str | None = "token-abc",
    roles: list[str] | None = None,
    expires_at: int | None = None,
) -> Session:
    return Session.model_validate({
        "user": {"sub": sub, "email": email, "roles": roles or []},
        "token_set": {"access_token": access_token, "expires_at": expires_at},
    })


class SessionHolder:
    value: Session | None = None


@pytest.fixture()
def fake_backend():
    return FakeBackend()


@pytest.fixture()
def make_session():
    return build_session


@pytest.fixture()
def current_session():
    """Set `.value` to choose which session the gateway sees (None = logged out)."""
    holder = SessionHolder()
    holder.value = build_session(expires_at=int(time.time()) + 3600)
    return holder


@pytest_asyncio.fixture()
async def gateway_client(fake_backend, current_session):
    """Async test client for the gateway, with session and backend injected."""
    app.dependency_overrides[get_session] = lambda: current_session.value
    app.dependency_overrides[get_backend_client] = fake_backend.client
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
