import pytest

from core.auth import AuthContext, Unauthorized
from core.gateway import InvalidBody, run_authenticated
from services.backend_client import BackendResponse


@pytest.mark.asyncio
async def test_handler_gets_verified_identity(make_session, fake_backend):
    seen = {}

    async def handler(auth, request, backend, thing_id):
        seen["user_id"] = auth.user_id
        seen["thing_id"] = thing_id
        return BackendResponse(status_code=202, body={"ok": True})

    resp = await run_authenticated(
        "test op", handler, session=make_session(), request=None, backend=fake_backend.client(), thing_id="t-1"
    )

    assert resp.status_code == 202
    assert seen == {"user_id": "user-123", "thing_id": "t-1"}


@pytest.mark.asyncio
async def test_handler_not_called_without_session(fake_backend):
    async def handler(auth, request, backend):
        raise AssertionError("must not be called")

    resp = await run_authenticated("test op", handler, session=None, request=None, backend=fake_backend.client())

    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_handler_exception_becomes_generic_500(make_session, fake_backend):
    async def handler(auth, request, backend):
        raise RuntimeError("secret internal detail")

    resp = await run_authenticated(
        "test op", handler, session=make_session(), request=None, backend=fake_backend.client(),
        failure_message="Failed to do the thing",
    )

    assert resp.status_code == 500
    assert b"secret internal detail" not in resp.body
    assert b"Failed to do the thing" in resp.body


@pytest.mark.asyncio
async def test_unauthorized_outcome_from_forwarding_becomes_401(make_session, fake_backend):
    async def handler(auth, request, backend):
        return Unauthorized("credential vanished")

    resp = await run_authenticated("test op", handler, session=make_session(), request=None, backend=fake_backend.client())

    assert resp.status_code == 401
    assert resp.body == b'{"error":"Unauthorized"}'


@pytest.mark.asyncio
async def test_invalid_body_outcome_becomes_400(make_session, fake_backend):
    async def handler(auth, request, backend):
        return InvalidBody("Request body must be valid JSON")

    resp = await run_authenticated("test op", handler, session=make_session(), request=None, backend=fake_backend.client())

    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_forward_refuses_without_credential(fake_backend):
    client = fake_backend.client()
    result = await client.forward(AuthContext(user_id="u", email=None, access_token=None), "GET", "/api/subscriptions/u")

    assert isinstance(result, Unauthorized)
    assert fake_backend.calls == []


@pytest.mark.asyncio
async def test_health_needs_no_session(gateway_client, current_session):
    current_session.value = None
    resp = await gateway_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "ok"
    assert "x-request-id" in resp.headers


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(gateway_client):
    resp = await gateway_client.get("/api/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_backend_response_success_range():
    assert BackendResponse(status_code=201).is_success
    assert not BackendResponse(status_code=409).is_success
    assert not BackendResponse(status_code=302).is_success
