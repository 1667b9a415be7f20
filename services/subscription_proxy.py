"""
Subscription operations forwarded to the backend.

Payloads pass through unchanged, except that create stamps the caller's
verified user_id/email over whatever the client sent.
"""
import logging
from urllib.parse import quote

from fastapi import Request

from core.auth import AuthContext
from core.gateway import InvalidBody, Outcome, read_json_body
from services.backend_client import BackendClient

logger = logging.getLogger(__name__)

SUBSCRIPTIONS_PATH = "/api/subscriptions"


async def list_subscriptions(auth: AuthContext, request: Request, backend: BackendClient) -> Outcome:
    return await backend.forward(auth, "GET", f"{SUBSCRIPTIONS_PATH}/{quote(auth.user_id, safe='')}")


async def create_subscription(auth: AuthContext, request: Request, backend: BackendClient) -> Outcome:
    body = await read_json_body(request, require_object=True)
    if isinstance(body, InvalidBody):
        return body

    # server-trusted identity wins over client-supplied values
    payload = {**body, "user_id": auth.user_id, "email": auth.email}
    if body.get("user_id") not in (None, auth.user_id):
        logger.warning("Ignoring client-supplied user_id on subscription create for %s", auth.user_id)

    result = await backend.forward(auth, "POST", SUBSCRIPTIONS_PATH, json=payload)
    if getattr(result, "status_code", None) == 409:
        logger.info("Duplicate subscription for user %s", auth.user_id)
    return result


async def update_subscription(auth: AuthContext, request: Request, backend: BackendClient, subscription_id: str) -> Outcome:
    body = await read_json_body(request)
    if isinstance(body, InvalidBody):
        return body
    return await backend.forward(auth, "PUT", f"{SUBSCRIPTIONS_PATH}/{quote(subscription_id, safe='')}", json=body)


async def delete_subscription(auth: AuthContext, request: Request, backend: BackendClient, subscription_id: str) -> Outcome:
    return await backend.forward(auth, "DELETE", f"{SUBSCRIPTIONS_PATH}/{quote(subscription_id, safe='')}")
