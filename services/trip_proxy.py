# Trip operations forwarded to the backend. Create/delete are admin-only;
# the role check happens in the gateway before these run.
from urllib.parse import quote

from fastapi import Request

from core.auth import AuthContext
from core.gateway import InvalidBody, Outcome, read_json_body
from services.backend_client import BackendClient

TRIPS_PATH = "/api/trips"


async def create_trip(auth: AuthContext, request: Request, backend: BackendClient) -> Outcome:
    body = await read_json_body(request)
    if isinstance(body, InvalidBody):
        return body
    return await backend.forward(auth, "POST", TRIPS_PATH, json=body)


async def delete_trip(auth: AuthContext, request: Request, backend: BackendClient, trip_id: str) -> Outcome:
    return await backend.forward(auth, "DELETE", f"{TRIPS_PATH}/{quote(trip_id, safe='')}")


async def list_trips_by_subscription(auth: AuthContext, request: Request, backend: BackendClient, subscription_id: str) -> Outcome:
    return await backend.forward(auth, "GET", f"{TRIPS_PATH}/subscription/{quote(subscription_id, safe='')}")
