# api/routes_trips.py
from typing import Optional

from fastapi import APIRouter, Depends, Request

from core.auth import ADMIN_ROLE
from core.gateway import run_authenticated
from core.session import Session, get_session
from services import trip_proxy
from services.backend_client import BackendClient, get_backend_client

router = APIRouter()


@router.post("/trips")
async def create_trip(
    request: Request,
    session: Optional[Session] = Depends(get_session),
    backend: BackendClient = Depends(get_backend_client),
):
    """Attach a found trip to a subscription (admin only)."""
    return await run_authenticated(
        "POST /api/trips",
        trip_proxy.create_trip,
        session=session,
        request=request,
        backend=backend,
        failure_message="Failed to create trip",
        required_role=ADMIN_ROLE,
    )


@router.delete("/trips/{trip_id}")
async def delete_trip(
    trip_id: str,
    request: Request,
    session: Optional[Session] = Depends(get_session),
    backend: BackendClient = Depends(get_backend_client),
):
    """Admin only."""
    return await run_authenticated(
        "DELETE /api/trips/{id}",
        trip_proxy.delete_trip,
        session=session,
        request=request,
        backend=backend,
        failure_message="Failed to delete trip",
        required_role=ADMIN_ROLE,
        trip_id=trip_id,
    )


@router.get("/trips/subscription/{subscription_id}")
async def list_trips_by_subscription(
    subscription_id: str,
    request: Request,
    session: Optional[Session] = Depends(get_session),
    backend: BackendClient = Depends(get_backend_client),
):
    return await run_authenticated(
        "GET /api/trips/subscription/{id}",
        trip_proxy.list_trips_by_subscription,
        session=session,
        request=request,
        backend=backend,
        failure_message="Failed to fetch trips",
        subscription_id=subscription_id,
    )
