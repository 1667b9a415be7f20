# api/routes_subscriptions.py
from typing import Optional

from fastapi import APIRouter, Depends, Request

from core.gateway import run_authenticated
from core.session import Session, get_session
from services import subscription_proxy
from services.backend_client import BackendClient, get_backend_client

router = APIRouter()


@router.get("/subscriptions")
async def list_subscriptions(
    request: Request,
    session: Optional[Session] = Depends(get_session),
    backend: BackendClient = Depends(get_backend_client),
):
    """List the caller's own subscriptions."""
    return await run_authenticated(
        "GET /api/subscriptions",
        subscription_proxy.list_subscriptions,
        session=session,
        request=request,
        backend=backend,
        failure_message="Failed to fetch subscriptions",
    )


@router.post("/subscriptions")
async def create_subscription(
    request: Request,
    session: Optional[Session] = Depends(get_session),
    backend: BackendClient = Depends(get_backend_client),
):
    """
    Create a subscription for the caller.

    - 201/200: whatever the backend answers on success.
    - 409: backend already has an identical active subscription (relayed).
    """
    return await run_authenticated(
        "POST /api/subscriptions",
        subscription_proxy.create_subscription,
        session=session,
        request=request,
        backend=backend,
        failure_message="Failed to create subscription",
    )


@router.put("/subscriptions/{subscription_id}")
async def update_subscription(
    subscription_id: str,
    request: Request,
    session: Optional[Session] = Depends(get_session),
    backend: BackendClient = Depends(get_backend_client),
):
    """Partial update, e.g. {"is_active": false}."""
    return await run_authenticated(
        "PUT /api/subscriptions/{id}",
        subscription_proxy.update_subscription,
        session=session,
        request=request,
        backend=backend,
        failure_message="Failed to update subscription",
        subscription_id=subscription_id,
    )


@router.delete("/subscriptions/{subscription_id}")
async def delete_subscription(
    subscription_id: str,
    request: Request,
    session: Optional[Session] = Depends(get_session),
    backend: BackendClient = Depends(get_backend_client),
):
    return await run_authenticated(
        "DELETE /api/subscriptions/{id}",
        subscription_proxy.delete_subscription,
        session=session,
        request=request,
        backend=backend,
        failure_message="Failed to delete subscription",
        subscription_id=subscription_id,
    )
