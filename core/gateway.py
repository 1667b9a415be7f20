"""
Authenticated gateway handler.

Every proxied route goes through `run_authenticated`:

    RECEIVED -> VALIDATING -> AUTHORIZED -> DELEGATING -> RESPONDED
                           -> UNAUTHORIZED -> RESPONDED

The business handler receives the verified AuthContext and nothing else
about the session. It answers with a typed outcome (BackendResponse,
Unauthorized or InvalidBody) which is turned into the HTTP response here.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from core.auth import AuthContext, Unauthorized, validate_session
from core.response import error_response, forbidden, unauthorized
from core.session import Session
from services.backend_client import BackendClient, BackendResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvalidBody:
    """Outcome: the caller's request body could not be used."""
    message: str = "Invalid request body"


Outcome = Union[BackendResponse, Unauthorized, InvalidBody]
Handler = Callable[..., Awaitable[Outcome]]


async def read_json_body(request: Request, require_object: bool = False) -> Union[Any, InvalidBody]:
    raw = await request.body()
    if not raw:
        return InvalidBody("Request body is required")
    try:
        body = json.loads(raw)
    except ValueError:
        return InvalidBody("Request body must be valid JSON")
    if require_object and not isinstance(body, dict):
        return InvalidBody("Request body must be a JSON object")
    return body


def relay(result: BackendResponse) -> Response:
    """Backend status and body passed back unchanged."""
    if result.raw_content_type is not None:
        return Response(status_code=result.status_code, content=result.body, media_type=result.raw_content_type)
    if result.body is None:
        return Response(status_code=result.status_code, content=b"")
    return JSONResponse(status_code=result.status_code, content=result.body)


def to_response(outcome: Outcome) -> Response:
    if isinstance(outcome, BackendResponse):
        return relay(outcome)
    if isinstance(outcome, Unauthorized):
        return unauthorized()
    if isinstance(outcome, InvalidBody):
        return error_response(400, outcome.message)
    raise TypeError(f"unexpected handler outcome: {type(outcome).__name__}")


async def run_authenticated(
    operation: str,
    handler: Handler,
    *,
    session: Optional[Session],
    request: Request,
    backend: BackendClient,
    failure_message: str = "Internal server error",
    required_role: Optional[str] = None,
    **context: Any,
) -> Response:
    """
    Validate the session, then delegate to `handler(auth, request, backend, **context)`.

    No backend call is made unless the session validates (and, for
    role-restricted operations, carries `required_role`). Exceptions from the
    handler are contained here as a 500 with `failure_message`.
    """
    auth = validate_session(session)
    if isinstance(auth, Unauthorized):
        logger.info("%s: rejected (%s)", operation, auth.reason)
        return unauthorized()

    if required_role is not None and not auth.has_role(required_role):
        logger.warning("%s: user %s lacks role %s", operation, auth.user_id, required_role)
        return forbidden()

    try:
        outcome = await handler(auth, request, backend, **context)
    except Exception:
        logger.exception("%s failed for user %s", operation, auth.user_id)
        return error_response(500, failure_message)

    if isinstance(outcome, Unauthorized):
        logger.warning("%s: credential rejected while forwarding (%s)", operation, outcome.reason)
    return to_response(outcome)
