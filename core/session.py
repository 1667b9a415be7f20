"""
Session loading from the identity provider's session token.

The identity provider (login, refresh, logout) lives outside this service.
It hands the browser a signed session token; the gateway only ever reads it.
`get_session` is the one place that touches the request for session state,
and it is a FastAPI dependency so tests can swap in any Session fixture via
`app.dependency_overrides[get_session]`.
"""
import logging
from typing import Optional

import jwt
from fastapi import Request
from pydantic import BaseModel, Field, ValidationError

from config.settings import settings

logger = logging.getLogger(__name__)


class SessionUser(BaseModel):
    sub: Optional[str] = None
    email: Optional[str] = None
    roles: list[str] = Field(default_factory=list)


class TokenSet(BaseModel):
    access_token: Optional[str] = None
    # epoch seconds; None means the provider did not say
    expires_at: Optional[int] = None


class Session(BaseModel):
    """Provider-issued proof of a logged-in user."""
    user: Optional[SessionUser] = None
    token_set: Optional[TokenSet] = None


def decode_session_token(token: str) -> Optional[Session]:
    """Verify and decode a session token. Returns None for anything untrusted."""
    try:
        payload = jwt.decode(token, settings.SESSION_SECRET, algorithms=[settings.SESSION_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Session token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("Session token rejected: %s", e)
        return None

    try:
        return Session.model_validate(payload)
    except ValidationError as e:
        logger.warning("Session token has unexpected shape: %s", e.error_count())
        return None


async def get_session(request: Request) -> Optional[Session]:
    """FastAPI dependency: the current request's session, or None."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    return decode_session_token(token)
