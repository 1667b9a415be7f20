import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Union

from config.settings import settings
from core.session import Session

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class AuthContext:
    """Verified identity of the caller. Only validate_session builds one."""
    user_id: str
    email: Optional[str]
    access_token: Optional[str]
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_role(self, role: str) -> bool:
        return role in self.roles


@dataclass(frozen=True)
class Unauthorized:
    """Outcome: no trustworthy session for this request."""
    reason: str = "unauthorized"


def _extract_token(session: Session) -> Optional[str]:
    """Forwardable credential from the session, or None."""
    token_set = session.token_set
    if token_set is None or not token_set.access_token or not token_set.access_token.strip():
        logger.warning("No access token in session")
        return None
    if token_set.expires_at is not None and token_set.expires_at <= int(time.time()):
        logger.warning("Access token in session has expired")
        return None
    return token_set.access_token.strip()


def validate_session(session: Optional[Session]) -> Union[AuthContext, Unauthorized]:
    """
    Single decision point for "is this caller authenticated".

    A session is either fully present (user id + credential) or rejected;
    there is no partially-trusted result.
    """
    if session is None:
        return Unauthorized("no session")

    user = session.user
    if user is None or not user.sub or not user.sub.strip():
        return Unauthorized("no user id")

    token = _extract_token(session)
    if token is None:
        return Unauthorized("no credential")

    roles = set(user.roles)
    if user.sub in settings.admin_user_ids:
        roles.add(ADMIN_ROLE)

    return AuthContext(user_id=user.sub, email=user.email, access_token=token, roles=frozenset(roles))


def create_headers(auth: AuthContext) -> dict[str, str]:
    """
    Outgoing headers for a backend call.

    Authorization is added only when a credential is present; a missing
    credential is not an error here.
    """
    headers = {"Content-Type": "application/json"}
    if auth.access_token:
        headers["Authorization"] = f"Bearer {auth.access_token}"
    return headers
