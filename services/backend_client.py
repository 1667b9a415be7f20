"""
HTTP client for the backend trip/notification service.

Every call is single-shot and not retried. Non-2xx responses are returned to
the caller as data, never raised: the backend is the one who decides what a
409 or 404 means, and the UI reacts to that status.
"""
import logging
from dataclasses import dataclass
from json import dumps as json_dumps
from typing import Any, Optional, Union

import httpx

from config.settings import settings
from core.auth import AuthContext, Unauthorized, create_headers

logger = logging.getLogger(__name__)

# distinguishes "no request body" from a JSON null body
NO_BODY = object()


@dataclass(frozen=True)
class BackendResponse:
    status_code: int
    body: Any = None
    # set only when the backend answered with something other than JSON
    raw_content_type: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class BackendClient:
    def __init__(self, base_url: str, timeout: float = 30.0, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def forward(
        self,
        auth: AuthContext,
        method: str,
        path: str,
        json: Any = NO_BODY,
    ) -> Union[BackendResponse, Unauthorized]:
        """
        Send one request to the backend on behalf of `auth`.

        Returns Unauthorized without touching the network if no bearer
        credential can be composed.
        """
        headers = create_headers(auth)
        if "Authorization" not in headers:
            logger.warning("Refusing to forward %s %s without a credential", method, path)
            return Unauthorized("no credential for backend call")

        url = self.base_url + path
        logger.info("Forwarding %s %s (Authorization: [present])", method, url)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            if json is NO_BODY:
                resp = await client.request(method, url, headers=headers)
            else:
                content = json_dumps(json, ensure_ascii=False).encode("utf-8")
                resp = await client.request(method, url, headers=headers, content=content)

        result = _to_backend_response(resp, url)
        if not result.is_success:
            logger.warning("Backend %s %s returned %s", method, url, result.status_code)
        return result


def _to_backend_response(resp: httpx.Response, url: str) -> BackendResponse:
    text = resp.text or ""
    if not text:
        return BackendResponse(status_code=resp.status_code)
    try:
        return BackendResponse(status_code=resp.status_code, body=resp.json())
    except ValueError:
        logger.warning("Non-JSON response from %s (status=%s)", url, resp.status_code)
        return BackendResponse(
            status_code=resp.status_code,
            body=text,
            raw_content_type=resp.headers.get("content-type", "text/plain"),
        )


def get_backend_client() -> BackendClient:
    """FastAPI dependency; overridden in tests with a mock transport."""
    return BackendClient(settings.BACKEND_URL, timeout=settings.BACKEND_TIMEOUT_SEC)
