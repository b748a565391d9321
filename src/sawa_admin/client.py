"""Shared HTTP client for the marketplace API.

Every gateway goes through ApiClient.request(), which plays the role of the
request/response interceptors:

- outgoing: ``Authorization: Bearer <token>`` from the session, and the
  current ``X-Request-ID`` so upstream logs can be correlated
- incoming: a 401 is handed to the SessionGuard

Failures are not translated here. Transport errors propagate as
``httpx.HTTPError`` and non-2xx responses are returned as-is; the gateways
turn both into Result values.
"""

from collections.abc import Mapping
from typing import Any, Self

import httpx
import structlog

from sawa_admin.config import Settings
from sawa_admin.logging import get_logger
from sawa_admin.middleware import REQUEST_ID_HEADER
from sawa_admin.session import SessionContext, SessionGuard

logger = get_logger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json"}


def create_http_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Build the pooled client shared by every ApiClient of the application."""
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        headers=DEFAULT_HEADERS,
        timeout=httpx.Timeout(settings.api_timeout),
        transport=transport,
    )


class ApiClient:
    """One session's view of the marketplace API.

    The underlying httpx.AsyncClient is usually shared (created in the app
    lifespan) while session and guard are per request. When no client is
    passed one is created and owned, and ``aclose`` closes it.
    """

    def __init__(
        self,
        settings: Settings,
        session: SessionContext,
        guard: SessionGuard | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.session = session
        self.guard = guard
        self._owns_http = http is None
        self.http = http if http is not None else create_http_client(settings)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        request_id = structlog.contextvars.get_contextvars().get("request_id")
        if request_id:
            headers[REQUEST_ID_HEADER] = str(request_id)
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request; transport failures raise (see gateways.base.TRANSPORT_ERRORS)."""
        response = await self.http.request(
            method,
            path,
            params=params,
            json=json,
            data=data,
            files=files,
            headers=self._headers(),
        )
        logger.debug(
            "api_response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        if response.status_code == httpx.codes.UNAUTHORIZED and self.guard is not None:
            self.guard.on_unauthorized()
        return response
