"""Dashboard middleware: request tracing and page access by session cookie."""

import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from sawa_admin.logging import get_logger
from sawa_admin.session import entry_redirect

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add request ID to every request for tracing.

    - Reads X-Request-ID from request headers, or generates a UUID if missing
    - Binds request_id to structlog context (auto-included in all logs and
      forwarded to the marketplace API by ApiClient)
    - Adds X-Request-ID to response headers
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class SessionCookieMiddleware(BaseHTTPMiddleware):
    """Send page requests to the right place before any handler runs.

    Only checks that the token cookie exists. Whether the token is still
    valid is found out on the first upstream call, where a 401 triggers the
    SessionGuard.
    """

    def __init__(self, app: ASGIApp, cookie_name: str = "token") -> None:
        super().__init__(app)
        self.cookie_name = cookie_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        has_token = bool(request.cookies.get(self.cookie_name))
        target = entry_redirect(request.url.path, has_token)
        # Form posts to /login must go through even with a stale cookie
        if target is not None and (not has_token or request.method in ("GET", "HEAD")):
            logger.info("entry_redirect", path=request.url.path, to=target)
            return RedirectResponse(target, status_code=303)
        return await call_next(request)
