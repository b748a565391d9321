from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from sawa_admin.client import create_http_client
from sawa_admin.config import settings
from sawa_admin.exceptions import (
    DomainError,
    FormValidationError,
    NotFoundError,
    SessionExpiredError,
)
from sawa_admin.logging import get_logger
from sawa_admin.middleware import RequestIDMiddleware, SessionCookieMiddleware
from sawa_admin.routers import actions, auth, home, profile, screens, uploads
from sawa_admin.schemas.error import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager. Code before yield runs on startup, after yield on shutdown.

    Startup: open the pooled HTTP client every request's gateways share.
    Shutdown: close its connections.
    """
    app.state.http = create_http_client(settings)
    logger.info("api_client_ready", base_url=settings.api_base_url)
    yield
    await app.state.http.aclose()


app = FastAPI(title="Sawa Admin", lifespan=lifespan)
# Added last runs first: the request ID is bound before any redirect is logged
app.add_middleware(SessionCookieMiddleware, cookie_name=settings.token_cookie_name)
app.add_middleware(RequestIDMiddleware)

app.include_router(auth.router)
app.include_router(home.router)
app.include_router(uploads.router)
app.include_router(profile.router)
app.include_router(actions.router)
app.include_router(screens.router)


def _error_json(code: str, message: str, fields: dict[str, str] | None = None) -> dict[str, object]:
    """Build the standard error envelope as a dict for JSONResponse."""
    detail = ErrorDetail(code=code, message=message, fields=fields)
    return ErrorResponse(error=detail).model_dump(exclude_none=True)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Return 404 with the entity details."""
    return JSONResponse(status_code=404, content=_error_json("not_found", exc.message))


@app.exception_handler(FormValidationError)
async def form_validation_handler(request: Request, exc: FormValidationError) -> JSONResponse:
    """Return 422 with one message per invalid field."""
    return JSONResponse(
        status_code=422,
        content=_error_json("validation_error", exc.message, exc.fields),
    )


@app.exception_handler(SessionExpiredError)
async def session_expired_handler(request: Request, exc: SessionExpiredError) -> RedirectResponse:
    """Send the browser to the login page and drop the rejected token."""
    logger.info("session_expired", path=request.url.path, to=exc.location)
    response = RedirectResponse(exc.location, status_code=303)
    response.delete_cookie(settings.token_cookie_name, path="/")
    return response


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return 400 for failed upstream calls and other domain-level violations."""
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json("domain_error", exc.message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response.

    - Logs full exception with traceback (includes request_id from context)
    - Returns generic error to client (no stack traces leaked)
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
    )


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness check; does not call the marketplace API."""
    return {"status": "ok"}
