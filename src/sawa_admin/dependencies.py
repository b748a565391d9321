"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.

Everything session-shaped is built per request from the token cookie:
nothing about a session outlives the request that carried it.
"""

from dataclasses import dataclass
from typing import Annotated

import httpx
from fastapi import Depends, Request

from sawa_admin.client import ApiClient
from sawa_admin.config import Settings, settings
from sawa_admin.controllers.toasts import Toaster
from sawa_admin.exceptions import DomainError, NotFoundError, SessionExpiredError
from sawa_admin.gateways.base import Gateway
from sawa_admin.gateways.registry import Gateways
from sawa_admin.schemas.result import Err, Result
from sawa_admin.schemas.views import ToastOut
from sawa_admin.services.auth import AuthService
from sawa_admin.session import RouteNavigator, SessionContext, SessionGuard


def get_settings() -> Settings:
    return settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """The pooled client opened in the app lifespan."""
    return request.app.state.http  # type: ignore[no-any-return]


SettingsDep = Annotated[Settings, Depends(get_settings)]
HttpClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]


@dataclass
class DashboardContext:
    """Per-request wiring: session, guard, gateways and toasts."""

    settings: Settings
    session: SessionContext
    navigator: RouteNavigator
    toaster: Toaster
    gateways: Gateways

    @property
    def auth(self) -> AuthService:
        return AuthService(self.gateways.auth, self.session, self.navigator, self.toaster)

    def ensure_session(self) -> None:
        """Turn a redirect requested by the session guard into SessionExpiredError."""
        if self.navigator.redirected_to is not None:
            raise SessionExpiredError(self.navigator.redirected_to)

    def toasts(self) -> list[ToastOut]:
        return [ToastOut.from_toast(toast) for toast in self.toaster.drain()]

    def unwrap[T](self, result: Result[T], gateway: Gateway[T], entity_id: int) -> T:
        """Data of a single-entity result, or the matching HTTP-boundary error."""
        self.ensure_session()
        if isinstance(result, Err):
            if result.not_found:
                raise NotFoundError(gateway.label.capitalize(), entity_id)
            raise DomainError(result.message)
        return result.data


def get_context(request: Request, settings: SettingsDep, http: HttpClient) -> DashboardContext:
    session = SessionContext(token=request.cookies.get(settings.token_cookie_name))
    navigator = RouteNavigator(route=request.url.path)
    client = ApiClient(settings, session, SessionGuard(navigator), http=http)
    return DashboardContext(
        settings=settings,
        session=session,
        navigator=navigator,
        toaster=Toaster(limit=settings.toast_limit),
        gateways=Gateways.build(client),
    )


Context = Annotated[DashboardContext, Depends(get_context)]
