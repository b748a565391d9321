"""Session state and the session guard.

SessionContext holds the bearer token for one dashboard session. It is
created when a request arrives (from the token cookie), filled on login and
cleared on logout; nothing about the session lives in module globals.

SessionGuard is the only cross-screen protocol rule: when the marketplace
API answers 401, the user is sent back to the login page unless they are
already on one of the pre-authentication pages.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

from sawa_admin.logging import get_logger, mask_token

logger = get_logger(__name__)

LOGIN_ROUTE = "/login"
HOME_ROUTE = "/dashboard"

PRE_AUTH_ROUTES: frozenset[str] = frozenset(
    {"/login", "/forgot-password", "/verify-otp", "/reset-password"}
)

PROTECTED_PREFIXES: tuple[str, ...] = (
    "/dashboard",
    "/users",
    "/staff",
    "/listings",
    "/categories",
    "/housetypes",
    "/features",
    "/reviews",
    "/bookings",
    "/transactions",
    "/notifications",
    "/settings",
    "/profile",
    "/uploads",
)


@dataclass
class SessionContext:
    """Token and signed-in user of one dashboard session."""

    token: str | None = None
    user: dict[str, Any] | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def sign_in(self, token: str, user: dict[str, Any] | None = None) -> None:
        self.token = token
        self.user = user
        logger.info("session_started", token=mask_token(token))

    def sign_out(self) -> None:
        logger.info("session_cleared", token=mask_token(self.token))
        self.token = None
        self.user = None


class Navigator(Protocol):
    """Where the user is and how to send them elsewhere."""

    @property
    def current_route(self) -> str: ...

    def redirect(self, path: str) -> None: ...


@dataclass
class RouteNavigator:
    """Navigator that records the redirect for the HTTP layer to perform.

    Only the first redirect counts; later ones during the same request are
    ignored so overlapping 401s produce one navigation.
    """

    route: str = "/"
    redirected_to: str | None = field(default=None, init=False)

    @property
    def current_route(self) -> str:
        return self.route

    def redirect(self, path: str) -> None:
        if self.redirected_to is None:
            self.redirected_to = path


def is_pre_auth_route(path: str) -> bool:
    return path.rstrip("/") in PRE_AUTH_ROUTES


def is_protected_route(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PROTECTED_PREFIXES)


class SessionGuard:
    """Reacts to 401 responses from the marketplace API."""

    def __init__(self, navigator: Navigator, login_route: str = LOGIN_ROUTE) -> None:
        self.navigator = navigator
        self.login_route = login_route

    def on_unauthorized(self) -> None:
        route = self.navigator.current_route
        if is_pre_auth_route(route):
            logger.info("unauthorized_on_pre_auth_route", route=route)
            return
        logger.warning("session_rejected_redirecting", route=route, to=self.login_route)
        self.navigator.redirect(self.login_route)


def entry_redirect(path: str, has_token: bool) -> str | None:
    """Where a page request should be sent before it is handled, if anywhere.

    - ``/`` goes to the dashboard or the login page depending on the token
    - dashboard pages without a token go to the login page
    - the login page with a token goes to the dashboard
    """
    if path == "/":
        return HOME_ROUTE if has_token else LOGIN_ROUTE
    if is_protected_route(path) and not has_token:
        return LOGIN_ROUTE
    if path.rstrip("/") == LOGIN_ROUTE and has_token:
        return HOME_ROUTE
    return None
