"""Session context, 401 guard and page entry redirects."""

import pytest

from sawa_admin.session import (
    RouteNavigator,
    SessionContext,
    SessionGuard,
    entry_redirect,
    is_pre_auth_route,
    is_protected_route,
)


@pytest.mark.parametrize(
    "route",
    ["/dashboard", "/users", "/users/12", "/housetypes", "/notifications", "/reviews/3"],
)
def test_unauthorized_on_protected_route_redirects(route: str) -> None:
    navigator = RouteNavigator(route=route)

    SessionGuard(navigator).on_unauthorized()

    assert navigator.redirected_to == "/login"


@pytest.mark.parametrize("route", ["/login", "/forgot-password", "/verify-otp", "/reset-password/"])
def test_unauthorized_on_pre_auth_route_stays(route: str) -> None:
    navigator = RouteNavigator(route=route)

    SessionGuard(navigator).on_unauthorized()

    assert navigator.redirected_to is None


def test_overlapping_unauthorized_responses_redirect_once() -> None:
    navigator = RouteNavigator(route="/bookings")
    guard = SessionGuard(navigator, login_route="/login?expired=1")

    guard.on_unauthorized()
    navigator.redirect("/elsewhere")
    guard.on_unauthorized()

    assert navigator.redirected_to == "/login?expired=1"


@pytest.mark.parametrize(
    "path, has_token, expected",
    [
        ("/", True, "/dashboard"),
        ("/", False, "/login"),
        ("/users", False, "/login"),
        ("/features/4", False, "/login"),
        ("/users", True, None),
        ("/login", True, "/dashboard"),
        ("/login", False, None),
        ("/forgot-password", False, None),
        ("/health", False, None),
    ],
)
def test_entry_redirect(path: str, has_token: bool, expected: str | None) -> None:
    assert entry_redirect(path, has_token) == expected


def test_route_classification() -> None:
    assert is_pre_auth_route("/verify-otp")
    assert not is_pre_auth_route("/login-help")
    assert is_protected_route("/transactions/export")
    assert not is_protected_route("/usersettings")


def test_sign_in_and_out() -> None:
    session = SessionContext()
    assert not session.is_authenticated

    session.sign_in("token-abcdefghijklmnop", {"id": 1})
    assert session.is_authenticated
    assert session.user == {"id": 1}

    session.sign_out()
    assert session.token is None
    assert session.user is None
