"""Authentication endpoints: login/logout, profile and the password-reset flow."""

from typing import Any

from pydantic import ValidationError

from sawa_admin.gateways.base import ApiGateway, logger
from sawa_admin.schemas.auth import SignedIn
from sawa_admin.schemas.result import Err, Ok, Result

ADMIN_ROLE = "admin"


class AuthGateway(ApiGateway):
    name = "auth"

    async def login(self, phone: str, password: str) -> Result[SignedIn]:
        failure = "Login failed"
        body = await self._send(
            "POST",
            "/auth/login",
            failure=failure,
            json={"phone": phone, "password": password, "role": ADMIN_ROLE},
        )
        if isinstance(body, Err):
            return body
        try:
            return Ok(SignedIn.model_validate(body))
        except ValidationError:
            logger.warning("login_response_without_token")
            return Err(failure)

    async def me(self) -> Result[dict[str, Any]]:
        failure = "Failed to fetch profile"
        body = await self._send("GET", "/auth/me", failure=failure)
        if isinstance(body, Err):
            return body
        user = body.get("data")
        if not isinstance(user, dict):
            return Err(failure)
        return Ok(user)

    async def logout(self) -> Result[None]:
        body = await self._send("POST", "/auth/logout", failure="Logout failed", json={})
        if isinstance(body, Err):
            return body
        return Ok(None)

    async def forgot_password(self, phone: str) -> Result[str | None]:
        return await self._message(
            "/auth/forgot-password", {"phone": phone}, "Failed to send verification code"
        )

    async def verify_otp(self, phone: str, otp: str) -> Result[str | None]:
        return await self._message(
            "/auth/verify-otp", {"phone": phone, "otp": otp}, "Invalid verification code"
        )

    async def reset_password(
        self, phone: str, password: str, password_confirmation: str
    ) -> Result[str | None]:
        return await self._message(
            "/auth/reset-password",
            {
                "phone": phone,
                "password": password,
                "password_confirmation": password_confirmation,
            },
            "Failed to reset password",
        )

    async def _message(self, path: str, payload: dict[str, Any], failure: str) -> Result[str | None]:
        """POST and keep the server's confirmation message, if it sent one."""
        body = await self._send("POST", path, failure=failure, json=payload)
        if isinstance(body, Err):
            return body
        message = body.get("message")
        return Ok(message if isinstance(message, str) else None)
