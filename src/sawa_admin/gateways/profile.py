"""The signed-in admin's profile: ``/admin/profile``."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from sawa_admin.gateways.base import ApiGateway, logger
from sawa_admin.schemas.profile import PasswordChangeForm
from sawa_admin.schemas.result import Err, Ok, Result
from sawa_admin.schemas.user import User


class ProfileGateway(ApiGateway):
    name = "profile"
    path = "/admin/profile"

    async def get(self) -> Result[User]:
        failure = "Failed to fetch profile"
        body = await self._send("GET", self.path, failure=failure)
        if isinstance(body, Err):
            return body
        return self._parse(body, failure)

    async def update(self, payload: Mapping[str, Any]) -> Result[User | None]:
        failure = "Failed to update profile"
        body = await self._send("PUT", self.path, failure=failure, json=dict(payload))
        if isinstance(body, Err):
            return body
        if isinstance(body.get("data"), Mapping):
            return self._parse(body, failure)
        return Ok(None)

    async def change_password(self, form: PasswordChangeForm) -> Result[str | None]:
        """Same endpoint as ``update``; the API tells the two apart by ``old_password``."""
        body = await self._send(
            "PUT", self.path, failure="Failed to change password", json=form.to_payload()
        )
        if isinstance(body, Err):
            return body
        message = body.get("message")
        return Ok(message if isinstance(message, str) else None)

    def _parse(self, body: Mapping[str, Any], failure: str) -> Result[User]:
        try:
            return Ok(User.model_validate(body.get("data")))
        except ValidationError as exc:
            logger.warning("gateway_unexpected_shape", gateway=self.name, errors=exc.error_count())
            return Err(failure)
