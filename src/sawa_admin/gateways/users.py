"""User and staff gateways.

Staff are users with role ``employee``; the staff gateway shares the users
endpoint and pins that role on every list call.
"""

from collections.abc import Mapping
from typing import Any

from sawa_admin.gateways.base import Gateway
from sawa_admin.schemas.result import Result
from sawa_admin.schemas.user import User

STAFF_ROLE = "employee"


class UsersGateway(Gateway[User]):
    resource = "users"
    model = User
    label = "user"

    async def update_status(self, user_id: int, status: str) -> Result[User | None]:
        return await self._action(
            "PUT",
            f"{self.path}/{user_id}/status",
            f"Failed to update {self.label} status",
            json={"status": status},
        )


class StaffGateway(UsersGateway):
    label = "staff member"
    plural = "staff"

    async def list(
        self,
        page: int = 1,
        per_page: int = 10,
        filters: Mapping[str, Any] | None = None,
    ) -> Result[list[User]]:
        return await super().list(page, per_page, {**(filters or {}), "role": STAFF_ROLE})
