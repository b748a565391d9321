from sawa_admin.gateways.base import Gateway
from sawa_admin.schemas.notification import Notification
from sawa_admin.schemas.result import Err, Ok, Result


class NotificationsGateway(Gateway[Notification]):
    resource = "notifications"
    model = Notification
    label = "notification"

    async def mark_read(self, notification_id: int) -> Result[Notification | None]:
        return await self._action(
            "PUT", f"{self.path}/{notification_id}/read", "Failed to mark notification as read"
        )

    async def mark_all_read(self) -> Result[Notification | None]:
        return await self._action(
            "PUT", f"{self.path}/read-all", "Failed to mark notifications as read"
        )

    async def unread_count(self) -> Result[int]:
        failure = "Failed to fetch unread notifications count"
        body = await self._send("GET", f"{self.path}/unread-count", failure=failure)
        if isinstance(body, Err):
            return body
        count = body.get("count", body.get("data"))
        if not isinstance(count, int):
            return Err(failure)
        return Ok(count)
