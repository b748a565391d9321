"""Notification schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from sawa_admin.schemas.common import Entity, Form

# Checked in order; the first fragment found in notificationable_type wins
_KINDS: tuple[tuple[str, str], ...] = (
    ("Booking", "booking"),
    ("Listing", "listing"),
    ("User", "user"),
    ("Payment", "payment"),
    ("Review", "review"),
    ("System", "system"),
    ("Report", "report"),
)


class NotificationUser(BaseModel):
    id: int
    name: str | None = None
    email: str | None = None
    avatar: str | None = None


class Notification(Entity):
    user_id: int | None = None
    title: str
    message: str
    read_at: datetime | None = None
    notificationable_id: int | None = None
    notificationable_type: str = ""
    user: NotificationUser | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def kind(self) -> str:
        for fragment, kind in _KINDS:
            if fragment in self.notificationable_type:
                return kind
        return "general"


class NotificationForm(Form):
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    user_id: int | None = Field(default=None, description="Omit to notify every user")
