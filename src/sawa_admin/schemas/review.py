"""Review schemas.

Reviews are moderated, not edited: the only mutation besides delete is
blocking and unblocking, tracked upstream through ``blocked_at``.
"""

from datetime import datetime

from pydantic import BaseModel, computed_field

from sawa_admin.schemas.common import Entity

BLOCKED_LABEL = "محظور"
ACTIVE_LABEL = "نشط"


class ReviewAuthor(BaseModel):
    id: int
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None


class Review(Entity):
    booking_id: int | None = None
    user_id: int | None = None
    comment: str | None = None
    rating: int
    blocked_at: datetime | None = None
    user: ReviewAuthor | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_blocked(self) -> bool:
        return self.blocked_at is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status_label(self) -> str:
        return BLOCKED_LABEL if self.is_blocked else ACTIVE_LABEL
