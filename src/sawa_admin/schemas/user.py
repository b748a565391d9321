"""User and staff schemas.

Staff members are users with role ``employee``; they share the read model
but have their own forms (password on create, department/position).

Edit forms are seeded from the stored record, so they accept every role and
status the API can hand back and only check that an email looks like one.
Create forms keep the full ``EmailStr`` check.
"""

import re
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BeforeValidator, EmailStr, Field, computed_field, field_validator

from sawa_admin.schemas.common import Entity, Form, Phone, passwords_match

# Older rows carry the misspelt status the first dashboard release sent
LEGACY_STATUSES = {"banneded": "banned"}

_EMAIL_SHAPE = re.compile(r"^[^@\s]+@[^@\s]+$")


def normalize_status(value: Any) -> Any:
    if isinstance(value, str):
        return LEGACY_STATUSES.get(value, value)
    return value


def _check_email_shape(value: str) -> str:
    if not _EMAIL_SHAPE.match(value):
        raise ValueError("value is not a valid email address")
    return value


UserRole = Literal["user", "admin", "host", "employee"]
UserStatus = Annotated[
    Literal["active", "inactive", "pending", "banned"], BeforeValidator(normalize_status)
]
StaffStatus = Annotated[Literal["active", "pending", "banned"], BeforeValidator(normalize_status)]
LooseEmail = Annotated[str, AfterValidator(_check_email_shape)]


class User(Entity):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    country_code: str | None = None
    phone_number: str | None = None
    phone: str | None = None
    role: str | None = None
    status: Annotated[str | None, BeforeValidator(normalize_status)] = None
    id_verified: str | None = None
    avatar: str | None = None
    avatar_url: str | None = None
    department: str | None = None
    position: str | None = None
    wallet_balance: float | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class UserForm(Form):
    """Create form for a guest, host or admin account."""

    first_name: str = Field(min_length=2)
    last_name: str = Field(min_length=2)
    email: EmailStr
    country_code: str = "+963"
    phone_number: Phone = Field(min_length=9)
    role: UserRole = "user"
    status: UserStatus = "active"
    language: str = "ar"


class UserUpdateForm(Form):
    first_name: str | None = Field(default=None, min_length=2)
    last_name: str | None = Field(default=None, min_length=2)
    email: LooseEmail | None = None
    country_code: str | None = None
    phone_number: Phone | None = None
    role: UserRole | None = None
    status: UserStatus | None = None


class StaffForm(Form):
    """Create form for a staff member."""

    first_name: str = Field(min_length=2)
    last_name: str = Field(min_length=2)
    email: EmailStr
    department: str
    position: str
    phone: Phone = Field(min_length=9)
    avatar: str | None = None
    password: str = Field(min_length=8)
    password_confirmation: str
    status: StaffStatus = "active"
    role: Literal["employee"] = "employee"
    skills: str | None = None

    check_confirmation = field_validator("password_confirmation")(passwords_match)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True, exclude={"password_confirmation"})


class StaffUpdateForm(Form):
    """Edit form for a staff member; every field is optional, no password."""

    first_name: str | None = Field(default=None, min_length=2)
    last_name: str | None = Field(default=None, min_length=2)
    email: LooseEmail | None = None
    department: str | None = None
    position: str | None = None
    avatar: str | None = None
    status: StaffStatus | None = None


class StatusForm(Form):
    """Status change sent by a row action (users, staff, listings, transactions)."""

    status: str = Field(min_length=1)
