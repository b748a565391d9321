"""The signed-in admin's own profile and password change."""

from pydantic import Field, field_validator

from sawa_admin.schemas.common import Form, passwords_match
from sawa_admin.schemas.user import LooseEmail


class ProfileForm(Form):
    first_name: str = Field(min_length=2)
    last_name: str = Field(min_length=2)
    email: LooseEmail
    avatar: str | None = Field(default=None, description="Stored filename from the image upload")
    bank_details: str | None = None


class PasswordChangeForm(Form):
    old_password: str = Field(min_length=6)
    password: str = Field(min_length=6)
    password_confirmation: str

    check_confirmation = field_validator("password_confirmation")(passwords_match)
