"""Authentication forms (login and the password-reset flow)."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from sawa_admin.schemas.common import Form, passwords_match


class SignedIn(BaseModel):
    """Successful login response; ``data`` is the admin's profile when sent."""

    model_config = {"extra": "ignore"}

    access_token: str = Field(min_length=1)
    data: dict[str, Any] | None = None


class LoginForm(Form):
    phone: str = Field(min_length=10)
    password: str = Field(min_length=6)


class ForgotPasswordForm(Form):
    phone: str = Field(min_length=10)


class VerifyOtpForm(Form):
    phone: str = Field(min_length=10)
    otp: str = Field(pattern=r"^\d{6}$")


class ResetPasswordForm(Form):
    phone: str = Field(min_length=10)
    password: str = Field(min_length=6)
    password_confirmation: str = Field(min_length=6)

    check_confirmation = field_validator("password_confirmation")(passwords_match)
