"""Building blocks shared by the entity and form schemas."""

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Any, Self

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    model_validator,
)

from sawa_admin.exceptions import FormValidationError

_PHONE_RE = re.compile(r"^\+?\d+$")


class LocalizedText(BaseModel):
    """Text in the primary locale (Arabic) with an optional English variant."""

    ar: str = ""
    en: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _wrap_plain_string(cls, value: Any) -> Any:
        # Some endpoints send a bare string instead of the {ar, en} object
        if isinstance(value, str):
            return {"ar": value}
        return value

    def __str__(self) -> str:
        return self.ar or self.en or ""


class Entity(BaseModel):
    """Base for records mirrored from the marketplace API.

    Unknown fields are kept so a screen can show whatever the API adds
    without a schema change here.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    created_at: datetime | None = None


def is_valid_phone(phone: str) -> bool:
    """At least 8 characters, digits only with an optional leading ``+``."""
    return len(phone) >= 8 and _PHONE_RE.match(phone) is not None


def _check_phone(phone: str) -> str:
    if not is_valid_phone(phone):
        raise ValueError("phone number must contain digits only, optionally prefixed with +")
    return phone


Phone = Annotated[str, AfterValidator(_check_phone)]


def passwords_match(value: str, info: ValidationInfo) -> str:
    """Field validator for ``password_confirmation``; reuse with field_validator()."""
    if "password" in info.data and value != info.data["password"]:
        raise ValueError("password confirmation does not match")
    return value


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten a pydantic ValidationError into ``{"name.ar": "message"}``.

    Only the first message per field is kept, the way a form shows one error
    under each input.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or "__root__"
        message = error["msg"].removeprefix("Value error, ")
        errors.setdefault(path, message)
    return errors


class Form(BaseModel):
    """Base for dialog forms.

    Subclasses declare their constraints as fields; ``validate_values`` runs
    them and raises FormValidationError with per-field messages. No network
    call happens before validation passes.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @classmethod
    def validate_values(cls, values: Mapping[str, Any]) -> Self:
        try:
            return cls.model_validate(dict(values))
        except ValidationError as exc:
            raise FormValidationError(field_errors(exc)) from exc

    @classmethod
    def from_entity(cls, entity: BaseModel) -> dict[str, Any]:
        """Initial form values for editing ``entity``."""
        data = entity.model_dump()
        return {name: data[name] for name in cls.model_fields if data.get(name) is not None}

    def to_payload(self) -> dict[str, Any]:
        """Request body for the create/update call."""
        return self.model_dump(mode="json", exclude_none=True)


class LocalizedTextInput(BaseModel):
    """Form counterpart of LocalizedText: Arabic required, English optional."""

    model_config = ConfigDict(str_strip_whitespace=True)

    ar: str = Field(min_length=1)
    en: str | None = None
