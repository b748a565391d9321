"""Platform settings stored by the marketplace: one key/value row each.

Values travel as strings whatever their type; ``type`` says how the
marketplace reads them (``"1"``/``"0"`` for booleans).
"""

from typing import Annotated, Any, Literal, Self

from pydantic import BeforeValidator, Field, model_validator

from sawa_admin.schemas.common import Entity, Form

SettingType = Literal["text", "float", "bool"]


def _as_text(value: Any) -> Any:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int | float):
        return str(value)
    return value


class SiteSetting(Entity):
    key: str
    value: Annotated[str | None, BeforeValidator(_as_text)] = None
    type: str | None = None


class SiteSettingForm(Form):
    key: str = Field(min_length=1, pattern=r"^[a-z][a-z0-9_]*$")
    value: Annotated[str, BeforeValidator(_as_text)]
    type: SettingType = "text"

    @model_validator(mode="after")
    def _value_matches_type(self) -> Self:
        if self.type == "float":
            try:
                float(self.value)
            except ValueError:
                raise ValueError("value must be a number") from None
        elif self.type == "bool" and self.value not in ("0", "1"):
            raise ValueError("value must be 0 or 1")
        return self
