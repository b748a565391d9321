"""Catalog schemas: categories, house types and features.

The three share one shape (localized name and description, an uploaded
icon, a visibility flag), so they share a base model and a base form.
"""

from typing import Any

from pydantic import Field, computed_field

from sawa_admin.schemas.common import Entity, Form, LocalizedText, LocalizedTextInput

VISIBLE_LABEL = "مرئي"
HIDDEN_LABEL = "مخفي"


class CatalogItem(Entity):
    name: LocalizedText
    description: LocalizedText | None = None
    icon: str | None = None
    icon_url: str | None = None
    is_visible: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def visibility_label(self) -> str:
        return VISIBLE_LABEL if self.is_visible else HIDDEN_LABEL


class Category(CatalogItem):
    pass


class HouseType(CatalogItem):
    pass


class Feature(CatalogItem):
    pass


class CatalogForm(Form):
    name: LocalizedTextInput
    description: LocalizedTextInput
    is_visible: bool = True
    icon: str | None = Field(default=None, description="Stored filename from the image upload")

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        # English is optional, an empty string means "no translation"
        for key in ("name", "description"):
            if not payload[key].get("en"):
                payload[key].pop("en", None)
        return payload


class CategoryForm(CatalogForm):
    pass


class HouseTypeForm(CatalogForm):
    pass


class FeatureForm(CatalogForm):
    pass
