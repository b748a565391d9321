"""Listing schemas."""

from datetime import date
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

from sawa_admin.schemas.common import Entity, Form, LocalizedText, LocalizedTextInput

ListingStatus = Literal["draft", "in_review", "approved", "paused", "rejected"]
PropertyType = Literal["House", "Apartment", "Guesthouse"]


class ListingImage(BaseModel):
    id: int
    path: str | None = None
    url: str | None = None
    orders: int | None = None


class Listing(Entity):
    host_id: int | None = None
    title: LocalizedText
    description: LocalizedText | None = None
    house_type_id: int | None = None
    property_type: str | None = None
    price: float | None = None
    currency: str | None = None
    commission: float | None = None
    status: str | None = None
    guests_count: int | None = None
    bedrooms_count: int | None = None
    beds_count: int | None = None
    bathrooms_count: int | None = None
    average_rating: float | None = None
    reviews_count: int | None = None
    is_published: bool | None = None
    vip: bool | None = None
    images: list[ListingImage] = []


class Location(BaseModel):
    latitude: float
    longitude: float
    extra_address: str | None = None


class ListingForm(Form):
    title: LocalizedTextInput
    description: LocalizedTextInput
    property_type: PropertyType
    house_type_id: PositiveInt
    location: Location
    price: float = Field(gt=0)
    currency: str = "SYP"
    commission: float = Field(default=0, ge=0)
    status: ListingStatus = "draft"
    guests_count: PositiveInt = 1
    bedrooms_count: PositiveInt = 1
    beds_count: PositiveInt = 1
    bathrooms_count: PositiveInt = 1
    booking_capacity: PositiveInt = 1
    min_booking_days: PositiveInt = 1
    max_booking_days: PositiveInt = 30
    is_contains_cameras: bool = False
    vip: bool = False
    images: list[str] = Field(default_factory=list, description="Stored filenames from the image upload")


class AvailabilityForm(Form):
    """Calendar changes: days to block and previously blocked days to free."""

    not_available_dates: list[date] = Field(default_factory=list)
    removed_not_available_dates: list[date] = Field(default_factory=list)

    @model_validator(mode="after")
    def _no_overlap(self) -> Self:
        if set(self.not_available_dates) & set(self.removed_not_available_dates):
            raise ValueError("a date cannot be blocked and freed at the same time")
        return self


class RuleNote(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    ar: str | None = None
    en: str | None = None


_TIME_OF_DAY = r"^([01]\d|2[0-3]):[0-5]\d$"


class ListingRulesForm(Form):
    """House rules of a listing, submitted as a whole."""

    allows_pets: bool = False
    allows_smoking: bool = False
    allows_parties: bool = False
    allows_children: bool = True
    remove_shoes: bool = False
    no_extra_guests: bool = False
    quiet_hours: RuleNote | None = None
    restricted_rooms_note: RuleNote | None = None
    garbage_disposal_note: RuleNote | None = None
    pool_usage_note: RuleNote | None = None
    forbidden_activities_note: RuleNote | None = None
    check_in_time: str = Field(default="14:00", pattern=_TIME_OF_DAY)
    check_out_time: str = Field(default="12:00", pattern=_TIME_OF_DAY)

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        # The rules endpoint reads these two as 0/1 flags
        payload["remove_shoes"] = int(self.remove_shoes)
        payload["no_extra_guests"] = int(self.no_extra_guests)
        return payload


class ChangeOwnerForm(Form):
    host_id: PositiveInt
