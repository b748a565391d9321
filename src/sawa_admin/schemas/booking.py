"""Booking schemas."""

from datetime import date
from typing import Literal

from pydantic import Field, PositiveInt, model_validator

from sawa_admin.schemas.common import Entity, Form

BookingStatus = Literal[
    "draft", "waiting_payment", "paid", "confirmed", "completed", "cancelled", "rejected"
]
PaymentMethod = Literal["wallet", "shamcash", "alharam", "cash", "crypto"]


class Booking(Entity):
    listing_id: int | None = None
    host_id: int | None = None
    guest_id: int | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = None
    payment_method: str | None = None
    currency: str | None = None
    price: float | None = None
    total_price: float | None = None
    service_fees: float | None = None
    commission: float | None = None
    adults_count: int | None = None
    children_count: int | None = None
    infants_count: int | None = None
    pets_count: int | None = None
    message: str | None = None
    host_notes: str | None = None
    admin_notes: str | None = None


class BookingForm(Form):
    listing_id: PositiveInt
    guest_id: PositiveInt
    start_date: date
    end_date: date
    status: BookingStatus = "draft"
    payment_method: PaymentMethod = "cash"
    price: float = Field(gt=0)
    service_fees: float = Field(default=0, ge=0)
    commission: float = Field(default=0, ge=0)
    message: str | None = None
    adults_count: int = Field(default=1, ge=0)
    children_count: int = Field(default=0, ge=0)
    infants_count: int = Field(default=0, ge=0)
    pets_count: int = Field(default=0, ge=0)
    host_notes: str | None = None
    admin_notes: str | None = None

    @model_validator(mode="after")
    def _dates_in_order(self) -> "BookingForm":
        if self.end_date < self.start_date:
            raise ValueError("end date must not be before start date")
        return self
