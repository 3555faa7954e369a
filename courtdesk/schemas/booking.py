"""Booking schemas."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, date, time
from decimal import Decimal

from courtdesk.core.config import settings
from courtdesk.models.enums import BookingStatus, PaymentMethod


def _check_slot_alignment(value: time) -> time:
    minutes = value.hour * 60 + value.minute
    if value.second or value.microsecond or minutes % settings.SLOT_GRANULARITY_MINUTES:
        raise ValueError(
            f"time must be aligned to {settings.SLOT_GRANULARITY_MINUTES}-minute slots"
        )
    return value


def _strip_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("customer_name is required")
    return value


class BookingBase(BaseModel):
    """Base booking schema."""

    court_id: int
    date: date
    time: time
    duration: int = Field(default=settings.DEFAULT_BOOKING_DURATION, gt=0)
    customer_name: str
    customer_phone: str = ""
    payment_method: Optional[PaymentMethod] = None
    price: Decimal
    is_recurring: bool = False


class BookingInput(BookingBase):
    """Fields an operator sends when writing a booking."""

    price: Decimal = Field(gt=0)

    @field_validator("time")
    @classmethod
    def time_on_slot_grid(cls, value: time) -> time:
        return _check_slot_alignment(value)

    @field_validator("customer_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return _strip_name(value)


class BookingCreate(BookingInput):
    """Schema for an operator-created booking (pending or confirmed)."""

    status: BookingStatus = BookingStatus.PENDING

    @field_validator("status")
    @classmethod
    def not_cancelled(cls, value: BookingStatus) -> BookingStatus:
        if value == BookingStatus.CANCELLED:
            raise ValueError("a booking cannot be created cancelled")
        return value


class BookingEdit(BookingInput):
    """Schema for a full-record booking replace."""

    status: BookingStatus


class PublicBookingCreate(BaseModel):
    """Schema for a self-service booking from the public page."""

    court_id: int
    date: date
    time: time
    duration: int = Field(default=settings.DEFAULT_BOOKING_DURATION, gt=0)
    customer_name: str
    customer_phone: str = Field(min_length=1)

    @field_validator("time")
    @classmethod
    def time_on_slot_grid(cls, value: time) -> time:
        return _check_slot_alignment(value)

    @field_validator("customer_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return _strip_name(value)


class PaymentMethodUpdate(BaseModel):
    """Schema for setting or clearing a booking's payment method."""

    payment_method: Optional[PaymentMethod] = None


class BookingInDB(BookingBase):
    """Schema for booking from database."""

    id: int
    status: BookingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WhatsAppLink(BaseModel):
    """Schema for a prefilled WhatsApp confirmation message."""

    booking_id: int
    url: str
