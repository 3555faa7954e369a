"""Availability schemas."""
from pydantic import BaseModel
from typing import List
from datetime import date, time
from decimal import Decimal


class FreeCourt(BaseModel):
    """A court that can be booked in a slot."""

    court_id: int
    court_name: str
    price: Decimal


class AvailabilitySlot(BaseModel):
    """Schema for one hour of the public grid."""

    time: time
    free_courts: List[FreeCourt]


class AvailabilityGrid(BaseModel):
    """Schema for the public availability grid of a day."""

    date: date
    slots: List[AvailabilitySlot]


class SlotCheck(BaseModel):
    """Schema for a single slot lookup."""

    court_id: int
    date: date
    time: time
    available: bool
