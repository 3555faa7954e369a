"""Club settings schemas."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from courtdesk.core.constants import DAYS_PER_WEEK, HOURS_PER_DAY


class ClubConfigBase(BaseModel):
    """Base club config schema."""

    name: str = Field(min_length=1)
    schedule: List[List[bool]]
    slot_duration: int = Field(default=30)
    owner_phone: Optional[str] = None
    promo_active: bool = False
    promo_text: Optional[str] = None
    promo_price: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("schedule")
    @classmethod
    def full_week_grid(cls, value: List[List[bool]]) -> List[List[bool]]:
        if len(value) != DAYS_PER_WEEK or any(len(day) != HOURS_PER_DAY for day in value):
            raise ValueError(f"schedule must be a {DAYS_PER_WEEK}x{HOURS_PER_DAY} grid")
        return value

    @field_validator("slot_duration")
    @classmethod
    def known_slot_duration(cls, value: int) -> int:
        if value not in (30, 60, 90):
            raise ValueError("slot_duration must be 30, 60 or 90")
        return value


class ClubConfigUpdate(ClubConfigBase):
    """Schema for replacing the club config."""

    pass


class ClubConfigInDB(ClubConfigBase):
    """Schema for club config as served to clients (schedule decoded)."""

    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
