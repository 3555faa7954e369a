"""Court schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from courtdesk.models.enums import CourtStatus, CourtType


class CourtBase(BaseModel):
    """Base court schema."""

    name: str = Field(min_length=1)
    type: CourtType = CourtType.INDOOR
    surface_color: str = "blue"
    status: CourtStatus = CourtStatus.AVAILABLE
    base_price: Decimal = Field(default=Decimal("0"), ge=0)
    is_offer1_active: bool = False
    offer1_price: Decimal = Field(default=Decimal("0"), ge=0)
    offer1_label: Optional[str] = None
    is_offer2_active: bool = False
    offer2_price: Decimal = Field(default=Decimal("0"), ge=0)
    offer2_label: Optional[str] = None


class CourtCreate(CourtBase):
    """Schema for creating a court."""

    pass


class CourtUpsert(CourtBase):
    """Schema for a court in the settings page's bulk save; no id means new."""

    id: Optional[int] = None


class CourtUpdate(BaseModel):
    """Schema for updating a court."""

    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[CourtType] = None
    surface_color: Optional[str] = None
    status: Optional[CourtStatus] = None
    base_price: Optional[Decimal] = Field(default=None, ge=0)
    is_offer1_active: Optional[bool] = None
    offer1_price: Optional[Decimal] = Field(default=None, ge=0)
    offer1_label: Optional[str] = None
    is_offer2_active: Optional[bool] = None
    offer2_price: Optional[Decimal] = Field(default=None, ge=0)
    offer2_label: Optional[str] = None


class CourtInDB(CourtBase):
    """Schema for court from database."""

    id: int
    effective_price: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
