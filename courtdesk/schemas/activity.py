"""Activity ledger schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from decimal import Decimal

from courtdesk.models.enums import ActivityType, PaymentMethod


class ActivityLogEntryInDB(BaseModel):
    """Schema for a ledger entry."""

    id: int
    type: ActivityType
    description: str
    timestamp: str
    user: str
    amount: Optional[Decimal] = None
    method: Optional[PaymentMethod] = None

    model_config = ConfigDict(from_attributes=True)


class ActivityCreate(BaseModel):
    """
    Schema for a manually logged system note.

    Notes carry no amount or payment method.
    """

    description: str = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")
