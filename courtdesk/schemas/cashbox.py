"""Cash register schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from courtdesk.models.enums import CashSessionStatus
from courtdesk.schemas.activity import ActivityLogEntryInDB


class ShiftAmount(BaseModel):
    """Counted drawer amount at opening or closing."""

    amount: Decimal = Field(ge=0)


class CashSessionInDB(BaseModel):
    """Schema for a cash register session."""

    id: int
    opened_at: datetime
    closed_at: Optional[datetime] = None
    opened_by: str
    closed_by: Optional[str] = None
    initial_amount: Decimal
    final_amount: Optional[Decimal] = None
    status: CashSessionStatus

    model_config = ConfigDict(from_attributes=True)


class MethodBucket(BaseModel):
    """Income attributed to one payment method."""

    method: str
    amount: Decimal


class CashboxDay(BaseModel):
    """Schema for the cashbox view of one day."""

    date: str
    session: Optional[CashSessionInDB] = None
    income_by_method: List[MethodBucket]
    method_total: Decimal
    ledger_revenue: Decimal
    operation_count: int
    activities: List[ActivityLogEntryInDB]
