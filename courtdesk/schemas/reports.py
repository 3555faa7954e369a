"""Reporting schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal

from courtdesk.models.enums import ExpenseCategory
from courtdesk.schemas.cashbox import MethodBucket


class ExpenseCreate(BaseModel):
    """Schema for recording an expense."""

    date: date
    category: ExpenseCategory = ExpenseCategory.VARIOS
    description: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)


class ExpenseInDB(ExpenseCreate):
    """Schema for expense from database."""

    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MonthlySummaryInDB(BaseModel):
    """Schema for a compacted month."""

    id: str
    label: str
    total_income: Decimal
    total_expenses: Decimal
    operation_count: int
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class FinancialTotals(BaseModel):
    """All-time totals: live ledger plus compacted history."""

    current_income: Decimal
    historical_income: Decimal
    total_income: Decimal
    current_expenses: Decimal
    historical_expenses: Decimal
    total_expenses: Decimal
    net_income: Decimal


class DailyPoint(BaseModel):
    """One day of the weekly chart."""

    date: date
    revenue: Decimal
    bookings: int


class LowStockItem(BaseModel):
    """A product at or under its alert threshold."""

    id: int
    name: str
    stock: int
    min_stock_alert: int


class Dashboard(BaseModel):
    """Schema for the operator dashboard."""

    date: date
    today_revenue: Decimal
    yesterday_revenue: Decimal
    revenue_change: int
    revenue_change_label: str
    active_bookings: int
    today_bookings: int
    ledger_revenue_today: Decimal
    income_by_method: List[MethodBucket]
    operation_count_today: int
    weekly: List[DailyPoint]
    low_stock: List[LowStockItem]


class MaintenanceResult(BaseModel):
    """Outcome of one compaction run."""

    cutoff: str
    archived: int
    months: List[str]
    has_more: bool
