"""Database models."""
from courtdesk.models.enums import (
    ActivityType,
    BookingStatus,
    CashSessionStatus,
    CourtStatus,
    CourtType,
    ExpenseCategory,
    PaymentMethod,
)
from courtdesk.models.court import Court
from courtdesk.models.booking import Booking
from courtdesk.models.product import Product
from courtdesk.models.activity import ActivityLogEntry
from courtdesk.models.expense import Expense
from courtdesk.models.monthly_summary import MonthlySummary
from courtdesk.models.club_config import ClubConfig
from courtdesk.models.cash_session import CashSession

__all__ = [
    "ActivityType",
    "BookingStatus",
    "CashSessionStatus",
    "CourtStatus",
    "CourtType",
    "ExpenseCategory",
    "PaymentMethod",
    "Court",
    "Booking",
    "Product",
    "ActivityLogEntry",
    "Expense",
    "MonthlySummary",
    "ClubConfig",
    "CashSession",
]
