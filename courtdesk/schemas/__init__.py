"""API schemas."""
from courtdesk.schemas.court import CourtCreate, CourtUpdate, CourtUpsert, CourtInDB
from courtdesk.schemas.booking import (
    BookingCreate,
    BookingEdit,
    BookingInDB,
    PaymentMethodUpdate,
    PublicBookingCreate,
    WhatsAppLink,
)
from courtdesk.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductInDB,
    StockUpdate,
    SaleItem,
    SaleRequest,
    SaleReceipt,
)
from courtdesk.schemas.activity import ActivityLogEntryInDB, ActivityCreate
from courtdesk.schemas.cashbox import CashSessionInDB, CashboxDay, MethodBucket, ShiftAmount
from courtdesk.schemas.reports import (
    Dashboard,
    ExpenseCreate,
    ExpenseInDB,
    FinancialTotals,
    MaintenanceResult,
    MonthlySummaryInDB,
)
from courtdesk.schemas.config import ClubConfigInDB, ClubConfigUpdate
from courtdesk.schemas.availability import AvailabilityGrid, AvailabilitySlot, FreeCourt, SlotCheck
from courtdesk.schemas.payments import PaymentItem, PaymentLink, PaymentLinkRequest

__all__ = [
    "CourtCreate",
    "CourtUpdate",
    "CourtUpsert",
    "CourtInDB",
    "BookingCreate",
    "BookingEdit",
    "BookingInDB",
    "PaymentMethodUpdate",
    "PublicBookingCreate",
    "WhatsAppLink",
    "ProductCreate",
    "ProductUpdate",
    "ProductInDB",
    "StockUpdate",
    "SaleItem",
    "SaleRequest",
    "SaleReceipt",
    "ActivityLogEntryInDB",
    "ActivityCreate",
    "CashSessionInDB",
    "CashboxDay",
    "MethodBucket",
    "ShiftAmount",
    "Dashboard",
    "ExpenseCreate",
    "ExpenseInDB",
    "FinancialTotals",
    "MaintenanceResult",
    "MonthlySummaryInDB",
    "ClubConfigInDB",
    "ClubConfigUpdate",
    "AvailabilityGrid",
    "AvailabilitySlot",
    "FreeCourt",
    "SlotCheck",
    "PaymentItem",
    "PaymentLink",
    "PaymentLinkRequest",
]
