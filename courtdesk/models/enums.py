"""Enumerations shared by models and schemas."""
import enum


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    TRANSFER = "transfer"
    QR = "qr"


class ActivityType(str, enum.Enum):
    BOOKING = "booking"
    SALE = "sale"
    SHIFT = "shift"
    SYSTEM = "system"
    STOCK = "stock"


class CourtStatus(str, enum.Enum):
    AVAILABLE = "available"
    MAINTENANCE = "maintenance"


class CourtType(str, enum.Enum):
    INDOOR = "indoor"
    OUTDOOR = "outdoor"


class ExpenseCategory(str, enum.Enum):
    VARIOS = "varios"
    SUELDOS = "sueldos"
    SERVICIOS = "servicios"
    ALQUILER = "alquiler"
    MANTENIMIENTO = "mantenimiento"
    PROVEEDORES = "proveedores"


class CashSessionStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"
