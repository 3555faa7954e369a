"""Display formatting shared by ledger descriptions and messages."""
from decimal import Decimal


def money(value) -> str:
    """``20000`` for whole amounts, ``12500.50`` otherwise."""
    value = Decimal(str(value))
    if value == value.to_integral_value():
        return f"{value:.0f}"
    return f"{value:.2f}"


def hhmm(value) -> str:
    return value.strftime("%H:%M")
