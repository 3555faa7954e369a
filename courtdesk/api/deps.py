"""Shared request dependencies and error translation."""
from typing import Optional

from fastapi import Header, HTTPException

from courtdesk.core.config import settings
from courtdesk.core.exceptions import (
    CashboxStateError,
    CompactionError,
    CourtDeskError,
    CourtInUseError,
    InsufficientStockError,
    InvalidTransitionError,
    NotFoundError,
    PaymentLinkError,
    SlotUnavailableError,
)

STATUS_CODES = {
    NotFoundError: 404,
    SlotUnavailableError: 409,
    InvalidTransitionError: 409,
    InsufficientStockError: 409,
    CashboxStateError: 409,
    CourtInUseError: 409,
    PaymentLinkError: 502,
    CompactionError: 500,
}


async def get_operator(x_operator: Optional[str] = Header(default=None)) -> str:
    """Acting user for ledger entries; there is no login, only this header."""
    return x_operator or settings.DEFAULT_OPERATOR


def http_error(error: CourtDeskError) -> HTTPException:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
