"""Payment link schemas."""
from pydantic import BaseModel, Field
from typing import List
from decimal import Decimal


class PaymentItem(BaseModel):
    """A line of a payment preference."""

    title: str = Field(min_length=1)
    unit_price: Decimal = Field(gt=0)
    quantity: int = Field(default=1, gt=0)


class PaymentLinkRequest(BaseModel):
    """Schema for a payment link request."""

    items: List[PaymentItem] = Field(min_length=1)
    surcharge_percentage: Decimal = Field(default=Decimal("0"), ge=0)


class PaymentLink(BaseModel):
    """Schema for a created payment link."""

    url: str
