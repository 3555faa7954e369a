"""Inventory and point-of-sale schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from courtdesk.models.enums import PaymentMethod


class ProductBase(BaseModel):
    """Base product schema."""

    name: str = Field(min_length=1)
    category: str = ""
    price: Decimal = Field(gt=0)
    stock: int = Field(default=0, ge=0)
    min_stock_alert: int = Field(default=0, ge=0)
    image_url: Optional[str] = None


class ProductCreate(ProductBase):
    """Schema for creating a product."""

    pass


class ProductUpdate(BaseModel):
    """Schema for updating a product's catalogue fields."""

    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, gt=0)
    min_stock_alert: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = None


class StockUpdate(BaseModel):
    """Schema for setting a product's stock count."""

    stock: int = Field(ge=0)


class ProductInDB(ProductBase):
    """Schema for product from database."""

    id: int
    is_low_stock: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SaleItem(BaseModel):
    """One cart line."""

    product_id: int
    quantity: int = Field(gt=0)


class SaleRequest(BaseModel):
    """Schema for checking out a cart."""

    items: List[SaleItem] = Field(min_length=1)
    payment_method: PaymentMethod


class SaleLine(BaseModel):
    """A priced cart line in a sale receipt."""

    product_id: int
    name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    remaining_stock: int


class SaleReceipt(BaseModel):
    """Schema for a completed sale."""

    lines: List[SaleLine]
    total: Decimal
    payment_method: PaymentMethod
    activity_id: int
