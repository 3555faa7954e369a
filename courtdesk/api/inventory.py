"""Inventory and point-of-sale endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.api.deps import get_operator, http_error
from courtdesk.core.database import get_db
from courtdesk.core.exceptions import CourtDeskError
from courtdesk.schemas.product import (
    ProductCreate,
    ProductInDB,
    ProductUpdate,
    SaleReceipt,
    SaleRequest,
    StockUpdate,
)
from courtdesk.services.inventory_service import inventory_service

router = APIRouter(tags=["inventory"])


@router.get("/products", response_model=List[ProductInDB])
async def list_products(
    low_stock: bool = Query(False, description="Only products at or under their alert level"),
    db: AsyncSession = Depends(get_db),
):
    return await inventory_service.list_products(db, low_stock_only=low_stock)


@router.post("/products", response_model=ProductInDB, status_code=201)
async def create_product(
    product: ProductCreate,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """Add a product to the catalogue."""
    return await inventory_service.create(db, product, operator)


@router.patch("/products/{product_id}", response_model=ProductInDB)
async def update_product(
    product_id: int,
    product_update: ProductUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await inventory_service.update(db, product_id, product_update)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/products/{product_id}/stock", response_model=ProductInDB)
async def set_stock(
    product_id: int,
    stock: StockUpdate,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """
    Set a product's stock count after a delivery or a recount.

    Args:
        product_id: Product ID
        stock: New count
        db: Database session
        operator: Acting user

    Returns:
        Updated product
    """
    try:
        return await inventory_service.adjust_stock(db, product_id, stock.stock, operator)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/products/{product_id}", status_code=204)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    try:
        await inventory_service.delete(db, product_id, operator)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/sales", response_model=SaleReceipt, status_code=201)
async def process_sale(
    sale: SaleRequest,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """
    Check out a cart at the point of sale.

    Args:
        sale: Cart lines and payment method
        db: Database session
        operator: Acting user

    Returns:
        Receipt with totals and remaining stock
    """
    try:
        return await inventory_service.process_sale(db, sale, operator)
    except CourtDeskError as e:
        raise http_error(e)
