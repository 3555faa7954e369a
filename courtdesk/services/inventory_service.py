"""Inventory and point of sale."""
import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, List

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.exceptions import InsufficientStockError, NotFoundError
from courtdesk.core.formatting import money
from courtdesk.models.enums import ActivityType
from courtdesk.models.product import Product
from courtdesk.schemas.product import (
    ProductCreate,
    ProductUpdate,
    SaleLine,
    SaleReceipt,
    SaleRequest,
)
from courtdesk.services.ledger import activity_ledger
from courtdesk.services.live_feed import live_feed

logger = logging.getLogger(__name__)


class InventoryService:
    """Service for products, stock counts and sales."""

    async def get(self, db: AsyncSession, product_id: int) -> Product:
        result = await db.execute(select(Product).where(Product.id == product_id))
        product = result.scalar_one_or_none()

        if not product:
            raise NotFoundError(f"Product {product_id} not found")

        return product

    async def list_products(self, db: AsyncSession, low_stock_only: bool = False) -> List[Product]:
        query = select(Product).order_by(Product.name)
        if low_stock_only:
            query = query.where(Product.stock <= Product.min_stock_alert)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def _commit(self, db: AsyncSession, entries: list) -> None:
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error("Failed to save inventory change", exc_info=True)
            raise
        for entry in entries:
            await db.refresh(entry)
        await activity_ledger.committed(db, entries, "products")

    async def create(self, db: AsyncSession, data: ProductCreate, user: str) -> Product:
        product = Product(**data.model_dump())
        db.add(product)
        entry = activity_ledger.stage(
            db, ActivityType.STOCK, f"Product added: {product.name} (stock {product.stock})", user
        )
        await self._commit(db, [entry])
        await db.refresh(product)
        logger.info(f"Created product #{product.id} {product.name}")
        return product

    async def update(
        self, db: AsyncSession, product_id: int, data: ProductUpdate
    ) -> Product:
        """Edit catalogue fields; stock only changes through sales and adjustments."""
        product = await self.get(db, product_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(product, field, value)
        await self._commit(db, [])
        await db.refresh(product)
        return product

    async def delete(self, db: AsyncSession, product_id: int, user: str) -> None:
        product = await self.get(db, product_id)
        entry = activity_ledger.stage(
            db, ActivityType.STOCK, f"Product removed: {product.name}", user
        )
        await db.delete(product)
        await self._commit(db, [entry])
        logger.info(f"Deleted product #{product_id}")

    async def adjust_stock(
        self, db: AsyncSession, product_id: int, new_stock: int, user: str
    ) -> Product:
        product = await self.get(db, product_id)
        previous = product.stock
        product.stock = new_stock
        entry = activity_ledger.stage(
            db,
            ActivityType.STOCK,
            f"Stock updated: {product.name} ({previous} -> {new_stock})",
            user,
        )
        await self._commit(db, [entry])
        await db.refresh(product)
        logger.info(f"Stock for product #{product.id} set to {new_stock} (was {previous})")
        return product

    async def process_sale(self, db: AsyncSession, sale: SaleRequest, user: str) -> SaleReceipt:
        """
        Check out a cart: decrement stock and log one sale entry.

        Args:
            db: Database session
            sale: Cart lines and payment method
            user: Acting operator

        Returns:
            Receipt with line totals and remaining stock

        Raises:
            NotFoundError: If a product does not exist
            InsufficientStockError: If a line asks for more than is in stock
        """
        quantities: Dict[int, int] = OrderedDict()
        for item in sale.items:
            quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

        products = {}
        for product_id, quantity in quantities.items():
            product = await self.get(db, product_id)
            if quantity > product.stock:
                raise InsufficientStockError(
                    f"Only {product.stock} of {product.name} in stock, {quantity} requested"
                )
            products[product_id] = product

        # Guarded decrement: a concurrent sale that emptied the shelf makes this fail
        for product_id, quantity in quantities.items():
            result = await db.execute(
                update(Product)
                .where(Product.id == product_id, Product.stock >= quantity)
                .values(stock=Product.stock - quantity)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                await db.rollback()
                raise InsufficientStockError(
                    f"{products[product_id].name} sold out while checking out"
                )

        total = sum(
            (Decimal(str(products[pid].price)) * qty for pid, qty in quantities.items()),
            Decimal("0"),
        )
        summary = ", ".join(f"{qty}x {products[pid].name}" for pid, qty in quantities.items())
        entry = activity_ledger.stage(
            db,
            ActivityType.SALE,
            f"POS sale: {summary}",
            user,
            amount=total,
            method=sale.payment_method,
        )
        await self._commit(db, [entry])

        lines = []
        for product_id, quantity in quantities.items():
            product = products[product_id]
            await db.refresh(product)
            unit_price = Decimal(str(product.price))
            lines.append(
                SaleLine(
                    product_id=product_id,
                    name=product.name,
                    quantity=quantity,
                    unit_price=unit_price,
                    subtotal=unit_price * quantity,
                    remaining_stock=product.stock,
                )
            )

        logger.info(f"POS sale #{entry.id}: ${money(total)} via {sale.payment_method.value}")
        return SaleReceipt(
            lines=lines,
            total=total,
            payment_method=sale.payment_method,
            activity_id=entry.id,
        )


# Singleton instance
inventory_service = InventoryService()
