"""Expenses and financial reports."""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.clock import utc_today
from courtdesk.core.exceptions import NotFoundError
from courtdesk.models.activity import ActivityLogEntry
from courtdesk.models.booking import Booking
from courtdesk.models.expense import Expense
from courtdesk.models.monthly_summary import MonthlySummary
from courtdesk.models.product import Product
from courtdesk.schemas.reports import Dashboard, ExpenseCreate, FinancialTotals
from courtdesk.services import aggregation
from courtdesk.services.live_feed import live_feed

logger = logging.getLogger(__name__)


async def _all(db: AsyncSession, model) -> list:
    result = await db.execute(select(model))
    return list(result.scalars().all())


class ReportsService:
    """Service for expenses and the views built on the aggregation engine."""

    async def _commit(self, db: AsyncSession) -> None:
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error("Failed to save expense", exc_info=True)
            raise

    async def list_expenses(self, db: AsyncSession) -> List[Expense]:
        result = await db.execute(select(Expense).order_by(Expense.date.desc(), Expense.id.desc()))
        return list(result.scalars().all())

    async def add_expense(self, db: AsyncSession, data: ExpenseCreate) -> Expense:
        expense = Expense(
            date=data.date,
            category=data.category.value,
            description=data.description,
            amount=data.amount,
        )
        db.add(expense)
        await self._commit(db)
        await db.refresh(expense)
        logger.info(f"Recorded expense #{expense.id} ({expense.category})")
        await live_feed.publish(db, "expenses")
        return expense

    async def delete_expense(self, db: AsyncSession, expense_id: int) -> None:
        expense = await db.get(Expense, expense_id)
        if not expense:
            raise NotFoundError(f"Expense {expense_id} not found")
        await db.delete(expense)
        await self._commit(db)
        logger.info(f"Deleted expense #{expense_id}")
        await live_feed.publish(db, "expenses")

    async def financial_totals(self, db: AsyncSession) -> FinancialTotals:
        entries = await _all(db, ActivityLogEntry)
        expenses = await _all(db, Expense)
        summaries = await _all(db, MonthlySummary)
        return aggregation.global_totals(entries, expenses, summaries)

    async def dashboard(self, db: AsyncSession, today: Optional[date] = None) -> Dashboard:
        today = today or utc_today()
        bookings = await _all(db, Booking)
        entries = await _all(db, ActivityLogEntry)
        products = await _all(db, Product)
        return Dashboard(**aggregation.dashboard_figures(bookings, entries, products, today))


# Singleton instance
reports_service = ReportsService()
