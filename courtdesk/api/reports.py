"""Dashboard, expenses and financial report endpoints."""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.database import get_db
from courtdesk.schemas.reports import (
    Dashboard,
    ExpenseCreate,
    ExpenseInDB,
    FinancialTotals,
    MonthlySummaryInDB,
)
from courtdesk.services.compaction import compaction_service
from courtdesk.services.reports_service import reports_service

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/dashboard", response_model=Dashboard)
async def get_dashboard(
    target_date: Optional[date] = Query(None, alias="date", description="UTC day, today by default"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the operator dashboard.

    Revenue cards and the weekly chart use live booking prices; the
    per-method breakdown uses the ledger.

    Args:
        target_date: Day treated as today
        db: Database session

    Returns:
        Dashboard figures
    """
    return await reports_service.dashboard(db, target_date)


@router.get("/totals", response_model=FinancialTotals)
async def get_totals(db: AsyncSession = Depends(get_db)):
    """All-time income and expenses, live ledger plus archived months."""
    return await reports_service.financial_totals(db)


@router.get("/monthly", response_model=List[MonthlySummaryInDB])
async def list_monthly_summaries(db: AsyncSession = Depends(get_db)):
    return await compaction_service.list_summaries(db)


@router.get("/expenses", response_model=List[ExpenseInDB])
async def list_expenses(db: AsyncSession = Depends(get_db)):
    return await reports_service.list_expenses(db)


@router.post("/expenses", response_model=ExpenseInDB, status_code=201)
async def add_expense(expense: ExpenseCreate, db: AsyncSession = Depends(get_db)):
    """Record an outgoing payment."""
    return await reports_service.add_expense(db, expense)


@router.delete("/expenses/{expense_id}", status_code=204)
async def delete_expense(expense_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await reports_service.delete_expense(db, expense_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
