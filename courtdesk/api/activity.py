"""Activity ledger endpoints."""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.api.deps import get_operator
from courtdesk.core.database import get_db
from courtdesk.models.enums import ActivityType
from courtdesk.schemas.activity import ActivityCreate, ActivityLogEntryInDB
from courtdesk.services.ledger import activity_ledger

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("", response_model=List[ActivityLogEntryInDB])
async def list_activity(
    type: Optional[ActivityType] = Query(None),
    target_date: Optional[date] = Query(None, alias="date", description="UTC day"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """
    List ledger entries, newest first.

    Args:
        type: Optional entry type filter
        target_date: Optional UTC day filter
        limit: Maximum number of entries
        db: Database session

    Returns:
        List of ledger entries
    """
    return await activity_ledger.list_entries(db, type=type, day=target_date, limit=limit)


@router.post("", response_model=ActivityLogEntryInDB, status_code=201)
async def log_activity(
    activity: ActivityCreate,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """Write a manual system note to the ledger."""
    return await activity_ledger.append(db, ActivityType.SYSTEM, activity.description, operator)
