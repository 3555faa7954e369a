"""Ledger maintenance endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.database import get_db
from courtdesk.core.exceptions import CompactionError
from courtdesk.schemas.reports import MaintenanceResult
from courtdesk.services.compaction import compaction_service

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.post("/run", response_model=MaintenanceResult)
async def run_maintenance(db: AsyncSession = Depends(get_db)):
    """
    Archive one batch of old ledger entries into monthly summaries.

    Call again while ``has_more`` is true.

    Args:
        db: Database session

    Returns:
        Cutoff used, entries archived and months touched
    """
    try:
        return await compaction_service.run_maintenance(db)
    except CompactionError as e:
        raise HTTPException(status_code=500, detail=str(e))
