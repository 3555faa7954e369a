"""Club settings endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.database import get_db
from courtdesk.schemas.config import ClubConfigInDB, ClubConfigUpdate
from courtdesk.schemas.court import CourtInDB, CourtUpsert
from courtdesk.services.club_config_service import club_config_service
from courtdesk.services.court_service import court_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=ClubConfigInDB)
async def get_settings(db: AsyncSession = Depends(get_db)):
    """Club configuration with the schedule as a 7x24 grid (Monday first)."""
    config = await club_config_service.get_or_create(db)
    return club_config_service.to_schema(config)


@router.put("", response_model=ClubConfigInDB)
async def update_settings(update: ClubConfigUpdate, db: AsyncSession = Depends(get_db)):
    """
    Replace the club configuration.

    Args:
        update: Full configuration, schedule included
        db: Database session

    Returns:
        Saved configuration
    """
    config = await club_config_service.update(db, update)
    return club_config_service.to_schema(config)


@router.put("/courts", response_model=List[CourtInDB])
async def save_courts(courts: List[CourtUpsert], db: AsyncSession = Depends(get_db)):
    """Save the court list from the settings page; entries without an id are created."""
    try:
        return await court_service.save_all(db, courts)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
