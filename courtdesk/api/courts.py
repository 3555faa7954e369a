"""Court endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.api.deps import http_error
from courtdesk.core.database import get_db
from courtdesk.core.exceptions import CourtDeskError
from courtdesk.schemas.court import CourtCreate, CourtInDB, CourtUpdate
from courtdesk.services.court_service import court_service

router = APIRouter(prefix="/courts", tags=["courts"])


@router.get("", response_model=List[CourtInDB])
async def list_courts(db: AsyncSession = Depends(get_db)):
    """
    List all courts ordered by name.

    Args:
        db: Database session

    Returns:
        List of courts with their effective price
    """
    return await court_service.list_courts(db)


@router.post("", response_model=CourtInDB, status_code=201)
async def create_court(court: CourtCreate, db: AsyncSession = Depends(get_db)):
    """Add a court."""
    return await court_service.create(db, court)


@router.get("/{court_id}", response_model=CourtInDB)
async def get_court(court_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await court_service.get(db, court_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{court_id}", response_model=CourtInDB)
async def update_court(
    court_id: int,
    court_update: CourtUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Update a court's details, prices, offers or maintenance status.

    Args:
        court_id: Court ID
        court_update: Fields to change
        db: Database session

    Returns:
        Updated court
    """
    try:
        return await court_service.update(db, court_id, court_update)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{court_id}", status_code=204)
async def delete_court(court_id: int, db: AsyncSession = Depends(get_db)):
    """Remove a court that has never been booked."""
    try:
        await court_service.delete(db, court_id)
    except CourtDeskError as e:
        raise http_error(e)
