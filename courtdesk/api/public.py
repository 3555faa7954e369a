"""Public self-service booking endpoints."""
from datetime import date, time
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.api.deps import http_error
from courtdesk.core.database import get_db
from courtdesk.core.exceptions import CourtDeskError
from courtdesk.schemas.availability import AvailabilityGrid, SlotCheck
from courtdesk.schemas.booking import BookingInDB, PublicBookingCreate
from courtdesk.schemas.config import ClubConfigInDB
from courtdesk.services.availability_service import availability_service
from courtdesk.services.booking_service import booking_service
from courtdesk.services.club_config_service import club_config_service

router = APIRouter(prefix="/public", tags=["public"])


@router.get("/club", response_model=ClubConfigInDB)
async def get_club(db: AsyncSession = Depends(get_db)):
    """Club name, opening hours and the current promo."""
    config = await club_config_service.get_or_create(db)
    return club_config_service.to_schema(config)


@router.get("/availability", response_model=AvailabilityGrid)
async def get_availability(
    target_date: date = Query(..., alias="date", description="Day to show"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the hourly availability grid for a day.

    Closed hours are left out. Hours that have already started (or start
    within the booking lead time) are listed with no free courts.

    Args:
        target_date: Day to show
        db: Database session

    Returns:
        Slots with the courts still free and their current price
    """
    return await availability_service.get_public_grid(db, target_date)


@router.get("/slots/check", response_model=SlotCheck)
async def check_slot(
    court_id: int = Query(...),
    target_date: date = Query(..., alias="date"),
    start: time = Query(..., alias="time"),
    db: AsyncSession = Depends(get_db),
):
    """Whether a single court/date/time slot can be booked from the public page."""
    try:
        available = await availability_service.is_publicly_bookable(
            db, court_id, target_date, start
        )
    except CourtDeskError as e:
        raise http_error(e)
    return SlotCheck(court_id=court_id, date=target_date, time=start, available=available)


@router.post("/bookings", response_model=BookingInDB, status_code=201)
async def create_public_booking(
    booking: PublicBookingCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Book a slot from the public page.

    The booking is created pending at the court's current price and must be
    confirmed by the front desk.

    Args:
        booking: Court, slot and contact details
        db: Database session

    Returns:
        Created booking
    """
    try:
        return await booking_service.create_public(db, booking)
    except CourtDeskError as e:
        raise http_error(e)
