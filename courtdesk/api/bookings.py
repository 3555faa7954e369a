"""Booking endpoints for the front desk."""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.api.deps import get_operator, http_error
from courtdesk.core.database import get_db
from courtdesk.core.exceptions import CourtDeskError
from courtdesk.models.court import Court
from courtdesk.schemas.booking import (
    BookingCreate,
    BookingEdit,
    BookingInDB,
    PaymentMethodUpdate,
    WhatsAppLink,
)
from courtdesk.services.booking_service import booking_service, whatsapp_confirmation_link

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=List[BookingInDB])
async def list_bookings(
    target_date: Optional[date] = Query(None, alias="date", description="Only bookings on this day"),
    include_cancelled: bool = Query(True),
    db: AsyncSession = Depends(get_db),
):
    """
    List bookings ordered by date and time.

    Args:
        target_date: Optional day filter
        include_cancelled: Whether cancelled bookings are returned
        db: Database session

    Returns:
        List of bookings
    """
    return await booking_service.list_bookings(db, target_date, include_cancelled)


@router.post("", response_model=BookingInDB, status_code=201)
async def create_booking(
    booking: BookingCreate,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """
    Create a booking from the front desk.

    The slot must be inside opening hours and not held by another
    non-cancelled booking on the same court.

    Args:
        booking: Booking details
        db: Database session
        operator: Acting user

    Returns:
        Created booking
    """
    try:
        return await booking_service.create(db, booking, operator)
    except CourtDeskError as e:
        raise http_error(e)


@router.get("/{booking_id}", response_model=BookingInDB)
async def get_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await booking_service.get(db, booking_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{booking_id}", response_model=BookingInDB)
async def edit_booking(
    booking_id: int,
    booking: BookingEdit,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """Replace a booking's details; moving it needs the new slot to be free."""
    try:
        return await booking_service.edit(db, booking_id, booking, operator)
    except CourtDeskError as e:
        raise http_error(e)


@router.post("/{booking_id}/confirm", response_model=BookingInDB)
async def confirm_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """Confirm a pending booking."""
    try:
        return await booking_service.confirm(db, booking_id, operator)
    except CourtDeskError as e:
        raise http_error(e)


@router.post("/{booking_id}/cancel", response_model=BookingInDB)
async def cancel_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """Cancel a booking. The record is kept and the slot becomes free."""
    try:
        return await booking_service.cancel(db, booking_id, operator)
    except CourtDeskError as e:
        raise http_error(e)


@router.patch("/{booking_id}/payment-method", response_model=BookingInDB)
async def set_payment_method(
    booking_id: int,
    update: PaymentMethodUpdate,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    """Record how a booking was paid, or clear it with null."""
    try:
        return await booking_service.set_payment_method(db, booking_id, update.payment_method, operator)
    except CourtDeskError as e:
        raise http_error(e)


@router.post("/{booking_id}/recurring", response_model=BookingInDB)
async def toggle_recurring(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    operator: str = Depends(get_operator),
):
    try:
        return await booking_service.toggle_recurring(db, booking_id, operator)
    except CourtDeskError as e:
        raise http_error(e)


@router.get("/{booking_id}/whatsapp", response_model=WhatsAppLink)
async def get_whatsapp_link(booking_id: int, db: AsyncSession = Depends(get_db)):
    """
    Build a WhatsApp link with a prefilled confirmation for the customer.

    Args:
        booking_id: Booking ID
        db: Database session

    Returns:
        The wa.me link
    """
    try:
        booking = await booking_service.get(db, booking_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    court = await db.get(Court, booking.court_id)
    try:
        url = whatsapp_confirmation_link(booking, court.name if court else None)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return WhatsAppLink(booking_id=booking.id, url=url)
