"""Booking lifecycle: creation, status transitions and payment attribution.

Every mutation commits exactly one ``booking`` ledger entry together with
the booking change. Only creation carries an amount: a booking's revenue is
recognized once, when it is created, and later price edits do not touch the
ledger.
"""
import logging
import re
from datetime import date, datetime, time as dt_time
from decimal import Decimal
from typing import List, Optional
from urllib.parse import quote

from sqlalchemy import select, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.constants import WHATSAPP_COUNTRY_PREFIX
from courtdesk.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    SlotUnavailableError,
)
from courtdesk.core.formatting import hhmm, money
from courtdesk.models.activity import ActivityLogEntry
from courtdesk.models.booking import Booking
from courtdesk.models.court import Court
from courtdesk.models.enums import ActivityType, BookingStatus, PaymentMethod
from courtdesk.schemas.booking import BookingCreate, BookingEdit, PublicBookingCreate
from courtdesk.services import schedule as schedule_grid
from courtdesk.services.availability_service import is_in_past
from courtdesk.services.club_config_service import club_config_service
from courtdesk.services.ledger import activity_ledger

logger = logging.getLogger(__name__)

PUBLIC_USER = "public"


def is_revenue_recognized(booking) -> bool:
    """Dashboard rule: confirmed, or paid even while still pending."""
    return booking.status == BookingStatus.CONFIRMED or booking.payment_method is not None


def whatsapp_confirmation_link(booking, court_name: Optional[str]) -> str:
    """Prefilled WhatsApp message confirming a booking to the customer."""
    phone = re.sub(r"[^0-9]", "", booking.customer_phone or "")
    if not phone:
        raise ValueError("Customer has no phone number")
    if len(phone) == 10:
        phone = WHATSAPP_COUNTRY_PREFIX + phone

    message = (
        f"Hola *{booking.customer_name}*! 👋\n"
        f"Confirmamos tu reserva:\n"
        f"📅 {booking.date.isoformat()} a las {hhmm(booking.time)}hs\n"
        f"🏟 {court_name or 'Cancha'}\n"
        f"💰 ${money(booking.price)}"
    )
    return f"https://wa.me/{phone}?text={quote(message)}"


class BookingService:
    """Service for booking state changes."""

    async def get(self, db: AsyncSession, booking_id: int) -> Booking:
        result = await db.execute(select(Booking).where(Booking.id == booking_id))
        booking = result.scalar_one_or_none()

        if not booking:
            raise NotFoundError(f"Booking {booking_id} not found")

        return booking

    async def _get_court(self, db: AsyncSession, court_id: int) -> Court:
        result = await db.execute(select(Court).where(Court.id == court_id))
        court = result.scalar_one_or_none()

        if not court:
            raise NotFoundError(f"Court {court_id} not found")

        return court

    async def list_bookings(
        self,
        db: AsyncSession,
        target_date: Optional[date] = None,
        include_cancelled: bool = True,
    ) -> List[Booking]:
        query = select(Booking).order_by(Booking.date, Booking.time, Booking.id)
        if target_date is not None:
            query = query.where(Booking.date == target_date)
        if not include_cancelled:
            query = query.where(Booking.status != BookingStatus.CANCELLED.value)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def _reserve_slot(
        self,
        db: AsyncSession,
        court_id: int,
        target_date: date,
        start: dt_time,
        exclude_id: Optional[int] = None,
    ) -> None:
        """
        Check that a slot is open and free before it is written.

        The partial unique index on (court_id, date, time) backs this check,
        so two writers racing for one slot cannot both commit.

        Raises:
            SlotUnavailableError: If the hour is closed or the slot is taken
        """
        grid = await club_config_service.get_schedule(db)
        if not schedule_grid.is_open(grid, target_date.weekday(), start.hour):
            raise SlotUnavailableError(
                f"The club is closed on {target_date} at {hhmm(start)}"
            )

        conditions = [
            Booking.court_id == court_id,
            Booking.date == target_date,
            Booking.time == start,
            Booking.status != BookingStatus.CANCELLED.value,
        ]
        if exclude_id is not None:
            conditions.append(Booking.id != exclude_id)
        result = await db.execute(select(Booking.id).where(and_(*conditions)))
        if result.first() is not None:
            raise SlotUnavailableError(
                f"Court {court_id} is already booked on {target_date} at {hhmm(start)}"
            )

    async def _commit(
        self, db: AsyncSession, booking: Booking, entry: ActivityLogEntry
    ) -> Booking:
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"Slot conflict while saving booking: {e}")
            raise SlotUnavailableError(
                f"Court {booking.court_id} is already booked on {booking.date} at {hhmm(booking.time)}"
            ) from e
        except Exception:
            await db.rollback()
            logger.error("Failed to save booking", exc_info=True)
            raise

        await db.refresh(booking)
        await db.refresh(entry)
        await activity_ledger.committed(db, [entry], "bookings")
        return booking

    async def _insert(
        self,
        db: AsyncSession,
        court: Court,
        values: dict,
        user: str,
    ) -> Booking:
        await self._reserve_slot(db, court.id, values["date"], values["time"])

        booking = Booking(court_id=court.id, **values)
        db.add(booking)
        entry = activity_ledger.stage(
            db,
            ActivityType.BOOKING,
            f"New booking: {booking.customer_name} ({court.name}) {booking.date.isoformat()} {hhmm(booking.time)}",
            user,
            amount=booking.price,
            method=booking.payment_method,
        )
        booking = await self._commit(db, booking, entry)
        logger.info(
            f"Created booking #{booking.id} for court {court.id} on {booking.date} at {hhmm(booking.time)} ({booking.status})"
        )
        return booking

    async def create(self, db: AsyncSession, data: BookingCreate, user: str) -> Booking:
        """
        Create a pending or confirmed booking.

        Args:
            db: Database session
            data: Booking data chosen by the operator
            user: Acting operator

        Returns:
            The stored booking

        Raises:
            NotFoundError: If the court does not exist
            SlotUnavailableError: If the slot is closed or already taken
        """
        court = await self._get_court(db, data.court_id)
        values = data.model_dump(exclude={"court_id"})
        values["status"] = BookingStatus(data.status).value
        values["payment_method"] = data.payment_method.value if data.payment_method else None
        return await self._insert(db, court, values, user)

    async def create_public(
        self,
        db: AsyncSession,
        data: PublicBookingCreate,
        now: Optional[datetime] = None,
    ) -> Booking:
        """Self-service booking: pending, priced at the court's current rate."""
        court = await self._get_court(db, data.court_id)
        if court.in_maintenance:
            raise SlotUnavailableError(f"{court.name} is under maintenance")
        if is_in_past(data.date, data.time, now):
            raise SlotUnavailableError(f"{data.date} {hhmm(data.time)} is no longer bookable")

        price = Decimal(court.effective_price or 0)
        if price <= 0:
            raise SlotUnavailableError(f"{court.name} has no price set")

        values = {
            "date": data.date,
            "time": data.time,
            "duration": data.duration,
            "customer_name": data.customer_name,
            "customer_phone": data.customer_phone,
            "status": BookingStatus.PENDING.value,
            "payment_method": None,
            "price": price,
            "is_recurring": False,
        }
        return await self._insert(db, court, values, PUBLIC_USER)

    async def confirm(self, db: AsyncSession, booking_id: int, user: str) -> Booking:
        """Pending -> confirmed. Any other starting state is rejected."""
        booking = await self.get(db, booking_id)
        if booking.status != BookingStatus.PENDING:
            raise InvalidTransitionError(
                f"Booking {booking_id} is {booking.status}; only pending bookings can be confirmed"
            )

        booking.status = BookingStatus.CONFIRMED.value
        entry = activity_ledger.stage(
            db, ActivityType.BOOKING, f"Booking confirmed: {booking.customer_name}", user
        )
        booking = await self._commit(db, booking, entry)
        logger.info(f"Confirmed booking #{booking.id}")
        return booking

    async def cancel(self, db: AsyncSession, booking_id: int, user: str) -> Booking:
        """Any state -> cancelled. The row is kept and its slot is freed."""
        booking = await self.get(db, booking_id)
        booking.status = BookingStatus.CANCELLED.value
        entry = activity_ledger.stage(
            db, ActivityType.BOOKING, f"Booking cancelled: {booking.customer_name}", user
        )
        booking = await self._commit(db, booking, entry)
        logger.info(f"Cancelled booking #{booking.id}")
        return booking

    async def set_payment_method(
        self,
        db: AsyncSession,
        booking_id: int,
        method: Optional[PaymentMethod],
        user: str,
    ) -> Booking:
        booking = await self.get(db, booking_id)
        booking.payment_method = PaymentMethod(method).value if method else None
        entry = activity_ledger.stage(
            db,
            ActivityType.BOOKING,
            f"Booking modified: {booking.customer_name} (payment: {booking.payment_method or 'none'})",
            user,
        )
        return await self._commit(db, booking, entry)

    async def toggle_recurring(self, db: AsyncSession, booking_id: int, user: str) -> Booking:
        booking = await self.get(db, booking_id)
        booking.is_recurring = not booking.is_recurring
        entry = activity_ledger.stage(
            db,
            ActivityType.BOOKING,
            f"Booking modified: {booking.customer_name} (recurring: {'yes' if booking.is_recurring else 'no'})",
            user,
        )
        return await self._commit(db, booking, entry)

    async def edit(
        self, db: AsyncSession, booking_id: int, data: BookingEdit, user: str
    ) -> Booking:
        """Full-record replace. Moving a live booking requires the new slot to be free."""
        booking = await self.get(db, booking_id)
        await self._get_court(db, data.court_id)

        new_status = BookingStatus(data.status)
        slot_changed = (
            booking.court_id != data.court_id
            or booking.date != data.date
            or booking.time != data.time
            or booking.status == BookingStatus.CANCELLED
        )
        if new_status != BookingStatus.CANCELLED and slot_changed:
            await self._reserve_slot(db, data.court_id, data.date, data.time, exclude_id=booking.id)

        values = data.model_dump()
        values["status"] = new_status.value
        values["payment_method"] = data.payment_method.value if data.payment_method else None
        for field, value in values.items():
            setattr(booking, field, value)

        entry = activity_ledger.stage(
            db, ActivityType.BOOKING, f"Booking modified: {booking.customer_name}", user
        )
        booking = await self._commit(db, booking, entry)
        logger.info(f"Edited booking #{booking.id}")
        return booking


# Singleton instance
booking_service = BookingService()
