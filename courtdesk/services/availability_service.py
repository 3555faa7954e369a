"""Availability engine: decides whether a court slot can be booked.

A booking occupies exactly its start slot. Later slots covered by its
duration are NOT blocked; there is no overlap detection.
"""
import logging
from datetime import date, datetime, time as dt_time, timedelta
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.clock import club_now, to_club_time
from courtdesk.core.config import settings
from courtdesk.core.exceptions import NotFoundError
from courtdesk.models.booking import Booking
from courtdesk.models.court import Court
from courtdesk.models.enums import BookingStatus
from courtdesk.schemas.availability import AvailabilityGrid, AvailabilitySlot, FreeCourt
from courtdesk.services import schedule as schedule_grid
from courtdesk.services.club_config_service import club_config_service

logger = logging.getLogger(__name__)


def is_slot_taken(
    bookings: Iterable, court_id: int, target_date: date, start: dt_time
) -> bool:
    return any(
        b.court_id == court_id
        and b.date == target_date
        and b.time == start
        and b.status != BookingStatus.CANCELLED
        for b in bookings
    )


def is_slot_available(
    grid: Optional[Sequence[Sequence[bool]]],
    bookings: Iterable,
    court_id: int,
    target_date: date,
    start: dt_time,
) -> bool:
    """Closed hours are never available; open hours are free unless taken."""
    if not schedule_grid.is_open(grid, target_date.weekday(), start.hour):
        return False
    return not is_slot_taken(bookings, court_id, target_date, start)


def is_in_past(target_date: date, start: dt_time, now: Optional[datetime] = None) -> bool:
    """Slots starting before now + the booking lead time cannot be sold."""
    now_local = to_club_time(now) if now else club_now()
    slot_local = to_club_time(datetime.combine(target_date, start))
    return slot_local < now_local + timedelta(minutes=settings.BOOKING_LEAD_MINUTES)


def grid_hours() -> List[dt_time]:
    return [
        dt_time(hour=hour)
        for hour in range(settings.PUBLIC_GRID_START_HOUR, settings.PUBLIC_GRID_END_HOUR + 1)
    ]


class AvailabilityService:
    """Service for answering availability questions against the database."""

    async def _active_bookings(
        self, db: AsyncSession, target_date: date, court_id: Optional[int] = None
    ) -> List[Booking]:
        conditions = [
            Booking.date == target_date,
            Booking.status != BookingStatus.CANCELLED.value,
        ]
        if court_id is not None:
            conditions.append(Booking.court_id == court_id)
        result = await db.execute(select(Booking).where(and_(*conditions)))
        return list(result.scalars().all())

    async def is_slot_available(
        self, db: AsyncSession, court_id: int, target_date: date, start: dt_time
    ) -> bool:
        grid = await club_config_service.get_schedule(db)
        bookings = await self._active_bookings(db, target_date, court_id)
        return is_slot_available(grid, bookings, court_id, target_date, start)

    async def is_publicly_bookable(
        self,
        db: AsyncSession,
        court_id: int,
        target_date: date,
        start: dt_time,
        now: Optional[datetime] = None,
    ) -> bool:
        """
        Whether a self-service customer can book this slot.

        Courts in maintenance and slots inside the booking lead time are
        never bookable, on top of the schedule and double-booking rules.

        Raises:
            NotFoundError: If the court does not exist
        """
        result = await db.execute(select(Court).where(Court.id == court_id))
        court = result.scalar_one_or_none()
        if not court:
            raise NotFoundError(f"Court {court_id} not found")
        if court.in_maintenance or is_in_past(target_date, start, now):
            return False
        return await self.is_slot_available(db, court_id, target_date, start)

    async def get_public_grid(
        self, db: AsyncSession, target_date: date, now: Optional[datetime] = None
    ) -> AvailabilityGrid:
        """
        Build the hourly self-service grid for a day.

        Args:
            db: Database session
            target_date: Day to show
            now: Reference time for hiding past slots (defaults to club time)

        Returns:
            One entry per open hour listing the courts still free
        """
        result = await db.execute(select(Court).order_by(Court.name))
        courts = [court for court in result.scalars().all() if not court.in_maintenance]
        if not courts:
            logger.info(f"No bookable courts for {target_date}; empty grid")
            return AvailabilityGrid(date=target_date, slots=[])

        grid = await club_config_service.get_schedule(db)
        bookings = await self._active_bookings(db, target_date)

        slots = []
        for start in grid_hours():
            if not schedule_grid.is_open(grid, target_date.weekday(), start.hour):
                continue
            free_courts = []
            if not is_in_past(target_date, start, now):
                free_courts = [
                    FreeCourt(
                        court_id=court.id,
                        court_name=court.name,
                        price=court.effective_price,
                    )
                    for court in courts
                    if not is_slot_taken(bookings, court.id, target_date, start)
                ]
            slots.append(AvailabilitySlot(time=start, free_courts=free_courts))

        return AvailabilityGrid(date=target_date, slots=slots)


# Singleton instance
availability_service = AvailabilityService()
