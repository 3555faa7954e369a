from datetime import date, datetime, time, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from courtdesk.core.exceptions import NotFoundError
from courtdesk.models.booking import Booking
from courtdesk.services.availability_service import (
    availability_service,
    is_in_past,
    is_slot_available,
)
from courtdesk.services.schedule import default_schedule
from tests.helpers import MONDAY, TEN_AM


def booking(court_id=1, day=MONDAY, start=TEN_AM, status="pending"):
    return SimpleNamespace(court_id=court_id, date=day, time=start, status=status)


def test_free_slot_is_available():
    assert is_slot_available(default_schedule(), [], 1, MONDAY, TEN_AM) is True


def test_closed_hour_is_unavailable():
    assert is_slot_available(default_schedule(), [], 1, MONDAY, time(7, 0)) is False


def test_taken_slot_is_unavailable():
    bookings = [booking()]

    assert is_slot_available(default_schedule(), bookings, 1, MONDAY, TEN_AM) is False
    assert is_slot_available(default_schedule(), bookings, 2, MONDAY, TEN_AM) is True


def test_cancelled_booking_frees_slot():
    bookings = [booking(status="cancelled")]

    assert is_slot_available(default_schedule(), bookings, 1, MONDAY, TEN_AM) is True


def test_duration_does_not_block_following_slots():
    bookings = [booking(start=time(10, 0))]

    assert is_slot_available(default_schedule(), bookings, 1, MONDAY, time(10, 30)) is True
    assert is_slot_available(default_schedule(), bookings, 1, MONDAY, time(11, 0)) is True


def test_missing_weekday_row_fails_open():
    assert is_slot_available([], [], 1, MONDAY, time(3, 0)) is True


def test_is_in_past_applies_lead_time():
    # 13:00 UTC is 10:00 in Buenos Aires
    now = datetime(2031, 3, 3, 13, 0, tzinfo=timezone.utc)

    assert is_in_past(MONDAY, time(10, 0), now) is True
    assert is_in_past(MONDAY, time(10, 30), now) is False
    assert is_in_past(date(2031, 3, 2), time(22, 0), now) is True


@pytest.mark.asyncio
async def test_public_grid_lists_free_courts(db, make_court):
    court1 = await make_court(name="Cancha 1", base_price=Decimal("20000"))
    court2 = await make_court(
        name="Cancha 2",
        base_price=Decimal("18000"),
        is_offer1_active=True,
        offer1_price=Decimal("14000"),
    )
    db.add(
        Booking(
            court_id=court1.id,
            date=MONDAY,
            time=TEN_AM,
            customer_name="Ana",
            price=Decimal("20000"),
        )
    )
    await db.commit()

    grid = await availability_service.get_public_grid(db, MONDAY)

    assert [slot.time.hour for slot in grid.slots] == list(range(9, 24))
    ten = next(slot for slot in grid.slots if slot.time == TEN_AM)
    assert [(c.court_id, c.price) for c in ten.free_courts] == [(court2.id, Decimal("14000"))]
    eleven = next(slot for slot in grid.slots if slot.time == time(11, 0))
    assert len(eleven.free_courts) == 2


@pytest.mark.asyncio
async def test_public_grid_hides_maintenance_courts(db, make_court):
    await make_court(name="Cancha 1")
    await make_court(name="Cancha 2", status="maintenance")

    grid = await availability_service.get_public_grid(db, MONDAY)

    assert all([c.court_name for c in slot.free_courts] == ["Cancha 1"] for slot in grid.slots)


@pytest.mark.asyncio
async def test_public_grid_is_empty_without_courts(db):
    grid = await availability_service.get_public_grid(db, MONDAY)

    assert grid.slots == []


@pytest.mark.asyncio
async def test_public_grid_past_slots_have_no_courts(db, make_court):
    await make_court()
    now = datetime(2031, 3, 3, 15, 0, tzinfo=timezone.utc)  # 12:00 local

    grid = await availability_service.get_public_grid(db, MONDAY, now=now)

    by_hour = {slot.time.hour: slot.free_courts for slot in grid.slots}
    assert by_hour[11] == []
    assert by_hour[12] == []
    assert len(by_hour[13]) == 1


@pytest.mark.asyncio
async def test_publicly_bookable_respects_maintenance_and_lead_time(db, make_court):
    court = await make_court()
    closed = await make_court(name="Cancha 2", status="maintenance")
    now = datetime(2031, 3, 3, 13, 0, tzinfo=timezone.utc)  # 10:00 local

    assert await availability_service.is_publicly_bookable(db, court.id, MONDAY, time(11, 0), now) is True
    assert await availability_service.is_publicly_bookable(db, court.id, MONDAY, TEN_AM, now) is False
    assert await availability_service.is_publicly_bookable(db, closed.id, MONDAY, time(11, 0), now) is False
    with pytest.raises(NotFoundError):
        await availability_service.is_publicly_bookable(db, 9999, MONDAY, time(11, 0), now)
