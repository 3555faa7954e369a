import asyncio
from datetime import time
from decimal import Decimal
from types import SimpleNamespace
from urllib.parse import unquote

import pytest
from sqlalchemy import select

from courtdesk.core.exceptions import InvalidTransitionError, NotFoundError, SlotUnavailableError
from courtdesk.models.activity import ActivityLogEntry
from courtdesk.models.booking import Booking
from courtdesk.models.court import Court
from courtdesk.models.enums import BookingStatus, PaymentMethod
from courtdesk.schemas.booking import BookingCreate, BookingEdit, PublicBookingCreate
from courtdesk.services.booking_service import (
    booking_service,
    is_revenue_recognized,
    whatsapp_confirmation_link,
)
from courtdesk.services.club_config_service import club_config_service
from tests.helpers import MONDAY, TEN_AM


def new_booking(court_id, start=TEN_AM, **overrides) -> BookingCreate:
    values = {
        "court_id": court_id,
        "date": MONDAY,
        "time": start,
        "customer_name": "Ana Pérez",
        "customer_phone": "11 2345-6789",
        "price": Decimal("20000"),
    }
    values.update(overrides)
    return BookingCreate(**values)


async def ledger(db):
    result = await db.execute(select(ActivityLogEntry).order_by(ActivityLogEntry.id))
    return list(result.scalars().all())


@pytest.mark.asyncio
async def test_create_writes_one_ledger_entry_with_amount(db, make_court):
    court = await make_court()

    booking = await booking_service.create(
        db, new_booking(court.id, payment_method=PaymentMethod.CASH), "maria"
    )

    assert booking.status == BookingStatus.PENDING
    entries = await ledger(db)
    assert len(entries) == 1
    assert entries[0].type == "booking"
    assert entries[0].user == "maria"
    assert entries[0].amount == Decimal("20000")
    assert entries[0].method == "cash"
    assert entries[0].description.startswith("New booking: Ana Pérez")


@pytest.mark.asyncio
async def test_double_booking_is_rejected(db, make_court):
    court = await make_court()
    await booking_service.create(db, new_booking(court.id), "admin")

    with pytest.raises(SlotUnavailableError):
        await booking_service.create(db, new_booking(court.id, customer_name="Otro"), "admin")

    result = await db.execute(select(Booking))
    assert len(result.scalars().all()) == 1
    assert len(await ledger(db)) == 1


@pytest.mark.asyncio
async def test_unique_slot_index_rejects_second_booking(db, make_court, monkeypatch):
    court = await make_court()

    async def skip_check(*args, **kwargs):
        return None

    monkeypatch.setattr(booking_service, "_reserve_slot", skip_check)
    await booking_service.create(db, new_booking(court.id), "admin")

    with pytest.raises(SlotUnavailableError):
        await booking_service.create(db, new_booking(court.id, customer_name="Otro"), "admin")

    result = await db.execute(select(Booking))
    assert len(result.scalars().all()) == 1
    assert len(await ledger(db)) == 1


@pytest.mark.asyncio
async def test_concurrent_bookings_for_one_slot(file_session_factory):
    async with file_session_factory() as db:
        await club_config_service.get_or_create(db)
        court = Court(name="Cancha 1", base_price=Decimal("20000"))
        db.add(court)
        await db.commit()
        court_id = court.id

    async def attempt(name):
        async with file_session_factory() as db:
            return await booking_service.create(db, new_booking(court_id, customer_name=name), "admin")

    results = await asyncio.gather(attempt("Ana"), attempt("Beto"), return_exceptions=True)

    async with file_session_factory() as db:
        stored = (await db.execute(select(Booking))).scalars().all()

    assert sorted(type(r).__name__ for r in results) == ["Booking", "SlotUnavailableError"]
    assert len(stored) == 1


@pytest.mark.asyncio
async def test_closed_hour_is_rejected(db, make_court):
    court = await make_court()

    with pytest.raises(SlotUnavailableError):
        await booking_service.create(db, new_booking(court.id, start=time(7, 0)), "admin")


@pytest.mark.asyncio
async def test_cancel_frees_slot(db, make_court):
    court = await make_court()
    first = await booking_service.create(db, new_booking(court.id), "admin")

    cancelled = await booking_service.cancel(db, first.id, "admin")
    second = await booking_service.create(db, new_booking(court.id, customer_name="Luis"), "admin")

    assert cancelled.status == BookingStatus.CANCELLED
    assert second.id != first.id
    result = await db.execute(select(Booking))
    assert len(result.scalars().all()) == 2


@pytest.mark.asyncio
async def test_confirm_only_from_pending(db, make_court):
    court = await make_court()
    booking = await booking_service.create(db, new_booking(court.id), "admin")

    confirmed = await booking_service.confirm(db, booking.id, "admin")
    assert confirmed.status == BookingStatus.CONFIRMED

    with pytest.raises(InvalidTransitionError):
        await booking_service.confirm(db, booking.id, "admin")

    await booking_service.cancel(db, booking.id, "admin")
    with pytest.raises(InvalidTransitionError):
        await booking_service.confirm(db, booking.id, "admin")


@pytest.mark.asyncio
async def test_every_mutation_logs_once_and_only_creation_has_amount(db, make_court):
    court = await make_court()
    booking = await booking_service.create(db, new_booking(court.id), "admin")

    await booking_service.set_payment_method(db, booking.id, PaymentMethod.QR, "admin")
    await booking_service.toggle_recurring(db, booking.id, "admin")
    await booking_service.confirm(db, booking.id, "admin")
    await booking_service.cancel(db, booking.id, "admin")

    entries = await ledger(db)
    assert len(entries) == 5
    assert all(entry.type == "booking" for entry in entries)
    assert [entry.amount is not None for entry in entries] == [True, False, False, False, False]


@pytest.mark.asyncio
async def test_set_payment_method_keeps_status(db, make_court):
    court = await make_court()
    booking = await booking_service.create(db, new_booking(court.id), "admin")

    updated = await booking_service.set_payment_method(db, booking.id, PaymentMethod.TRANSFER, "admin")
    assert updated.status == BookingStatus.PENDING
    assert updated.payment_method == "transfer"

    cleared = await booking_service.set_payment_method(db, booking.id, None, "admin")
    assert cleared.payment_method is None


@pytest.mark.asyncio
async def test_toggle_recurring(db, make_court):
    court = await make_court()
    booking = await booking_service.create(db, new_booking(court.id), "admin")

    assert (await booking_service.toggle_recurring(db, booking.id, "admin")).is_recurring is True
    assert (await booking_service.toggle_recurring(db, booking.id, "admin")).is_recurring is False


@pytest.mark.asyncio
async def test_edit_into_taken_slot_is_rejected(db, make_court):
    court = await make_court()
    await booking_service.create(db, new_booking(court.id, start=time(10, 0)), "admin")
    other = await booking_service.create(db, new_booking(court.id, start=time(12, 0)), "admin")

    edit = BookingEdit(**{**new_booking(court.id, start=time(10, 0)).model_dump(), "status": "pending"})
    with pytest.raises(SlotUnavailableError):
        await booking_service.edit(db, other.id, edit, "admin")

    unchanged = await booking_service.get(db, other.id)
    assert unchanged.time == time(12, 0)


@pytest.mark.asyncio
async def test_edit_in_place(db, make_court):
    court = await make_court()
    booking = await booking_service.create(db, new_booking(court.id), "admin")

    edit = BookingEdit(
        **{**new_booking(court.id, customer_name="Ana María", price=Decimal("18000")).model_dump(), "status": "confirmed"}
    )
    edited = await booking_service.edit(db, booking.id, edit, "admin")

    assert edited.customer_name == "Ana María"
    assert edited.price == Decimal("18000")
    assert edited.status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_unknown_booking(db):
    with pytest.raises(NotFoundError):
        await booking_service.confirm(db, 999, "admin")


@pytest.mark.asyncio
async def test_public_booking_uses_effective_price(db, make_court):
    court = await make_court(is_offer2_active=True, offer2_price=Decimal("16000"))

    booking = await booking_service.create_public(
        db,
        PublicBookingCreate(
            court_id=court.id, date=MONDAY, time=TEN_AM, customer_name="Juan", customer_phone="1122334455"
        ),
    )

    assert booking.status == BookingStatus.PENDING
    assert booking.price == Decimal("16000")
    entries = await ledger(db)
    assert entries[0].user == "public"


@pytest.mark.asyncio
async def test_public_booking_refuses_maintenance_court(db, make_court):
    court = await make_court(status="maintenance")

    with pytest.raises(SlotUnavailableError):
        await booking_service.create_public(
            db,
            PublicBookingCreate(
                court_id=court.id, date=MONDAY, time=TEN_AM, customer_name="Juan", customer_phone="1122334455"
            ),
        )


def test_revenue_recognition():
    assert is_revenue_recognized(SimpleNamespace(status="confirmed", payment_method=None))
    assert is_revenue_recognized(SimpleNamespace(status="pending", payment_method="cash"))
    assert not is_revenue_recognized(SimpleNamespace(status="pending", payment_method=None))


def test_whatsapp_link_adds_country_prefix():
    booking = SimpleNamespace(
        customer_name="Ana",
        customer_phone="11 2345-6789",
        date=MONDAY,
        time=TEN_AM,
        price=Decimal("20000"),
    )

    url = whatsapp_confirmation_link(booking, "Cancha 1")

    assert url.startswith("https://wa.me/5491123456789?text=")
    message = unquote(url.split("text=", 1)[1])
    assert "2031-03-03 a las 10:00hs" in message
    assert "Cancha 1" in message
    assert "$20000" in message


def test_whatsapp_link_needs_phone():
    booking = SimpleNamespace(customer_name="Ana", customer_phone="", date=MONDAY, time=TEN_AM, price=1)

    with pytest.raises(ValueError):
        whatsapp_confirmation_link(booking, None)
