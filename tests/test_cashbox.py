from decimal import Decimal

import pytest

from courtdesk.core.exceptions import CashboxStateError
from courtdesk.core.clock import utc_today
from courtdesk.models.enums import ActivityType, PaymentMethod
from courtdesk.services.cashbox_service import cashbox_service
from courtdesk.services.ledger import activity_ledger


@pytest.mark.asyncio
async def test_open_and_close_shift(db):
    opened = await cashbox_service.open_shift(db, Decimal("10000"), "maria")
    assert opened.status == "open"
    assert (await cashbox_service.current_session(db)).id == opened.id

    closed = await cashbox_service.close_shift(db, Decimal("45000"), "juan")

    assert closed.id == opened.id
    assert closed.status == "closed"
    assert closed.closed_by == "juan"
    assert closed.final_amount == Decimal("45000")
    assert await cashbox_service.current_session(db) is None

    entries = await activity_ledger.list_entries(db, type=ActivityType.SHIFT)
    assert [entry.amount for entry in entries] == [Decimal("45000"), Decimal("10000")]


@pytest.mark.asyncio
async def test_cannot_open_twice_or_close_when_closed(db):
    with pytest.raises(CashboxStateError):
        await cashbox_service.close_shift(db, Decimal("0"), "admin")

    await cashbox_service.open_shift(db, Decimal("0"), "admin")
    with pytest.raises(CashboxStateError):
        await cashbox_service.open_shift(db, Decimal("0"), "admin")


@pytest.mark.asyncio
async def test_day_view(db):
    await cashbox_service.open_shift(db, Decimal("10000"), "admin")
    await activity_ledger.append(db, ActivityType.SALE, "POS sale: 1x Agua", "admin", Decimal("1500"), PaymentMethod.CASH)
    await activity_ledger.append(db, ActivityType.SALE, "POS sale: 1x Gatorade", "admin", Decimal("2500"), PaymentMethod.QR)

    view = await cashbox_service.day_view(db)

    assert view.date == utc_today().isoformat()
    assert view.session is not None
    assert [(bucket.method, bucket.amount) for bucket in view.income_by_method] == [
        ("cash", Decimal("1500")),
        ("qr", Decimal("2500")),
        ("transfer", Decimal("0")),
    ]
    assert view.method_total == Decimal("4000")
    assert view.ledger_revenue == Decimal("14000")
    assert view.operation_count == 3
    assert len(view.activities) == 3
