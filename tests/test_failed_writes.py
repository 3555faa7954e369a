import logging
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.schemas.court import CourtCreate
from courtdesk.schemas.reports import ExpenseCreate
from courtdesk.services.court_service import court_service
from courtdesk.services.reports_service import reports_service
from tests.helpers import MONDAY


def failing_commit(monkeypatch):
    async def commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(AsyncSession, "commit", commit)


@pytest.mark.asyncio
async def test_court_write_failure_rolls_back(db, monkeypatch, caplog):
    failing_commit(monkeypatch)

    with caplog.at_level(logging.ERROR, logger="courtdesk.services.court_service"):
        with pytest.raises(OperationalError):
            await court_service.create(db, CourtCreate(name="Cancha 1", base_price=Decimal("20000")))

    assert "Failed to save courts" in caplog.text
    monkeypatch.undo()
    assert await court_service.list_courts(db) == []


@pytest.mark.asyncio
async def test_expense_write_failure_rolls_back(db, monkeypatch, caplog):
    failing_commit(monkeypatch)

    with caplog.at_level(logging.ERROR, logger="courtdesk.services.reports_service"):
        with pytest.raises(OperationalError):
            await reports_service.add_expense(
                db, ExpenseCreate(date=MONDAY, description="Luz", amount=Decimal("30000"))
            )

    assert "Failed to save expense" in caplog.text
    monkeypatch.undo()
    assert await reports_service.list_expenses(db) == []
