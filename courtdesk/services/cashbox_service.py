"""Cash register shifts."""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.clock import utc_today, utcnow
from courtdesk.core.exceptions import CashboxStateError
from courtdesk.core.formatting import money
from courtdesk.models.cash_session import CashSession
from courtdesk.models.enums import ActivityType, CashSessionStatus
from courtdesk.schemas.activity import ActivityLogEntryInDB
from courtdesk.schemas.cashbox import CashboxDay, CashSessionInDB
from courtdesk.services.aggregation import cashbox_figures
from courtdesk.services.ledger import activity_ledger

logger = logging.getLogger(__name__)


class CashboxService:
    """Service for opening and closing the cash drawer."""

    async def current_session(self, db: AsyncSession) -> Optional[CashSession]:
        result = await db.execute(
            select(CashSession)
            .where(CashSession.status == CashSessionStatus.OPEN.value)
            .order_by(CashSession.opened_at.desc())
        )
        return result.scalars().first()

    async def _commit(self, db: AsyncSession, session: CashSession, entry) -> CashSession:
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error("Failed to save cash register change", exc_info=True)
            raise
        await db.refresh(session)
        await db.refresh(entry)
        await activity_ledger.committed(db, [entry])
        return session

    async def open_shift(self, db: AsyncSession, amount: Decimal, user: str) -> CashSession:
        if await self.current_session(db):
            raise CashboxStateError("The cash register is already open")

        session = CashSession(
            opened_at=utcnow(),
            opened_by=user,
            initial_amount=amount,
            status=CashSessionStatus.OPEN.value,
        )
        db.add(session)
        entry = activity_ledger.stage(
            db, ActivityType.SHIFT, f"Cash register opened. Amount: ${money(amount)}", user, amount=amount
        )
        session = await self._commit(db, session, entry)
        logger.info(f"Cash register opened by {user} with ${money(amount)}")
        return session

    async def close_shift(self, db: AsyncSession, amount: Decimal, user: str) -> CashSession:
        session = await self.current_session(db)
        if not session:
            raise CashboxStateError("The cash register is not open")

        session.closed_at = utcnow()
        session.closed_by = user
        session.final_amount = amount
        session.status = CashSessionStatus.CLOSED.value
        entry = activity_ledger.stage(
            db, ActivityType.SHIFT, f"Cash register closed. Amount: ${money(amount)}", user, amount=amount
        )
        session = await self._commit(db, session, entry)
        logger.info(f"Cash register closed by {user} with ${money(amount)}")
        return session

    async def day_view(self, db: AsyncSession, day: Optional[date] = None) -> CashboxDay:
        """
        Build the cashbox screen for one UTC day.

        Args:
            db: Database session
            day: Day to show, today when omitted

        Returns:
            Open session, income per payment method and the day's activity
        """
        day = day or utc_today()
        entries = await activity_ledger.list_entries(db, day=day)
        session = await self.current_session(db)
        return CashboxDay(
            session=CashSessionInDB.model_validate(session) if session else None,
            activities=[ActivityLogEntryInDB.model_validate(entry) for entry in entries],
            **cashbox_figures(entries, day),
        )


# Singleton instance
cashbox_service = CashboxService()
