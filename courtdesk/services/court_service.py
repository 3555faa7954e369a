"""Court catalogue."""
import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.exceptions import CourtInUseError, NotFoundError
from courtdesk.models.booking import Booking
from courtdesk.models.court import Court
from courtdesk.schemas.court import CourtCreate, CourtUpdate, CourtUpsert
from courtdesk.services.live_feed import live_feed

logger = logging.getLogger(__name__)


def _values(data) -> dict:
    values = data.model_dump(exclude_unset=isinstance(data, CourtUpdate))
    values.pop("id", None)
    for field in ("type", "status"):
        if values.get(field) is not None:
            values[field] = values[field].value
    return values


class CourtService:
    """Service for managing courts and their prices."""

    async def _commit(self, db: AsyncSession) -> None:
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error("Failed to save courts", exc_info=True)
            raise

    async def list_courts(self, db: AsyncSession) -> List[Court]:
        result = await db.execute(select(Court).order_by(Court.name))
        return list(result.scalars().all())

    async def get(self, db: AsyncSession, court_id: int) -> Court:
        result = await db.execute(select(Court).where(Court.id == court_id))
        court = result.scalar_one_or_none()

        if not court:
            raise NotFoundError(f"Court {court_id} not found")

        return court

    async def create(self, db: AsyncSession, data: CourtCreate) -> Court:
        court = Court(**_values(data))
        db.add(court)
        await self._commit(db)
        await db.refresh(court)
        logger.info(f"Created court #{court.id} {court.name}")
        await live_feed.publish(db, "courts")
        return court

    async def update(self, db: AsyncSession, court_id: int, data: CourtUpdate) -> Court:
        court = await self.get(db, court_id)
        for field, value in _values(data).items():
            setattr(court, field, value)
        await self._commit(db)
        await db.refresh(court)
        logger.info(f"Updated court #{court.id} {court.name}")
        await live_feed.publish(db, "courts")
        return court

    async def delete(self, db: AsyncSession, court_id: int) -> None:
        court = await self.get(db, court_id)
        result = await db.execute(
            select(func.count()).select_from(Booking).where(Booking.court_id == court_id)
        )
        if result.scalar_one():
            raise CourtInUseError(f"Court {court.name} has bookings; set it to maintenance instead")
        await db.delete(court)
        await self._commit(db)
        logger.info(f"Deleted court #{court_id}")
        await live_feed.publish(db, "courts")

    async def save_all(self, db: AsyncSession, courts: List[CourtUpsert]) -> List[Court]:
        """
        Save the settings page's court list in one commit.

        Args:
            db: Database session
            courts: Court definitions; those without an id are created

        Returns:
            The saved courts
        """
        saved = []
        for data in courts:
            court = await self.get(db, data.id) if data.id is not None else Court()
            for field, value in _values(data).items():
                setattr(court, field, value)
            db.add(court)
            saved.append(court)

        await self._commit(db)
        for court in saved:
            await db.refresh(court)
        logger.info(f"Saved {len(saved)} courts")
        await live_feed.publish(db, "courts")
        return saved


# Singleton instance
court_service = CourtService()
