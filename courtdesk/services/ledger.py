"""Activity ledger: the append-only event stream behind every dashboard."""
import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.clock import day_key, iso_timestamp
from courtdesk.models.activity import ActivityLogEntry
from courtdesk.models.enums import ActivityType, PaymentMethod
from courtdesk.services.live_feed import live_feed

logger = logging.getLogger(__name__)


def entries_for_day(entries: Iterable, day) -> List:
    """Entries whose ISO timestamp starts with the day's ISO date."""
    prefix = day_key(day)
    return [entry for entry in entries if entry.timestamp.startswith(prefix)]


def newest_first(entries: Iterable) -> List:
    return sorted(entries, key=lambda entry: entry.timestamp, reverse=True)


class ActivityLedger:
    """Writes and reads ledger entries."""

    def stage(
        self,
        db: AsyncSession,
        type: ActivityType,
        description: str,
        user: str,
        amount: Optional[Decimal] = None,
        method: Optional[PaymentMethod] = None,
    ) -> ActivityLogEntry:
        """Add an entry to the session; it is written by the caller's commit."""
        entry = ActivityLogEntry(
            type=ActivityType(type).value,
            description=description,
            timestamp=iso_timestamp(),
            user=user,
            amount=amount,
            method=PaymentMethod(method).value if method else None,
        )
        db.add(entry)
        return entry

    async def committed(self, db: AsyncSession, entries: List[ActivityLogEntry], *collections: str) -> None:
        """Notify live subscribers once staged entries have been committed."""
        await live_feed.publish(db, "activity", *collections)
        live_feed.publish_added(entries)

    async def append(
        self,
        db: AsyncSession,
        type: ActivityType,
        description: str,
        user: str,
        amount: Optional[Decimal] = None,
        method: Optional[PaymentMethod] = None,
    ) -> ActivityLogEntry:
        """Write one entry on its own."""
        entry = self.stage(db, type, description, user, amount, method)
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error(f"Failed to log {type} activity: {description}", exc_info=True)
            raise
        await db.refresh(entry)
        logger.info(f"Logged {entry.type} activity #{entry.id}: {description}")
        await self.committed(db, [entry])
        return entry

    async def list_entries(
        self,
        db: AsyncSession,
        type: Optional[ActivityType] = None,
        day: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[ActivityLogEntry]:
        """Entries newest first, optionally filtered by type and day."""
        query = select(ActivityLogEntry).order_by(
            ActivityLogEntry.timestamp.desc(), ActivityLogEntry.id.desc()
        )
        if type is not None:
            query = query.where(ActivityLogEntry.type == ActivityType(type).value)
        if day is not None:
            query = query.where(ActivityLogEntry.timestamp.startswith(day_key(day)))
        if limit is not None:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())


# Singleton instance
activity_ledger = ActivityLedger()
