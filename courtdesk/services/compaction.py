"""Ledger compaction: folds old ledger entries into monthly summaries.

One run takes a bounded batch of entries older than the retention window,
adds them to their month's summary and deletes them, all in a single
transaction. Either the summaries grow and the entries disappear together,
or nothing changes, so re-running never double counts.
"""
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.clock import iso_timestamp, month_key, utcnow
from courtdesk.core.config import settings
from courtdesk.core.constants import MONTH_LABELS
from courtdesk.core.exceptions import CompactionError
from courtdesk.models.activity import ActivityLogEntry
from courtdesk.models.enums import ActivityType
from courtdesk.models.monthly_summary import MonthlySummary
from courtdesk.schemas.reports import MaintenanceResult
from courtdesk.services.live_feed import live_feed

logger = logging.getLogger(__name__)

INCOME_TYPES = frozenset({ActivityType.SALE, ActivityType.BOOKING})


def month_label(key: str) -> str:
    """``2026-10`` -> ``Octubre 2026``."""
    year, month = key.split("-")
    return f"{MONTH_LABELS[int(month) - 1]} {year}"


def group_by_month(entries: List[ActivityLogEntry]) -> Dict[str, List[ActivityLogEntry]]:
    groups: Dict[str, List[ActivityLogEntry]] = defaultdict(list)
    for entry in entries:
        groups[month_key(entry.timestamp)].append(entry)
    return dict(groups)


def accumulate(summary: MonthlySummary, entries: List[ActivityLogEntry]) -> None:
    """Add a month's entries to its summary.

    Every entry counts as an operation; only sale and booking amounts count
    as income.
    """
    income = Decimal(str(summary.total_income or 0))
    count = summary.operation_count or 0
    for entry in entries:
        if ActivityType(entry.type) in INCOME_TYPES and entry.amount is not None:
            income += Decimal(str(entry.amount))
        count += 1
    summary.total_income = income
    summary.operation_count = count


class CompactionService:
    """Service for archiving old ledger entries."""

    async def run_maintenance(
        self, db: AsyncSession, now: Optional[datetime] = None
    ) -> MaintenanceResult:
        """
        Archive one batch of ledger entries older than the retention window.

        Callers re-invoke while ``has_more`` is true; there is no automatic
        chaining.

        Args:
            db: Database session
            now: Reference time (defaults to the current UTC time)

        Returns:
            How many entries were archived and which months were touched

        Raises:
            CompactionError: If anything fails before the commit; nothing is
                deleted or summarized in that case
        """
        now = now or utcnow()
        cutoff = iso_timestamp(now - timedelta(days=settings.LEDGER_RETENTION_DAYS))
        limit = settings.COMPACTION_BATCH_LIMIT

        logger.info(f"Starting ledger maintenance (cutoff {cutoff}, batch {limit})")

        try:
            result = await db.execute(
                select(ActivityLogEntry)
                .where(ActivityLogEntry.timestamp < cutoff)
                .order_by(ActivityLogEntry.timestamp, ActivityLogEntry.id)
                .limit(limit)
            )
            entries = list(result.scalars().all())

            if not entries:
                logger.info("Ledger maintenance: nothing to archive")
                return MaintenanceResult(cutoff=cutoff, archived=0, months=[], has_more=False)

            groups = group_by_month(entries)
            stamp = utcnow()
            for key, month_entries in sorted(groups.items()):
                summary = await db.get(MonthlySummary, key)
                if summary is None:
                    summary = MonthlySummary(
                        id=key,
                        label=month_label(key),
                        total_income=Decimal("0"),
                        total_expenses=Decimal("0"),
                        operation_count=0,
                    )
                    db.add(summary)
                accumulate(summary, month_entries)
                summary.updated_at = stamp

            await db.execute(
                delete(ActivityLogEntry).where(
                    ActivityLogEntry.id.in_([entry.id for entry in entries])
                )
            )
            await db.commit()

        except Exception as e:
            await db.rollback()
            logger.error(f"Ledger maintenance aborted, nothing committed: {e}", exc_info=True)
            raise CompactionError(f"Maintenance failed: {e}") from e

        months = sorted(groups)
        has_more = len(entries) == limit
        logger.info(
            f"Archived {len(entries)} ledger entries into {', '.join(months)}"
            + (" (more remain)" if has_more else "")
        )
        await live_feed.publish(db, "activity", "summaries")
        return MaintenanceResult(
            cutoff=cutoff, archived=len(entries), months=months, has_more=has_more
        )

    async def list_summaries(self, db: AsyncSession) -> List[MonthlySummary]:
        result = await db.execute(select(MonthlySummary).order_by(MonthlySummary.id.desc()))
        return list(result.scalars().all())


# Singleton instance
compaction_service = CompactionService()
