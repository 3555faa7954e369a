"""Background scheduler for ledger maintenance."""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from courtdesk.core.config import settings
from courtdesk.core.database import AsyncSessionLocal
from courtdesk.core.exceptions import CompactionError
from courtdesk.services.compaction import compaction_service

logger = logging.getLogger(__name__)


class MaintenanceScheduler:
    """Runs ledger compaction on an interval when enabled in settings."""

    def __init__(self):
        self.scheduler = AsyncIOScheduler()
        self.running = False

    async def start(self):
        if self.running:
            logger.warning("Scheduler is already running")
            return

        if not settings.MAINTENANCE_SCHEDULE_ENABLED:
            logger.info("Scheduled maintenance disabled; compaction runs on demand only")
            return

        logger.info(f"Starting maintenance scheduler (every {settings.MAINTENANCE_INTERVAL_HOURS}h)")

        self.scheduler.add_job(
            self._run_maintenance,
            IntervalTrigger(hours=settings.MAINTENANCE_INTERVAL_HOURS),
            id="maintenance_job",
            name="Compact old activity into monthly summaries",
            replace_existing=True,
        )

        self.scheduler.start()
        self.running = True
        logger.info("Maintenance scheduler started")

    async def stop(self):
        if not self.running:
            return

        logger.info("Stopping maintenance scheduler")
        self.scheduler.shutdown(wait=False)
        self.running = False
        logger.info("Maintenance scheduler stopped")

    async def _run_maintenance(self):
        """
        Compact one batch of old ledger entries.

        A full batch is not chained into another run; the next interval
        picks up the rest.
        """
        async with AsyncSessionLocal() as db:
            try:
                result = await compaction_service.run_maintenance(db)
                logger.info(
                    f"Scheduled maintenance archived {result.archived} entries "
                    f"(more pending: {result.has_more})"
                )
            except CompactionError as e:
                logger.error(f"Scheduled maintenance failed: {e}")


# Singleton instance
maintenance_scheduler = MaintenanceScheduler()
