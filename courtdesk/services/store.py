"""In-memory mirror of the collections behind the dashboard."""
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.clock import utc_today
from courtdesk.schemas.reports import Dashboard
from courtdesk.services import aggregation
from courtdesk.services.live_feed import ChangeFeed, LatestSnapshots, live_feed

logger = logging.getLogger(__name__)

DASHBOARD_COLLECTIONS: Tuple[str, ...] = ("bookings", "activity", "products")


class ClubStore:
    """
    Keeps the latest snapshot of each followed collection and derives the
    dashboard from them, so every change re-renders without a query.
    """

    def __init__(self, feed: ChangeFeed = live_feed, collections: Iterable[str] = DASHBOARD_COLLECTIONS):
        self.feed = feed
        self.collections = tuple(collections)
        self.data: Dict[str, List[Any]] = {collection: [] for collection in self.collections}
        self.pending: Optional[LatestSnapshots] = None

    async def open(self, db: AsyncSession) -> None:
        """Subscribe to every followed collection and load the current state."""
        self.pending = LatestSnapshots()
        for collection in self.collections:
            self.feed.subscribe(collection, self.pending)
        for collection in self.collections:
            self.apply(collection, await self.feed.snapshot(db, collection))
        logger.debug(f"Store opened on {', '.join(self.collections)}")

    def close(self) -> None:
        if self.pending is None:
            return
        for collection in self.collections:
            self.feed.unsubscribe(collection, self.pending)
        self.pending = None

    def apply(self, collection: str, items: Iterable[Any]) -> None:
        self.data[collection] = list(items)

    def dashboard(self, today: Optional[date] = None) -> Dashboard:
        return Dashboard(
            **aggregation.dashboard_figures(
                self.data.get("bookings", []),
                self.data.get("activity", []),
                self.data.get("products", []),
                today or utc_today(),
            )
        )

    async def next_dashboard(self, today: Optional[date] = None) -> Dashboard:
        """Wait for the next snapshot, apply it and return the recomputed dashboard."""
        if self.pending is None:
            raise RuntimeError("Store is not open")
        collection, items = await self.pending.get()
        self.apply(collection, items)
        return self.dashboard(today)
