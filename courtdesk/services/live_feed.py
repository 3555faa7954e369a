"""In-process change feed backing the live WebSocket subscriptions.

Every change to a collection pushes the *full* ordered snapshot of that
collection to each subscriber, so clients can simply re-render. New ledger
entries are also pushed one by one on a separate "added" channel that only
sees entries appended after the subscriber connected.
"""
import asyncio
import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional, Set, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.models.activity import ActivityLogEntry
from courtdesk.models.booking import Booking
from courtdesk.models.court import Court
from courtdesk.models.expense import Expense
from courtdesk.models.monthly_summary import MonthlySummary
from courtdesk.models.product import Product
from courtdesk.schemas.activity import ActivityLogEntryInDB
from courtdesk.schemas.booking import BookingInDB
from courtdesk.schemas.court import CourtInDB
from courtdesk.schemas.product import ProductInDB
from courtdesk.schemas.reports import ExpenseInDB, MonthlySummaryInDB

logger = logging.getLogger(__name__)

QUEUE_SIZE = 16

COLLECTIONS: Dict[str, Tuple[Any, Tuple, Any]] = {
    "activity": (ActivityLogEntry, (ActivityLogEntry.timestamp.desc(), ActivityLogEntry.id.desc()), ActivityLogEntryInDB),
    "bookings": (Booking, (Booking.date, Booking.time, Booking.id), BookingInDB),
    "courts": (Court, (Court.name,), CourtInDB),
    "products": (Product, (Product.name,), ProductInDB),
    "expenses": (Expense, (Expense.date.desc(), Expense.id.desc()), ExpenseInDB),
    "summaries": (MonthlySummary, (MonthlySummary.id.desc(),), MonthlySummaryInDB),
}


def _offer(queue: asyncio.Queue, item: Any) -> None:
    """Put without blocking; when full, the oldest queued item is dropped."""
    if queue.full():
        try:
            queue.get_nowait()
        except asyncio.QueueEmpty:
            pass
    queue.put_nowait(item)


class LatestSnapshots:
    """
    Pending snapshots for a subscriber, at most one per collection.

    A newer snapshot of a collection replaces the pending one, so a slow
    reader skips stale states but never loses the latest state of any
    collection it follows.
    """

    def __init__(self):
        self._pending: Dict[str, List[Any]] = {}
        self._ready = asyncio.Event()

    def offer(self, collection: str, items: List[Any]) -> None:
        # Re-insert so collections are handed out in order of their latest change
        self._pending.pop(collection, None)
        self._pending[collection] = items
        self._ready.set()

    def empty(self) -> bool:
        return not self._pending

    def get_nowait(self) -> Tuple[str, List[Any]]:
        if not self._pending:
            raise asyncio.QueueEmpty
        collection = next(iter(self._pending))
        items = self._pending.pop(collection)
        if not self._pending:
            self._ready.clear()
        return collection, items

    async def get(self) -> Tuple[str, List[Any]]:
        while not self._pending:
            await self._ready.wait()
        return self.get_nowait()


class ChangeFeed:
    """Fan-out of collection snapshots to live subscribers."""

    def __init__(self):
        self._subscribers: Dict[str, Set[LatestSnapshots]] = defaultdict(set)
        self._added_subscribers: Set[asyncio.Queue] = set()

    def subscribe(
        self, collection: str, buffer: Optional[LatestSnapshots] = None
    ) -> LatestSnapshots:
        """Register a buffer for a collection's snapshots; one buffer may follow several."""
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection '{collection}'")
        if buffer is None:
            buffer = LatestSnapshots()
        self._subscribers[collection].add(buffer)
        logger.debug(f"Subscriber added to {collection} ({len(self._subscribers[collection])} total)")
        return buffer

    def unsubscribe(self, collection: str, buffer: LatestSnapshots) -> None:
        self._subscribers[collection].discard(buffer)

    def subscribe_added(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=QUEUE_SIZE)
        self._added_subscribers.add(queue)
        return queue

    def unsubscribe_added(self, queue: asyncio.Queue) -> None:
        self._added_subscribers.discard(queue)

    def has_subscribers(self, collection: str) -> bool:
        return bool(self._subscribers.get(collection))

    async def snapshot(self, db: AsyncSession, collection: str) -> List[Any]:
        """Load the full ordered collection as API schemas."""
        model, order_by, schema = COLLECTIONS[collection]
        result = await db.execute(select(model).order_by(*order_by))
        return [schema.model_validate(row) for row in result.scalars().all()]

    async def publish(self, db: AsyncSession, *collections: str) -> None:
        """Push fresh snapshots of the given collections to their subscribers."""
        for collection in collections:
            if not self.has_subscribers(collection):
                continue
            try:
                items = await self.snapshot(db, collection)
            except Exception as e:
                # Subscribers keep their last good snapshot
                logger.error(f"Failed to load {collection} snapshot: {e}", exc_info=True)
                continue
            for buffer in list(self._subscribers[collection]):
                buffer.offer(collection, items)

    def publish_added(self, entries: List[ActivityLogEntry]) -> None:
        if not self._added_subscribers:
            return
        for entry in entries:
            payload = ActivityLogEntryInDB.model_validate(entry)
            for queue in list(self._added_subscribers):
                _offer(queue, payload)


# Singleton instance
live_feed = ChangeFeed()
