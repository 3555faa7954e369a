"""Live WebSocket subscriptions.

Each collection socket receives the full ordered snapshot on connect and
again after every change. ``/ws/activity/new`` only receives entries
appended after the socket connected. ``/ws/dashboard`` receives the
recomputed dashboard whenever bookings, activity or products change.
"""
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.database import get_db
from courtdesk.services.live_feed import COLLECTIONS, live_feed
from courtdesk.services.store import ClubStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ws", tags=["live"])


def _snapshot_message(collection: str, items: List[Any]) -> dict:
    return {"collection": collection, "items": [item.model_dump(mode="json") for item in items]}


@router.websocket("/activity/new")
async def activity_added(websocket: WebSocket):
    await websocket.accept()
    queue = live_feed.subscribe_added()
    try:
        while True:
            entry = await queue.get()
            await websocket.send_json(entry.model_dump(mode="json"))
    except WebSocketDisconnect:
        logger.debug("Activity feed client disconnected")
    finally:
        live_feed.unsubscribe_added(queue)


@router.websocket("/dashboard")
async def dashboard(websocket: WebSocket, db: AsyncSession = Depends(get_db)):
    await websocket.accept()
    store = ClubStore()
    try:
        await store.open(db)
        await websocket.send_json(store.dashboard().model_dump(mode="json"))
        while True:
            view = await store.next_dashboard()
            await websocket.send_json(view.model_dump(mode="json"))
    except WebSocketDisconnect:
        logger.debug("Dashboard client disconnected")
    finally:
        store.close()


@router.websocket("/{collection}")
async def collection_snapshots(
    websocket: WebSocket,
    collection: str,
    db: AsyncSession = Depends(get_db),
):
    if collection not in COLLECTIONS:
        await websocket.close(code=1008, reason=f"Unknown collection '{collection}'")
        return

    await websocket.accept()
    pending = live_feed.subscribe(collection)
    try:
        items = await live_feed.snapshot(db, collection)
        await websocket.send_json(_snapshot_message(collection, items))
        while True:
            name, items = await pending.get()
            await websocket.send_json(_snapshot_message(name, items))
    except WebSocketDisconnect:
        logger.debug(f"{collection} client disconnected")
    finally:
        live_feed.unsubscribe(collection, pending)
