"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from courtdesk.api import (
    activity,
    bookings,
    cashbox,
    club_settings,
    courts,
    inventory,
    live,
    maintenance,
    payments,
    public,
    reports,
)
from courtdesk.core.config import settings
from courtdesk.core.database import AsyncSessionLocal, init_db
from courtdesk.services.scheduler import maintenance_scheduler
from courtdesk.services.seed import seed_defaults

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting CourtDesk")
    logger.info(f"Debug mode: {settings.DEBUG}")

    await init_db()
    if settings.SEED_DEFAULTS:
        async with AsyncSessionLocal() as db:
            await seed_defaults(db)

    await maintenance_scheduler.start()

    yield

    # Shutdown
    logger.info("Shutting down CourtDesk")
    await maintenance_scheduler.stop()


# Create FastAPI app
app = FastAPI(
    title="CourtDesk",
    description="Front desk, bookings, point of sale and cash register for a padel club",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(courts.router)
app.include_router(bookings.router)
app.include_router(public.router)
app.include_router(inventory.router)
app.include_router(activity.router)
app.include_router(cashbox.router)
app.include_router(reports.router)
app.include_router(maintenance.router)
app.include_router(club_settings.router)
app.include_router(payments.router)
app.include_router(live.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "scheduler_running": maintenance_scheduler.running,
    }
