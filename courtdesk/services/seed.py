"""First-run defaults."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.constants import DEFAULT_COURTS
from courtdesk.models.court import Court
from courtdesk.services.club_config_service import club_config_service

logger = logging.getLogger(__name__)


async def seed_defaults(db: AsyncSession) -> int:
    """Create the club config and the default courts on an empty database.

    Returns the number of courts created.
    """
    await club_config_service.get_or_create(db)

    result = await db.execute(select(func.count()).select_from(Court))
    if result.scalar_one():
        return 0

    for data in DEFAULT_COURTS:
        db.add(Court(**data))
    await db.commit()
    logger.info(f"Seeded {len(DEFAULT_COURTS)} default courts")
    return len(DEFAULT_COURTS)
