"""Club settings: schedule grid, slot length and public-page promo."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from courtdesk.core.constants import (
    DEFAULT_CLUB_NAME,
    DEFAULT_OWNER_PHONE,
    DEFAULT_PROMO_PRICE,
    DEFAULT_PROMO_TEXT,
)
from courtdesk.models.club_config import ClubConfig
from courtdesk.schemas.config import ClubConfigInDB, ClubConfigUpdate
from courtdesk.services.schedule import Schedule, decode_schedule, default_schedule, encode_schedule

logger = logging.getLogger(__name__)

CONFIG_ID = 1


class ClubConfigService:
    """Service for the single club configuration row."""

    async def get_or_create(self, db: AsyncSession) -> ClubConfig:
        result = await db.execute(select(ClubConfig).where(ClubConfig.id == CONFIG_ID))
        config = result.scalar_one_or_none()

        if not config:
            logger.info("No club config found; creating defaults")
            config = ClubConfig(
                id=CONFIG_ID,
                name=DEFAULT_CLUB_NAME,
                schedule=encode_schedule(default_schedule()),
                slot_duration=30,
                owner_phone=DEFAULT_OWNER_PHONE,
                promo_active=False,
                promo_text=DEFAULT_PROMO_TEXT,
                promo_price=DEFAULT_PROMO_PRICE,
            )
            db.add(config)
            try:
                await db.commit()
            except IntegrityError:
                # Another session created the row first
                await db.rollback()
                logger.info("Club config created concurrently; reloading")
                result = await db.execute(select(ClubConfig).where(ClubConfig.id == CONFIG_ID))
                return result.scalar_one()
            await db.refresh(config)

        return config

    async def get_schedule(self, db: AsyncSession) -> Schedule:
        config = await self.get_or_create(db)
        return decode_schedule(config.schedule)

    def to_schema(self, config: ClubConfig) -> ClubConfigInDB:
        return ClubConfigInDB(
            name=config.name,
            schedule=decode_schedule(config.schedule),
            slot_duration=config.slot_duration,
            owner_phone=config.owner_phone,
            promo_active=config.promo_active,
            promo_text=config.promo_text,
            promo_price=config.promo_price,
            updated_at=config.updated_at,
        )

    async def update(self, db: AsyncSession, update: ClubConfigUpdate) -> ClubConfig:
        """Replace the whole configuration (last write wins)."""
        config = await self.get_or_create(db)

        data = update.model_dump()
        data["schedule"] = encode_schedule(update.schedule)
        for field, value in data.items():
            setattr(config, field, value)

        await db.commit()
        await db.refresh(config)
        logger.info(f"Club config updated ({config.name})")
        return config


# Singleton instance
club_config_service = ClubConfigService()
