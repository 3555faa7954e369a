"""Club configuration model."""
from sqlalchemy import Column, Integer, String, Boolean, Numeric, DateTime, JSON
from sqlalchemy.sql import func
from courtdesk.core.database import Base


class ClubConfig(Base):
    """Single-row club settings."""

    __tablename__ = "club_config"

    id = Column(Integer, primary_key=True, default=1)
    name = Column(String, nullable=False)
    schedule = Column(JSON, nullable=False)  # {"day0": [24 bools], ..., "day6": [...]}
    slot_duration = Column(Integer, nullable=False, default=30)
    owner_phone = Column(String, nullable=True)
    promo_active = Column(Boolean, nullable=False, default=False)
    promo_text = Column(String, nullable=True)
    promo_price = Column(Numeric(12, 2), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
