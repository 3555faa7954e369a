"""Court model."""
from sqlalchemy import Column, Integer, String, Boolean, Numeric, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from courtdesk.core.database import Base
from courtdesk.models.enums import CourtStatus, CourtType


class Court(Base):
    """A bookable padel court with a base rate and two optional offers."""

    __tablename__ = "courts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default=CourtType.INDOOR.value)
    surface_color = Column(String, nullable=False, default="blue")
    status = Column(String, nullable=False, default=CourtStatus.AVAILABLE.value)

    # Pricing
    base_price = Column(Numeric(12, 2), nullable=False, default=0)
    is_offer1_active = Column(Boolean, nullable=False, default=False)
    offer1_price = Column(Numeric(12, 2), nullable=False, default=0)
    offer1_label = Column(String, nullable=True)  # e.g. "Promo Mañana"
    is_offer2_active = Column(Boolean, nullable=False, default=False)
    offer2_price = Column(Numeric(12, 2), nullable=False, default=0)
    offer2_label = Column(String, nullable=True)  # e.g. "Socio"

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="court")

    @property
    def in_maintenance(self) -> bool:
        return self.status == CourtStatus.MAINTENANCE.value

    @property
    def effective_price(self):
        """First active offer in priority order, else the base price."""
        if self.is_offer1_active:
            return self.offer1_price
        if self.is_offer2_active:
            return self.offer2_price
        return self.base_price
