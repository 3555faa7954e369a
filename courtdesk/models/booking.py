"""Booking model."""
from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    ForeignKey,
    DateTime,
    Date,
    Time,
    Numeric,
    Index,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from courtdesk.core.database import Base
from courtdesk.models.enums import BookingStatus

ACTIVE_BOOKING_CLAUSE = text("status != 'cancelled'")


class Booking(Base):
    """A customer's reservation of one court slot."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    court_id = Column(Integer, ForeignKey("courts.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)
    duration = Column(Integer, nullable=False, default=90)  # minutes
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False, default="")
    status = Column(String, nullable=False, default=BookingStatus.PENDING.value)
    payment_method = Column(String, nullable=True)  # None until the customer pays
    price = Column(Numeric(12, 2), nullable=False)
    is_recurring = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    court = relationship("Court", back_populates="bookings")

    # One live booking per (court, date, time); cancelled rows keep their slot history
    __table_args__ = (
        Index(
            "ux_bookings_active_slot",
            "court_id",
            "date",
            "time",
            unique=True,
            postgresql_where=ACTIVE_BOOKING_CLAUSE,
            sqlite_where=ACTIVE_BOOKING_CLAUSE,
        ),
        Index("ix_bookings_date_time", "date", "time"),
    )

    def __repr__(self) -> str:
        return f"<Booking {self.date} {self.time} court={self.court_id} status={self.status}>"
