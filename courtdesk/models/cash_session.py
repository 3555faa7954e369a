"""Cash register session model."""
from sqlalchemy import Column, Integer, String, Numeric, DateTime
from courtdesk.core.database import Base
from courtdesk.models.enums import CashSessionStatus


class CashSession(Base):
    """One opening-to-closing shift of the cash drawer."""

    __tablename__ = "cash_sessions"

    id = Column(Integer, primary_key=True, index=True)
    opened_at = Column(DateTime(timezone=True), nullable=False)
    closed_at = Column(DateTime(timezone=True), nullable=True)
    opened_by = Column(String, nullable=False)
    closed_by = Column(String, nullable=True)
    initial_amount = Column(Numeric(12, 2), nullable=False)
    final_amount = Column(Numeric(12, 2), nullable=True)
    status = Column(String, nullable=False, default=CashSessionStatus.OPEN.value, index=True)
