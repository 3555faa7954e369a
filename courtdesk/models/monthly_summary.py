"""Monthly summary model."""
from sqlalchemy import Column, Integer, String, Numeric, DateTime
from courtdesk.core.database import Base


class MonthlySummary(Base):
    """Compacted totals for one calendar month of ledger entries."""

    __tablename__ = "monthly_summaries"

    id = Column(String(7), primary_key=True)  # "YYYY-MM"
    label = Column(String, nullable=False)
    total_income = Column(Numeric(14, 2), nullable=False, default=0)
    total_expenses = Column(Numeric(14, 2), nullable=False, default=0)
    operation_count = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=True)
