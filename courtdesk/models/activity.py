"""Activity ledger model."""
from sqlalchemy import Column, Integer, String, Numeric
from courtdesk.core.database import Base


class ActivityLogEntry(Base):
    """Write-once record of a state-changing action.

    ``timestamp`` is an ISO-8601 UTC string so range queries and day/month
    partitioning work on plain string comparison.
    """

    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False)
    timestamp = Column(String(24), nullable=False, index=True)
    user = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=True)
    method = Column(String, nullable=True)

    def __repr__(self) -> str:
        return f"<ActivityLogEntry {self.timestamp} {self.type} amount={self.amount}>"
