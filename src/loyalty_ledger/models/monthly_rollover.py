"""Per-month rollover claim used as the idempotency key."""

import enum

from sqlalchemy import Column, Date, DateTime, Enum, Integer

from ..core.database import Base
from ..utils.datetime import utcnow


class RolloverStatus(str, enum.Enum):
    """Lifecycle of a month close-out."""

    CLOSING = "CLOSING"
    COMPLETED = "COMPLETED"


class MonthlyRollover(Base):
    """One row per closed month; the primary key rejects a second claim."""

    __tablename__ = "monthly_rollovers"

    month = Column(Date, primary_key=True)
    status = Column(Enum(RolloverStatus, name="rollover_status"), nullable=False, default=RolloverStatus.CLOSING)
    winners_recorded = Column(Integer, nullable=False, default=0)
    profiles_reset = Column(Integer, nullable=False, default=0)
    started_at = Column(DateTime, default=utcnow, nullable=False)
    completed_at = Column(DateTime)
