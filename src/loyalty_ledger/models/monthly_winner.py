"""Archive of each month's top finishers."""

import uuid

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID

from ..core.database import Base
from ..utils.datetime import utcnow


class MonthlyWinner(Base):
    """Snapshot row written once per (month, rank) by the rollover.

    ``full_name`` is copied at snapshot time so history survives renames.
    """

    __tablename__ = "monthly_winners"
    __table_args__ = (
        UniqueConstraint("month", "rank", name="monthly_winners_month_rank_unique"),
        UniqueConstraint("month", "user_id", name="monthly_winners_month_user_unique"),
        CheckConstraint("rank >= 1 AND rank <= 5", name="monthly_winners_rank_range"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    month = Column(Date, nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="SET NULL"))
    full_name = Column(String, nullable=False)
    points = Column(Integer, nullable=False)
    rank = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
