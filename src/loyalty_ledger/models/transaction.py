"""Immutable transaction records backing every ledger mutation."""

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class TransactionType(str, enum.Enum):
    """Ledger event classification."""

    EARN = "earn"
    REDEEM = "redeem"


class Transaction(Base):
    """Append-only record of an earn or redeem event."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="transactions_amount_positive"),
        Index("transactions_user_type_created_idx", "user_id", "type", "created_at"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="RESTRICT"), nullable=False)
    type = Column(
        Enum(TransactionType, name="transaction_type", values_callable=lambda types: [t.value for t in types]),
        nullable=False,
    )
    amount = Column(Integer, nullable=False)
    description = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    profile = relationship("Profile", back_populates="transactions")
