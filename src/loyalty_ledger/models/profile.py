"""Profile model holding the three point counters."""

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.datetime import utcnow


class ProfileRole(str, enum.Enum):
    """Account role; only admins are kept out of competitions."""

    ADMIN = "admin"
    CLIENT = "client"
    USER = "user"


class Profile(Base):
    """A registered person and their spendable, lifetime and monthly balances."""

    __tablename__ = "profiles"
    __table_args__ = (
        UniqueConstraint("whatsapp", name="profiles_whatsapp_unique"),
        CheckConstraint("points >= 0", name="profiles_points_non_negative"),
        CheckConstraint("monthly_points >= 0", name="profiles_monthly_points_non_negative"),
        CheckConstraint("total_points_accumulated >= 0", name="profiles_total_points_non_negative"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    full_name = Column(String, nullable=False)
    whatsapp = Column(String)
    role = Column(
        Enum(ProfileRole, name="profile_role", values_callable=lambda roles: [role.value for role in roles]),
        nullable=False,
        default=ProfileRole.CLIENT,
    )
    points = Column(Integer, nullable=False, default=0, server_default="0")
    total_points_accumulated = Column(Integer, nullable=False, default=0, server_default="0")
    monthly_points = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    transactions = relationship("Transaction", back_populates="profile")

    @property
    def is_admin(self) -> bool:
        return self.role == ProfileRole.ADMIN
