"""Schemas for churn classification and admin statistics."""

import enum
from uuid import UUID

from pydantic import BaseModel, Field


class ClientStatus(str, enum.Enum):
    """Visit-recency classification."""

    LOYAL = "Loyal"
    AT_RISK = "At Risk"
    NEW = "New"


class ChurnClassification(BaseModel):
    user_id: UUID
    full_name: str
    last_visit_days: int = Field(..., ge=0)
    visit_count: int = Field(..., ge=0)
    status: ClientStatus


class AtRiskCount(BaseModel):
    at_risk: int = Field(..., ge=0)


class AdminStats(BaseModel):
    total_clients: int = Field(..., ge=0)
    visits_today: int = Field(..., ge=0)
    ready_for_reward: int = Field(..., ge=0)
