"""Pydantic schemas for profile endpoints."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from ..models import ProfileRole


class ProfileCreate(BaseModel):
    """Request body for registering a profile."""

    full_name: str = Field(..., min_length=1, max_length=120)
    whatsapp: Optional[str] = Field(None, max_length=32)


class ProfileRead(BaseModel):
    """Profile with its three balances."""

    id: UUID
    full_name: str
    whatsapp: Optional[str]
    role: ProfileRole
    points: int
    total_points_accumulated: int
    monthly_points: int
    created_at: datetime

    class Config:
        from_attributes = True
