"""Schemas for the monthly winners archive and rollover runs."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class MonthlyWinnerRead(BaseModel):
    month: date
    user_id: Optional[UUID]
    full_name: str
    points: int
    rank: int

    class Config:
        from_attributes = True


class RolloverSummary(BaseModel):
    """Outcome of one rollover check."""

    month: date
    skipped: bool
    winners_recorded: int = 0
    profiles_reset: int = 0
