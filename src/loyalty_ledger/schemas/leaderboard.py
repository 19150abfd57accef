"""Leaderboard response schemas."""

from uuid import UUID

from pydantic import BaseModel, Field


class LeaderboardEntry(BaseModel):
    """Ranked entry; ``points`` carries the monthly competition score."""

    id: UUID
    full_name: str
    points: int = Field(..., ge=0)


class LoyaltyRanking(BaseModel):
    top: list[LeaderboardEntry]
    user_rank: int = Field(..., ge=0, description="1-based rank of the requesting user, 0 when unknown.")
