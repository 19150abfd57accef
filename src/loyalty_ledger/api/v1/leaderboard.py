"""Leaderboard endpoint."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...core.config import Settings
from ...core.database import get_db
from ...core.errors import LedgerError
from ...schemas import LoyaltyRanking
from ...services import leaderboard_service
from .deps import settings_dependency

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get(
    "",
    response_model=LoyaltyRanking,
    summary="Monthly top clients and the caller's rank",
    responses={
        200: {
            "description": "Leaderboard entries ordered by monthly points, then lifetime points",
            "content": {
                "application/json": {
                    "example": {
                        "top": [
                            {
                                "id": "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb",
                                "full_name": "Lucia Fernandez",
                                "points": 42
                            }
                        ],
                        "user_rank": 3
                    }
                }
            },
        }
    },
)
def get_leaderboard(
    user_id: Optional[str] = Query(None, description="Profile whose rank should be reported"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Number of top clients to return"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(settings_dependency),
) -> LoyaltyRanking:
    """Return the monthly ranking; ``points`` is the monthly score."""

    try:
        return leaderboard_service.get_top_loyalty_ranking(
            db,
            user_id,
            limit=limit or settings.leaderboard_size,
        )
    except LedgerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
