"""Endpoints for the monthly winners archive and the rollover."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...core.config import Settings
from ...core.database import get_db
from ...core.errors import LedgerError
from ...schemas import MonthlyWinnerRead, RolloverSummary
from ...services import rollover_service
from .deps import require_admin, settings_dependency

router = APIRouter(prefix="/winners", tags=["winners"])


@router.get("/latest", response_model=List[MonthlyWinnerRead], summary="Winners of the latest closed month")
def latest_winners(db: Session = Depends(get_db)) -> List[MonthlyWinnerRead]:
    try:
        winners = rollover_service.get_previous_month_winners(db)
    except LedgerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return [MonthlyWinnerRead.model_validate(winner) for winner in winners]


@router.get(
    "/{user_id}/status",
    response_model=Optional[MonthlyWinnerRead],
    summary="Champion badge for last month's rank 1",
)
def winner_status(
    user_id: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(settings_dependency),
) -> Optional[MonthlyWinnerRead]:
    """Return the winner record while the badge window is open, else null."""

    try:
        winner = rollover_service.get_monthly_winner_status(db, user_id, badge_days=settings.winner_badge_days)
    except LedgerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return MonthlyWinnerRead.model_validate(winner) if winner else None


@router.post(
    "/rollover",
    response_model=RolloverSummary,
    summary="Close the previous month",
    dependencies=[Depends(require_admin)],
    responses={403: {"description": "Caller is not an admin"}},
)
def run_rollover(
    db: Session = Depends(get_db),
    settings: Settings = Depends(settings_dependency),
) -> RolloverSummary:
    """Snapshot last month's winners and reset monthly points, once per month."""

    try:
        summary = rollover_service.check_and_snapshot_monthly_winners(db, snapshot_size=settings.snapshot_size)
        db.commit()
        return summary
    except LedgerError as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    except Exception:
        db.rollback()
        raise
