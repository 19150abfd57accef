"""Endpoints for churn analytics and admin statistics."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...core.config import Settings
from ...core.database import get_db
from ...core.errors import LedgerError
from ...schemas import AdminStats, AtRiskCount, ChurnClassification
from ...services import churn_service, stats_service
from .deps import require_admin, settings_dependency

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "/at-risk-count",
    response_model=AtRiskCount,
    summary="Number of clients at risk of churning",
    dependencies=[Depends(require_admin)],
)
def at_risk_count(
    db: Session = Depends(get_db),
    settings: Settings = Depends(settings_dependency),
) -> AtRiskCount:
    try:
        count = churn_service.at_risk_client_count(db, at_risk_days=settings.at_risk_days)
    except LedgerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return AtRiskCount(at_risk=count)


@router.get(
    "/clients",
    response_model=List[ChurnClassification],
    summary="Visit-recency classification of every client",
    dependencies=[Depends(require_admin)],
)
def client_insights(
    db: Session = Depends(get_db),
    settings: Settings = Depends(settings_dependency),
) -> List[ChurnClassification]:
    try:
        return list(
            churn_service.client_insights(
                db,
                at_risk_days=settings.at_risk_days,
                new_client_days=settings.new_client_days,
            )
        )
    except LedgerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("/clients/{user_id}", response_model=ChurnClassification, summary="Classify one client")
def classify_client(
    user_id: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(settings_dependency),
) -> ChurnClassification:
    try:
        return churn_service.classify(
            db,
            user_id,
            at_risk_days=settings.at_risk_days,
            new_client_days=settings.new_client_days,
        )
    except LedgerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get(
    "/stats",
    response_model=AdminStats,
    summary="Dashboard counters",
    dependencies=[Depends(require_admin)],
)
def admin_stats(
    db: Session = Depends(get_db),
    settings: Settings = Depends(settings_dependency),
) -> AdminStats:
    try:
        return stats_service.get_admin_stats(db, reward_threshold=settings.reward_threshold)
    except LedgerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
