"""Endpoints for point adjustments, visits and redemptions."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ...core.config import Settings
from ...core.database import get_db
from ...core.errors import LedgerError, status_for
from ...schemas import PointsAdjustment, PointsOperationResult, RedemptionCreate, TransactionRead, VisitCreate
from ...services import points_service, transaction_service
from .deps import actor_is_admin, settings_dependency

router = APIRouter(prefix="/points", tags=["points"])

_OPERATION_RESPONSES = {
    200: {
        "description": "Operation applied",
        "content": {
            "application/json": {
                "example": {
                    "success": True,
                    "message": "Points updated.",
                    "error": None,
                    "balance": {
                        "user_id": "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb",
                        "delta": 10,
                        "new_points": 130,
                        "new_accumulated": 210,
                        "new_monthly": 40,
                    },
                }
            }
        },
    },
    400: {"description": "Invalid amount or insufficient balance", "model": PointsOperationResult},
    403: {"description": "Caller is not an admin", "model": PointsOperationResult},
    409: {"description": "Write affected no rows", "model": PointsOperationResult},
    503: {"description": "Balance store unavailable", "model": PointsOperationResult},
}


def _respond(result: PointsOperationResult) -> JSONResponse:
    return JSONResponse(status_code=status_for(result.error), content=result.model_dump(mode="json"))


@router.post("/adjust", response_model=PointsOperationResult, summary="Adjust points", responses=_OPERATION_RESPONSES)
def adjust_points(
    payload: PointsAdjustment,
    db: Session = Depends(get_db),
    is_admin: bool = Depends(actor_is_admin),
) -> JSONResponse:
    """Add (positive amount) or spend (negative amount) points.

    Example request body::

        {
            "user_id": "bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb",
            "amount": -15
        }
    """

    result = points_service.adjust_points(
        db,
        payload.user_id,
        payload.amount,
        authorized=is_admin,
        description=payload.description,
    )
    return _respond(result)


@router.post("/visits", response_model=PointsOperationResult, summary="Record a visit", responses=_OPERATION_RESPONSES)
def record_visit(
    payload: VisitCreate,
    db: Session = Depends(get_db),
    is_admin: bool = Depends(actor_is_admin),
) -> JSONResponse:
    result = points_service.record_visit(
        db,
        payload.user_id,
        authorized=is_admin,
        points=payload.points,
        description=payload.description,
    )
    return _respond(result)


@router.post(
    "/redemptions",
    response_model=PointsOperationResult,
    summary="Redeem points",
    responses=_OPERATION_RESPONSES,
)
def redeem_points(
    payload: RedemptionCreate,
    db: Session = Depends(get_db),
    is_admin: bool = Depends(actor_is_admin),
) -> JSONResponse:
    result = points_service.redeem_points(
        db,
        payload.user_id,
        payload.amount,
        authorized=is_admin,
        description=payload.description,
    )
    return _respond(result)


@router.get("/{user_id}/transactions", response_model=List[TransactionRead], summary="Recent transactions")
def recent_transactions(
    user_id: str,
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
    settings: Settings = Depends(settings_dependency),
) -> List[TransactionRead]:
    """Newest transactions of a profile."""

    try:
        transactions = transaction_service.list_recent_transactions(
            db, user_id, limit=limit or settings.recent_transactions_limit
        )
    except LedgerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return [TransactionRead.model_validate(tx) for tx in transactions]
