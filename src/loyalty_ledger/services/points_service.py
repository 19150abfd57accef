"""Caller-facing point operations.

Each operation writes the balance change and its transaction record in one
session transaction and reports the outcome as a ``PointsOperationResult``.
Ledger errors never escape these functions; the session is rolled back so
balances and history stay exactly as they were.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from ..core.errors import InvalidAmount, LedgerError, Unauthorized, translate_store_errors
from ..schemas import BalanceChange, PointsOperationResult
from . import ledger_service, transaction_service

logger = logging.getLogger(__name__)

DEFAULT_EARN_DESCRIPTION = "Manual adjustment"
DEFAULT_REDEEM_DESCRIPTION = "Reward redemption"


def _require_authorized(authorized: bool) -> None:
    if not authorized:
        raise Unauthorized("Forbidden: admins only.")


def _run(
    session: Session,
    operation: Callable[[], BalanceChange],
    *,
    name: str,
    success_message: str,
) -> PointsOperationResult:
    try:
        change = operation()
        with translate_store_errors("commit the ledger write"):
            session.commit()
    except LedgerError as exc:
        session.rollback()
        logger.warning("%s rejected (%s): %s", name, exc.code, exc.detail)
        return PointsOperationResult(success=False, message=exc.detail, error=exc.code)
    except Exception:
        session.rollback()
        logger.exception("%s failed unexpectedly", name)
        raise

    return PointsOperationResult(success=True, message=success_message, balance=change)


def adjust_points(
    session: Session,
    user_id: Any,
    amount: Any,
    *,
    authorized: bool,
    description: Optional[str] = None,
) -> PointsOperationResult:
    """Add (earn) or remove (redeem) points on an admin's behalf."""

    def operation() -> BalanceChange:
        _require_authorized(authorized)
        delta = ledger_service.coerce_amount(amount)
        if delta < 0:
            ledger_service.ensure_sufficient_balance(session, user_id, delta)

        change = ledger_service.apply_delta(session, user_id, delta, authorized=authorized)
        if delta > 0:
            transaction_service.record_earn(session, change.user_id, delta, description or DEFAULT_EARN_DESCRIPTION)
        else:
            transaction_service.record_redeem(
                session, change.user_id, -delta, description or DEFAULT_REDEEM_DESCRIPTION
            )
        return change

    return _run(session, operation, name="adjust_points", success_message="Points updated.")


def record_visit(
    session: Session,
    user_id: Any,
    *,
    authorized: bool,
    points: int = 1,
    description: str = "Visit",
) -> PointsOperationResult:
    """Credit a visit: earn record plus a positive ledger write."""

    def operation() -> BalanceChange:
        _require_authorized(authorized)
        delta = ledger_service.coerce_amount(points)
        if delta < 0:
            raise InvalidAmount("Visit points must be positive.")
        change = ledger_service.apply_delta(session, user_id, delta, authorized=authorized)
        transaction_service.record_earn(session, change.user_id, delta, description)
        return change

    return _run(session, operation, name="record_visit", success_message="Visit recorded.")


def redeem_points(
    session: Session,
    user_id: Any,
    amount: int,
    *,
    authorized: bool,
    description: str = DEFAULT_REDEEM_DESCRIPTION,
) -> PointsOperationResult:
    """Spend points on a reward after checking the spendable balance."""

    def operation() -> BalanceChange:
        _require_authorized(authorized)
        magnitude = ledger_service.coerce_amount(amount)
        if magnitude < 0:
            raise InvalidAmount("Redemption amount must be positive.")
        ledger_service.ensure_sufficient_balance(session, user_id, magnitude)
        change = ledger_service.apply_delta(session, user_id, -magnitude, authorized=authorized)
        transaction_service.record_redeem(session, change.user_id, magnitude, description)
        return change

    return _run(session, operation, name="redeem_points", success_message="Points redeemed.")
