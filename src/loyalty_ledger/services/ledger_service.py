"""Balance mutation for the three point counters.

Every write is a single server-side ``UPDATE`` that increments the counters
in place, so concurrent adjustments to one profile cannot overwrite each
other. Positive deltas feed the spendable, lifetime and monthly counters;
negative deltas only draw down the spendable balance.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ..core.errors import InsufficientBalance, InvalidAmount, Unauthorized, UpdateFailed, translate_store_errors
from ..models import Profile
from ..schemas import BalanceChange
from ..utils.datetime import utcnow
from .profile_service import parse_profile_id

logger = logging.getLogger(__name__)

# Largest value the INTEGER counter columns hold on PostgreSQL.
MAX_POINTS = 2**31 - 1


def coerce_amount(value: Any) -> int:
    """Interpret a caller-supplied amount as a non-zero integer."""

    if isinstance(value, bool) or value is None:
        raise InvalidAmount(f"Invalid points amount: {value!r}")
    if isinstance(value, int):
        amount = value
    elif isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")) or not value.is_integer():
            raise InvalidAmount(f"Invalid points amount: {value!r}")
        amount = int(value)
    elif isinstance(value, str):
        try:
            amount = int(value.strip())
        except ValueError as exc:
            raise InvalidAmount(f"Invalid points amount: {value!r}") from exc
    else:
        raise InvalidAmount(f"Invalid points amount: {value!r}")

    if amount == 0:
        raise InvalidAmount("Points amount cannot be zero.")
    if abs(amount) > MAX_POINTS:
        raise InvalidAmount(f"Points amount {amount} exceeds the limit of {MAX_POINTS}.")
    return amount


def spendable_balance(session: Session, profile_id: UUID) -> int:
    stmt = select(func.coalesce(Profile.points, 0)).where(Profile.id == profile_id)
    with translate_store_errors("read a balance"):
        balance = session.execute(stmt).scalar_one_or_none()
    if balance is None:
        raise UpdateFailed(f"Update affected no rows: no profile with id {profile_id}.")
    return int(balance)


def ensure_sufficient_balance(session: Session, user_id: Any, amount: int) -> int:
    """Reject a redemption of ``amount`` points the profile cannot cover.

    Returns the current spendable balance. An id that names no profile is
    reported as ``UpdateFailed``, the same as the writer does.
    """

    profile_id = parse_profile_id(user_id)
    if profile_id is None:
        raise UpdateFailed(f"Update affected no rows: {user_id!r} is not a valid profile id.")

    balance = spendable_balance(session, profile_id)
    if abs(amount) > balance:
        raise InsufficientBalance(
            f"Insufficient points: balance is {balance}, requested {abs(amount)}."
        )
    return balance


def apply_delta(session: Session, user_id: Any, delta: Any, *, authorized: bool) -> BalanceChange:
    """Apply a signed point delta to a profile.

    The caller owns the transaction; nothing is committed here and nothing
    is retried.
    """

    if not authorized:
        raise Unauthorized("Admin rights are required to change point balances.")

    amount = coerce_amount(delta)
    profile_id = parse_profile_id(user_id)
    if profile_id is None:
        raise UpdateFailed(f"Update affected no rows: {user_id!r} is not a valid profile id.")

    earned = amount if amount > 0 else 0
    current_points = func.coalesce(Profile.points, 0)

    stmt = (
        update(Profile)
        .where(Profile.id == profile_id)
        .values(
            points=current_points + amount,
            total_points_accumulated=func.coalesce(Profile.total_points_accumulated, 0) + earned,
            monthly_points=func.coalesce(Profile.monthly_points, 0) + earned,
            updated_at=utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    if amount < 0:
        # Last-moment balance check, evaluated by the store inside the write.
        stmt = stmt.where(current_points >= -amount)
    else:
        stmt = stmt.where(
            current_points <= MAX_POINTS - amount,
            func.coalesce(Profile.total_points_accumulated, 0) <= MAX_POINTS - amount,
        )

    with translate_store_errors("update a balance"):
        result = session.execute(stmt)

    if result.rowcount == 0:
        exists = session.execute(select(Profile.id).where(Profile.id == profile_id)).scalar_one_or_none()
        if exists is None:
            logger.error("balance update for %s affected 0 rows", profile_id)
            raise UpdateFailed(f"Update affected no rows: no profile with id {profile_id}.")
        if amount > 0:
            raise InvalidAmount(f"Adding {amount} points would exceed the limit of {MAX_POINTS}.")
        raise InsufficientBalance(
            f"Insufficient points to apply {amount} to profile {profile_id}."
        )

    with translate_store_errors("read back a balance"):
        row = session.execute(
            select(Profile.points, Profile.total_points_accumulated, Profile.monthly_points).where(
                Profile.id == profile_id
            )
        ).one()

    change = BalanceChange(
        user_id=profile_id,
        delta=amount,
        new_points=row.points,
        new_accumulated=row.total_points_accumulated,
        new_monthly=row.monthly_points,
    )
    logger.info(
        "applied %+d to profile %s: points=%d lifetime=%d monthly=%d",
        amount,
        profile_id,
        change.new_points,
        change.new_accumulated,
        change.new_monthly,
    )
    return change
