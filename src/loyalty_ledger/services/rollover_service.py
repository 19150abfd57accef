"""Monthly competition close-out.

A rollover archives the previous month's top finishers and then zeroes
``monthly_points`` for every non-admin profile. The snapshot reads the live
monthly counters, so it has to run before any accrual in the new month.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import translate_store_errors
from ..models import MonthlyRollover, MonthlyWinner, Profile, ProfileRole, RolloverStatus
from ..schemas import RolloverSummary
from ..utils.datetime import as_naive_utc, month_bucket, previous_month_bucket, utcnow
from .leaderboard_service import competitors_query
from .profile_service import parse_profile_id

logger = logging.getLogger(__name__)

SNAPSHOT_SIZE = 5


def _already_closed(session: Session, month: date) -> bool:
    winner = session.execute(select(MonthlyWinner.id).where(MonthlyWinner.month == month).limit(1)).first()
    if winner is not None:
        return True
    claim = session.execute(select(MonthlyRollover.month).where(MonthlyRollover.month == month)).first()
    return claim is not None


def check_and_snapshot_monthly_winners(
    session: Session,
    *,
    now: Optional[datetime] = None,
    snapshot_size: int = SNAPSHOT_SIZE,
) -> RolloverSummary:
    """Close the previous calendar month exactly once.

    The caller commits. Any failure leaves the session to be rolled back,
    which discards the claim, the snapshot and the reset together.
    """

    now_naive = as_naive_utc(now) if now else utcnow()
    target_month = previous_month_bucket(month_bucket(now_naive))
    snapshot_size = max(1, min(snapshot_size, SNAPSHOT_SIZE))

    with translate_store_errors("check the winners archive"):
        if _already_closed(session, target_month):
            logger.debug("rollover for %s already done", target_month)
            return RolloverSummary(month=target_month, skipped=True)

    logger.info("starting monthly snapshot for %s", target_month)

    claim = MonthlyRollover(month=target_month, status=RolloverStatus.CLOSING, started_at=now_naive)
    session.add(claim)
    try:
        session.flush()
    except IntegrityError:
        session.rollback()
        logger.info("rollover for %s claimed by another worker", target_month)
        return RolloverSummary(month=target_month, skipped=True)

    with translate_store_errors("snapshot monthly winners"):
        winners = session.execute(competitors_query(snapshot_size)).scalars().all()
        for index, profile in enumerate(winners):
            session.add(
                MonthlyWinner(
                    month=target_month,
                    user_id=profile.id,
                    full_name=profile.full_name,
                    points=profile.monthly_points or 0,
                    rank=index + 1,
                )
            )
        session.flush()
    logger.info("snapshot for %s recorded %d winners", target_month, len(winners))

    try:
        with translate_store_errors("reset monthly points"):
            result = session.execute(
                update(Profile)
                .where(Profile.role != ProfileRole.ADMIN)
                .values(monthly_points=0, updated_at=now_naive)
                .execution_options(synchronize_session=False)
            )
    except Exception:
        logger.critical(
            "monthly_points reset for %s failed after the snapshot; manual reconciliation required",
            target_month,
        )
        raise
    reset_count = result.rowcount or 0
    session.expire_all()

    claim.status = RolloverStatus.COMPLETED
    claim.winners_recorded = len(winners)
    claim.profiles_reset = reset_count
    claim.completed_at = utcnow()
    session.flush()

    logger.info("monthly_points reset to 0 for %d profiles", reset_count)
    return RolloverSummary(
        month=target_month,
        skipped=False,
        winners_recorded=len(winners),
        profiles_reset=reset_count,
    )


def get_winners_for_month(session: Session, month: date) -> Sequence[MonthlyWinner]:
    stmt = select(MonthlyWinner).where(MonthlyWinner.month == month).order_by(MonthlyWinner.rank.asc())
    with translate_store_errors("load monthly winners"):
        return session.execute(stmt).scalars().all()


def get_previous_month_winners(session: Session) -> Sequence[MonthlyWinner]:
    """Winners of the most recent snapshotted month, by rank."""

    with translate_store_errors("load monthly winners"):
        latest = session.execute(
            select(MonthlyWinner.month).order_by(MonthlyWinner.month.desc()).limit(1)
        ).scalar_one_or_none()
    if latest is None:
        return []
    return get_winners_for_month(session, latest)


def get_monthly_winner_status(
    session: Session,
    user_id: Any,
    *,
    now: Optional[datetime] = None,
    badge_days: int = 7,
) -> Optional[MonthlyWinner]:
    """The user's rank-1 record for last month, shown early in the month only."""

    now_naive = as_naive_utc(now) if now else utcnow()
    if now_naive.day > badge_days:
        return None

    profile_id = parse_profile_id(user_id)
    if profile_id is None:
        return None

    target_month = previous_month_bucket(month_bucket(now_naive))
    stmt = select(MonthlyWinner).where(
        MonthlyWinner.month == target_month,
        MonthlyWinner.user_id == profile_id,
        MonthlyWinner.rank == 1,
    )
    with translate_store_errors("load winner status"):
        return session.execute(stmt).scalar_one_or_none()
