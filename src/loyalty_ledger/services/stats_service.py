"""Headline numbers for the admin dashboard."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.errors import translate_store_errors
from ..models import Profile, ProfileRole, Transaction, TransactionType
from ..schemas import AdminStats
from ..utils.datetime import start_of_day


def get_admin_stats(
    session: Session,
    *,
    now: Optional[datetime] = None,
    reward_threshold: int = 15,
) -> AdminStats:
    """Client count, today's visits (UTC day) and clients able to claim a reward."""

    today = start_of_day(now)

    with translate_store_errors("load admin statistics"):
        total_clients = session.execute(
            select(func.count(Profile.id)).where(Profile.role != ProfileRole.ADMIN)
        ).scalar_one()
        visits_today = session.execute(
            select(func.count(Transaction.id)).where(
                Transaction.type == TransactionType.EARN,
                Transaction.created_at >= today,
            )
        ).scalar_one()
        ready_for_reward = session.execute(
            select(func.count(Profile.id)).where(
                Profile.role != ProfileRole.ADMIN,
                Profile.points >= reward_threshold,
            )
        ).scalar_one()

    return AdminStats(
        total_clients=total_clients or 0,
        visits_today=visits_today or 0,
        ready_for_reward=ready_for_reward or 0,
    )
