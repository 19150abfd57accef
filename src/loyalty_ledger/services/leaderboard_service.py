"""Monthly leaderboard ranking."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.errors import ProfileNotFound, translate_store_errors
from ..models import Profile, ProfileRole
from ..schemas import LeaderboardEntry, LoyaltyRanking
from .profile_service import parse_profile_id


def competitors_query(limit: int):
    """Non-admin profiles with monthly points, best first.

    Ties on monthly points fall back to lifetime points.
    """

    return (
        select(Profile)
        .where(Profile.role != ProfileRole.ADMIN, Profile.monthly_points > 0)
        .order_by(Profile.monthly_points.desc(), Profile.total_points_accumulated.desc())
        .limit(limit)
    )


def top_n(session: Session, *, limit: int = 5) -> Sequence[LeaderboardEntry]:
    """Return leaderboard entries ordered by monthly then lifetime points."""

    limit = max(1, min(limit, 100))
    with translate_store_errors("load the leaderboard"):
        profiles = session.execute(competitors_query(limit)).scalars().all()
    return [
        LeaderboardEntry(id=profile.id, full_name=profile.full_name, points=profile.monthly_points or 0)
        for profile in profiles
    ]


def rank_of(session: Session, user_id: Any) -> int:
    """1 + number of non-admins with strictly more monthly points.

    Only monthly points count here; equal scores share a rank.
    """

    profile_id = parse_profile_id(user_id)
    if profile_id is None:
        raise ProfileNotFound(f"Profile {user_id!r} not found")

    with translate_store_errors("compute a rank"):
        score = session.execute(
            select(func.coalesce(Profile.monthly_points, 0)).where(Profile.id == profile_id)
        ).scalar_one_or_none()
        if score is None:
            raise ProfileNotFound(f"Profile {profile_id} not found")

        ahead = session.execute(
            select(func.count(Profile.id)).where(
                Profile.role != ProfileRole.ADMIN,
                Profile.monthly_points > score,
            )
        ).scalar_one()
    return int(ahead) + 1


def get_top_loyalty_ranking(session: Session, user_id: Any, *, limit: int = 5) -> LoyaltyRanking:
    """Top entries plus the caller's rank (0 when the caller is unknown)."""

    top = top_n(session, limit=limit)
    try:
        user_rank = rank_of(session, user_id)
    except ProfileNotFound:
        user_rank = 0
    return LoyaltyRanking(top=list(top), user_rank=user_rank)
