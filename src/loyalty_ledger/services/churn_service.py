"""Visit-recency analytics: days since last visit and churn status."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.errors import translate_store_errors
from ..models import Profile, ProfileRole, Transaction, TransactionType
from ..schemas import ChurnClassification, ClientStatus
from ..utils.datetime import as_naive_utc, utcnow, whole_days_between
from .profile_service import get_profile

AT_RISK_DAYS = 21
NEW_CLIENT_DAYS = 7


def _visit_stats_query():
    return (
        select(
            Transaction.user_id,
            func.max(Transaction.created_at).label("last_visit"),
            func.count(Transaction.id).label("visit_count"),
        )
        .where(Transaction.type == TransactionType.EARN)
        .group_by(Transaction.user_id)
    )


def classify_profile(
    profile: Profile,
    last_visit: Optional[datetime],
    visit_count: int,
    now: datetime,
    *,
    at_risk_days: int = AT_RISK_DAYS,
    new_client_days: int = NEW_CLIENT_DAYS,
) -> ChurnClassification:
    """Classify one profile from its most recent earn and visit count.

    Without any earn the account creation time stands in for the last visit.
    """

    reference = last_visit or profile.created_at
    days = max(0, whole_days_between(reference, now))

    if days > at_risk_days:
        status = ClientStatus.AT_RISK
    elif visit_count == 0 and days < new_client_days:
        status = ClientStatus.NEW
    else:
        status = ClientStatus.LOYAL

    return ChurnClassification(
        user_id=profile.id,
        full_name=profile.full_name,
        last_visit_days=days,
        visit_count=visit_count,
        status=status,
    )


def classify(
    session: Session,
    user_id: Any,
    *,
    now: Optional[datetime] = None,
    at_risk_days: int = AT_RISK_DAYS,
    new_client_days: int = NEW_CLIENT_DAYS,
) -> ChurnClassification:
    now_naive = as_naive_utc(now) if now else utcnow()
    profile = get_profile(session, user_id)

    with translate_store_errors("load visit history"):
        row = session.execute(_visit_stats_query().where(Transaction.user_id == profile.id)).first()

    last_visit = row.last_visit if row else None
    visit_count = int(row.visit_count) if row else 0
    return classify_profile(
        profile,
        last_visit,
        visit_count,
        now_naive,
        at_risk_days=at_risk_days,
        new_client_days=new_client_days,
    )


def client_insights(
    session: Session,
    *,
    now: Optional[datetime] = None,
    at_risk_days: int = AT_RISK_DAYS,
    new_client_days: int = NEW_CLIENT_DAYS,
) -> Sequence[ChurnClassification]:
    """Classify every non-admin profile, longest absence first."""

    now_naive = as_naive_utc(now) if now else utcnow()

    with translate_store_errors("load client analytics"):
        profiles = session.execute(select(Profile).where(Profile.role != ProfileRole.ADMIN)).scalars().all()
        stats = {row.user_id: row for row in session.execute(_visit_stats_query()).all()}

    results = []
    for profile in profiles:
        row = stats.get(profile.id)
        results.append(
            classify_profile(
                profile,
                row.last_visit if row else None,
                int(row.visit_count) if row else 0,
                now_naive,
                at_risk_days=at_risk_days,
                new_client_days=new_client_days,
            )
        )
    results.sort(key=lambda item: item.last_visit_days, reverse=True)
    return results


def at_risk_client_count(
    session: Session,
    *,
    now: Optional[datetime] = None,
    at_risk_days: int = AT_RISK_DAYS,
) -> int:
    insights = client_insights(session, now=now, at_risk_days=at_risk_days)
    return sum(1 for item in insights if item.status == ClientStatus.AT_RISK)
