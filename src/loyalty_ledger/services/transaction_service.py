"""Append-only earn/redeem transaction records."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import InvalidAmount, ProfileNotFound, translate_store_errors
from ..models import Profile, Transaction, TransactionType
from ..utils.datetime import as_naive_utc, utcnow
from .profile_service import parse_profile_id

logger = logging.getLogger(__name__)


def _record(
    session: Session,
    user_id: Any,
    tx_type: TransactionType,
    amount: int,
    description: str,
    created_at: Optional[datetime],
) -> Transaction:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmount(f"Transaction amount must be a positive integer, got {amount!r}")

    profile_id = parse_profile_id(user_id)
    if profile_id is None:
        raise ProfileNotFound(f"Profile {user_id!r} not found")
    with translate_store_errors("look up a profile"):
        owner = session.execute(select(Profile.id).where(Profile.id == profile_id)).scalar_one_or_none()
    if owner is None:
        raise ProfileNotFound(f"Profile {profile_id} not found")

    transaction = Transaction(
        user_id=profile_id,
        type=tx_type,
        amount=amount,
        description=description or "",
        created_at=as_naive_utc(created_at) if created_at else utcnow(),
    )
    session.add(transaction)
    with translate_store_errors("record a transaction"):
        session.flush()
    logger.debug("recorded %s of %d for profile %s", tx_type.value, amount, profile_id)
    return transaction


def record_earn(
    session: Session,
    user_id: Any,
    amount: int,
    description: str,
    *,
    created_at: Optional[datetime] = None,
) -> Transaction:
    """Append an earn (visit) record; ``created_at`` may back-date it."""

    return _record(session, user_id, TransactionType.EARN, amount, description, created_at)


def record_redeem(
    session: Session,
    user_id: Any,
    amount: int,
    description: str,
    *,
    created_at: Optional[datetime] = None,
) -> Transaction:
    """Append a redeem record. ``amount`` is the positive magnitude."""

    return _record(session, user_id, TransactionType.REDEEM, amount, description, created_at)


def list_recent_transactions(session: Session, user_id: Any, *, limit: int = 5) -> Sequence[Transaction]:
    """Return the newest transactions of a profile."""

    profile_id = parse_profile_id(user_id)
    if profile_id is None:
        raise ProfileNotFound(f"Profile {user_id!r} not found")

    stmt = (
        select(Transaction)
        .where(Transaction.user_id == profile_id)
        .order_by(Transaction.created_at.desc())
        .limit(max(1, min(limit, 100)))
    )
    with translate_store_errors("list transactions"):
        return session.execute(stmt).scalars().all()
