"""Profile registration and lookup."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import LedgerError, ProfileNotFound, translate_store_errors
from ..models import Profile, ProfileRole

logger = logging.getLogger(__name__)


def parse_profile_id(user_id: Any) -> Optional[UUID]:
    """Trim and parse a profile id; ``None`` when it cannot name any row."""

    if isinstance(user_id, UUID):
        return user_id
    if user_id is None:
        return None
    try:
        return UUID(str(user_id).strip())
    except ValueError:
        return None


def normalize_whatsapp(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    digits = re.sub(r"\D", "", raw)
    return digits or None


def get_profile(session: Session, user_id: Any) -> Profile:
    profile_id = parse_profile_id(user_id)
    if profile_id is None:
        raise ProfileNotFound(f"Profile {user_id!r} not found")
    with translate_store_errors("load a profile"):
        profile = session.execute(select(Profile).where(Profile.id == profile_id)).scalar_one_or_none()
    if profile is None:
        raise ProfileNotFound(f"Profile {profile_id} not found")
    return profile


def create_profile(
    session: Session,
    *,
    full_name: str,
    whatsapp: Optional[str] = None,
    role: ProfileRole = ProfileRole.CLIENT,
) -> Profile:
    """Insert a profile with all counters at zero."""

    name = full_name.strip()
    if not name:
        raise LedgerError("Full name is required.")

    phone = normalize_whatsapp(whatsapp)
    if phone is not None:
        existing = session.execute(select(Profile.id).where(Profile.whatsapp == phone)).scalar_one_or_none()
        if existing is not None:
            raise LedgerError(f"WhatsApp number {phone} is already registered.", status_code=409)

    profile = Profile(
        full_name=name,
        whatsapp=phone,
        role=role,
        points=0,
        total_points_accumulated=0,
        monthly_points=0,
    )
    session.add(profile)
    try:
        with translate_store_errors("create a profile"):
            session.flush()
    except IntegrityError as exc:
        # A concurrent registration took the number after the check above.
        session.rollback()
        raise LedgerError(f"WhatsApp number {phone} is already registered.", status_code=409) from exc
    logger.info("created %s profile %s", role.value, profile.id)
    return profile
