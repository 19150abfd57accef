"""Request dependencies shared by the v1 routers."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from ...core.config import Settings, get_settings
from ...core.database import get_db
from ...core.errors import ProfileNotFound
from ...models import Profile
from ...services import profile_service


def get_actor(
    x_actor_id: Optional[str] = Header(None, description="Profile id of the authenticated caller."),
    db: Session = Depends(get_db),
) -> Optional[Profile]:
    """Resolve the calling profile from the identity header set upstream."""

    if not x_actor_id:
        return None
    try:
        return profile_service.get_profile(db, x_actor_id)
    except ProfileNotFound:
        return None


def actor_is_admin(actor: Optional[Profile] = Depends(get_actor)) -> bool:
    return actor is not None and actor.is_admin


def require_admin(is_admin: bool = Depends(actor_is_admin)) -> None:
    if not is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: admins only.")


def settings_dependency() -> Settings:
    return get_settings()
