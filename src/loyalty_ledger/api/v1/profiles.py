"""Endpoints for registering and reading profiles."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.errors import LedgerError
from ...models import ProfileRole
from ...schemas import ProfileCreate, ProfileRead
from ...services import profile_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post(
    "",
    response_model=ProfileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a profile",
    responses={409: {"description": "WhatsApp number already registered"}},
)
def create_profile(payload: ProfileCreate, db: Session = Depends(get_db)) -> ProfileRead:
    """Create a client profile with zero balances.

    Self-registration always yields a client; admins are provisioned out of band.

    Example request body::

        {
            "full_name": "Lucia Fernandez",
            "whatsapp": "+54 9 11 5555-0101"
        }
    """

    try:
        profile = profile_service.create_profile(
            db,
            full_name=payload.full_name,
            whatsapp=payload.whatsapp,
            role=ProfileRole.CLIENT,
        )
        db.commit()
        db.refresh(profile)
        return ProfileRead.model_validate(profile)
    except LedgerError as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("/{user_id}", response_model=ProfileRead, summary="Read a profile and its balances")
def read_profile(user_id: str, db: Session = Depends(get_db)) -> ProfileRead:
    try:
        return ProfileRead.model_validate(profile_service.get_profile(db, user_id))
    except LedgerError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
