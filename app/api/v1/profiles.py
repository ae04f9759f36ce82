"""Endpoints for the caller's own profile."""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.access.policy import Actor
from app.api.dependencies import get_current_actor, get_now
from app.core.database import get_db
from app.roles.schemas import ProfileResponse, ProfileSelfUpdate
from app.services import profile_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
def read_own_profile(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    now: datetime = Depends(get_now),
):
    """Current profile with its effective role. Created on first access."""
    profile = profile_service.get_profile(db, actor.user_id)
    return ProfileResponse.from_profile(profile, now)


@router.patch("/me", response_model=ProfileResponse)
def update_own_profile(
    profile_data: ProfileSelfUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    now: datetime = Depends(get_now),
):
    """Update non-role fields of the caller's profile."""
    profile = profile_service.update_own_profile(
        db, actor, actor.user_id, profile_data.model_dump(exclude_unset=True)
    )
    return ProfileResponse.from_profile(profile, now)
