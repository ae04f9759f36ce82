"""Admin panel endpoints (effective role ``admin`` required)."""

import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.access.policy import Actor
from app.api.dependencies import get_now, get_optional_actor
from app.catalog.schemas import PromptResponse
from app.core.database import get_db
from app.roles.schemas import ProfileResponse, RoleAssignment
from app.services import profile_service, prompt_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/prompts", response_model=List[PromptResponse])
def list_my_prompts(
    search: str = Query("", max_length=200),
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
):
    """Prompts owned by the acting admin, newest first, filtered by ``search``."""
    return prompt_service.list_owned_prompts(db, actor, search)


@router.get("/profiles", response_model=List[ProfileResponse])
def list_profiles(
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
    now: datetime = Depends(get_now),
):
    """All profiles with assigned role, effective role and active flag."""
    profiles = profile_service.list_profiles(db, actor)
    return [ProfileResponse.from_profile(p, now) for p in profiles]


@router.put("/profiles/{user_id}/role", response_model=ProfileResponse)
def assign_role(
    user_id: uuid.UUID,
    assignment: RoleAssignment,
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
    now: datetime = Depends(get_now),
):
    """Change a user's role and/or expiration."""
    profile = profile_service.assign_role(
        db, actor, user_id, assignment.model_dump(exclude_unset=True)
    )
    return ProfileResponse.from_profile(profile, now)
