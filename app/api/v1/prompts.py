"""Public prompt gallery and admin-only prompt management endpoints."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.access.policy import Actor
from app.api.dependencies import get_optional_actor
from app.catalog.filters import parse_category
from app.catalog.schemas import (
    LikeResponse,
    PromptCreate,
    PromptListResponse,
    PromptResponse,
    PromptUpdate,
)
from app.core.database import get_db
from app.services import like_service, prompt_service

router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.get("/", response_model=PromptListResponse)
def list_prompts(
    search: str = Query("", max_length=200),
    category: Optional[str] = Query(None, description="Category name or 'All'"),
    db: Session = Depends(get_db),
):
    """List prompts newest first, optionally filtered by search text and category."""
    listing = prompt_service.list_prompts(db, search=search, category=parse_category(category))
    return PromptListResponse(
        items=[PromptResponse.model_validate(p) for p in listing.prompts],
        total=len(listing.prompts),
        error=listing.error,
    )


@router.get("/{prompt_id}", response_model=PromptResponse)
def get_prompt(prompt_id: uuid.UUID, db: Session = Depends(get_db)):
    return prompt_service.get_prompt(db, prompt_id)


@router.post("/", response_model=PromptResponse, status_code=status.HTTP_201_CREATED)
def create_prompt(
    prompt_data: PromptCreate,
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
):
    """Create a prompt (admin only)."""
    return prompt_service.create_prompt(db, actor, prompt_data)


@router.put("/{prompt_id}", response_model=PromptResponse)
def update_prompt(
    prompt_id: uuid.UUID,
    prompt_data: PromptUpdate,
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
):
    """Update a prompt (admin only). Likes are preserved."""
    return prompt_service.update_prompt(db, actor, prompt_id, prompt_data)


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_prompt(
    prompt_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
):
    """Delete a prompt (admin only)."""
    prompt_service.delete_prompt(db, actor, prompt_id)


@router.post("/{prompt_id}/like", response_model=LikeResponse)
def like_prompt(prompt_id: uuid.UUID, db: Session = Depends(get_db)):
    """Add one like. No authentication required."""
    likes = like_service.increment_likes(db, prompt_id)
    return LikeResponse(id=prompt_id, likes=likes)
