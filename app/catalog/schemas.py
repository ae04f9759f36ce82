"""Pydantic schemas for prompts."""

from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer, field_validator

from app.models.prompt import PromptCategory


def _normalize_tags(value: Union[str, List[str], None]) -> Optional[List[str]]:
    # The admin form sends tags as "a, b, c"
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    elif not isinstance(value, list):
        raise ValueError("tags must be a list of strings or a comma-separated string")
    if any(not isinstance(tag, str) for tag in value):
        raise ValueError("every tag must be a string")
    return [tag.strip() for tag in value if tag.strip()]


class PromptBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    author: str = Field(..., min_length=1, max_length=100)
    category: PromptCategory = PromptCategory.OTHER

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _normalize_tags(v) or []

    @field_validator("title", "description", "content", "author", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class PromptCreate(PromptBase):
    """Payload for creating a prompt. Likes and id are server-controlled."""
    pass


class PromptUpdate(BaseModel):
    """Payload for updating a prompt. Omitted fields are left unchanged."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[PromptCategory] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _normalize_tags(v)

    @field_validator("title", "description", "content", "author", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class PromptResponse(BaseModel):
    id: UUID
    title: str
    description: str
    content: str
    tags: List[str]
    author: str
    likes: int
    category: PromptCategory
    created_at: datetime
    user_id: Optional[UUID] = None

    @field_serializer("id")
    def serialize_id(self, value: UUID) -> str:
        return str(value)

    class Config:
        from_attributes = True


class PromptListResponse(BaseModel):
    items: List[PromptResponse]
    total: int
    # Set when the catalog could not be read; items is empty in that case
    error: Optional[str] = None


class LikeResponse(BaseModel):
    id: UUID
    likes: int
