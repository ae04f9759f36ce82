"""Prompt catalog model."""

import enum
import uuid

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import TimestampedUUIDModel


class PromptCategory(str, enum.Enum):
    CODING = "Coding"
    WRITING = "Writing"
    ART = "Art"
    PRODUCTIVITY = "Productivity"
    OTHER = "Other"


class Prompt(TimestampedUUIDModel):
    __tablename__ = "prompts"
    __table_args__ = (
        CheckConstraint(
            "category IN ('Coding', 'Writing', 'Art', 'Productivity', 'Other')",
            name="ck_prompts_category",
        ),
        CheckConstraint("likes >= 0", name="ck_prompts_likes_non_negative"),
        Index("prompts_user_id_idx", "user_id"),
        Index("prompts_category_idx", "category"),
        Index("prompts_created_at_idx", "created_at"),
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(
        JSON().with_variant(ARRAY(Text), "postgresql"), nullable=False, default=list
    )
    # Display string only, not an identity reference
    author: Mapped[str] = mapped_column(Text, nullable=False)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PromptCategory.OTHER.value
    )

    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
