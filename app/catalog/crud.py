"""CRUD operations for the prompt catalog."""

import logging
import uuid
from typing import Any, List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.models.prompt import Prompt


logger = logging.getLogger("app.catalog.crud")


class PromptCRUD:
    """CRUD operations for prompts."""

    @staticmethod
    def list_all(db: Session) -> List[Prompt]:
        """All prompts, newest first."""
        return db.query(Prompt).order_by(Prompt.created_at.desc()).all()

    @staticmethod
    def list_by_owner(db: Session, user_id: uuid.UUID) -> List[Prompt]:
        return (
            db.query(Prompt)
            .filter(Prompt.user_id == user_id)
            .order_by(Prompt.created_at.desc())
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, prompt_id: uuid.UUID) -> Optional[Prompt]:
        return db.query(Prompt).filter(Prompt.id == prompt_id).first()

    @staticmethod
    def create(db: Session, owner_id: Optional[uuid.UUID], **fields: Any) -> Prompt:
        prompt = Prompt(user_id=owner_id, likes=0, **fields)
        db.add(prompt)
        db.commit()
        db.refresh(prompt)
        return prompt

    @staticmethod
    def update(db: Session, prompt: Prompt, **updates: Any) -> Prompt:
        for key, value in updates.items():
            if hasattr(prompt, key) and value is not None:
                setattr(prompt, key, value)

        db.add(prompt)
        db.commit()
        db.refresh(prompt)
        return prompt

    @staticmethod
    def delete(db: Session, prompt: Prompt) -> None:
        db.delete(prompt)
        db.commit()

    @staticmethod
    def increment_likes(db: Session, prompt_id: uuid.UUID) -> Optional[int]:
        """Add one like in a single UPDATE statement and return the new count.

        The database evaluates ``likes + 1`` under its own row lock, so
        concurrent calls never lose an increment. Returns ``None`` when the
        prompt does not exist.
        """
        stmt = (
            update(Prompt)
            .where(Prompt.id == prompt_id)
            .values(likes=Prompt.likes + 1)
            .returning(Prompt.likes)
            .execution_options(synchronize_session=False)
        )
        likes = db.execute(stmt).scalar_one_or_none()
        db.commit()
        return likes
