"""Role store: persistence for users and their role assignments."""

import logging
import uuid
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.clock import as_utc
from app.models.user import User
from app.models.user_profile import UserProfile, UserRole


logger = logging.getLogger("app.roles.crud")


def _insert_if_absent(db: Session, model, values: dict[str, Any], conflict_column: str) -> None:
    """INSERT ... ON CONFLICT DO NOTHING for the dialects that support it."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        try:
            with db.begin_nested():
                db.add(model(**values))
        except IntegrityError:
            logger.debug("%s row already present", model.__tablename__)
        return

    stmt = insert(model).values(**values).on_conflict_do_nothing(
        index_elements=[conflict_column]
    )
    db.execute(stmt)


class UserProfileCRUD:
    """CRUD operations for user profiles."""

    @staticmethod
    def get_by_user_id(db: Session, user_id: uuid.UUID) -> Optional[UserProfile]:
        return (
            db.query(UserProfile)
            .filter(UserProfile.user_id == user_id)
            .first()
        )

    @staticmethod
    def get_user(db: Session, user_id: uuid.UUID) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def list_all(db: Session) -> List[UserProfile]:
        return db.query(UserProfile).order_by(UserProfile.created_at.desc()).all()

    @staticmethod
    def ensure_user(db: Session, user_id: uuid.UUID, email: Optional[str] = None) -> None:
        _insert_if_absent(db, User, {"id": user_id, "email": email}, "id")

    @staticmethod
    def ensure_profile(db: Session, user_id: uuid.UUID) -> UserProfile:
        """Create the default profile for ``user_id`` unless one already exists.

        Safe to call concurrently: a racing insert is absorbed by the unique
        constraint on ``user_id``. Does not commit.
        """
        _insert_if_absent(
            db,
            UserProfile,
            {"id": uuid.uuid4(), "user_id": user_id, "role": UserRole.NORMAL.value},
            "user_id",
        )
        db.flush()
        profile = UserProfileCRUD.get_by_user_id(db, user_id)
        assert profile is not None
        return profile

    @staticmethod
    def apply_changes(db: Session, profile: UserProfile, changes: dict[str, Any]) -> UserProfile:
        for key, value in changes.items():
            setattr(profile, key, value)
        db.add(profile)
        db.flush()
        return profile

    @staticmethod
    def set_role(
        db: Session,
        profile: UserProfile,
        role: UserRole,
        expires_at: Optional[datetime],
    ) -> UserProfile:
        profile.role = role.value
        profile.expires_at = as_utc(expires_at) if expires_at else None
        db.add(profile)
        db.flush()
        logger.info(
            "Role for user %s set to %s (expires_at=%s)",
            profile.user_id,
            role.value,
            expires_at.isoformat() if expires_at else None,
        )
        return profile
