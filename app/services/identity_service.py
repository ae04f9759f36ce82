"""Provisioning for identities observed on incoming requests."""

import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from app.core.database import storage_call
from app.models.user_profile import UserProfile
from app.roles.crud import UserProfileCRUD

logger = logging.getLogger("app.services.identity")


def observe_identity(
    db: Session, user_id: uuid.UUID, email: Optional[str] = None
) -> UserProfile:
    """Return the caller's profile, creating identity and profile rows on first sight.

    Idempotent: repeated or concurrent calls for the same identity end with
    exactly one profile.
    """
    with storage_call(db, "profile lookup"):
        profile = UserProfileCRUD.get_by_user_id(db, user_id)
        if profile is not None:
            return profile

        UserProfileCRUD.ensure_user(db, user_id, email)
        profile = UserProfileCRUD.ensure_profile(db, user_id)
        db.commit()

    logger.info("Provisioned profile for user %s", user_id)
    return profile
