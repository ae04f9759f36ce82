"""Self-service profile updates and the privileged role assignment path."""

import logging
import uuid
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from app.access.policy import (
    Actor,
    authorize_profile_update,
    authorize_role_management,
    self_service_changes,
)
from app.core import messages
from app.core.database import storage_call
from app.core.errors import DomainValidationError, NotFoundError
from app.models.user_profile import UserProfile, UserRole
from app.roles.crud import UserProfileCRUD
from app.roles.resolver import EXPIRING_ROLES
from app.services.audit_service import log_role_change

logger = logging.getLogger("app.services.profile")


def get_profile(db: Session, user_id: uuid.UUID) -> UserProfile:
    with storage_call(db, "profile lookup"):
        profile = UserProfileCRUD.get_by_user_id(db, user_id)
    if profile is None:
        raise NotFoundError(messages.PROFILE_NOT_FOUND)
    return profile


def update_own_profile(
    db: Session,
    actor: Optional[Actor],
    target_user_id: uuid.UUID,
    payload: dict[str, Any],
) -> UserProfile:
    """Apply owner edits. Role and expiration are never taken from ``payload``."""
    authorize_profile_update(actor, target_user_id).enforce()

    changes = self_service_changes(payload)
    profile = get_profile(db, target_user_id)
    if not changes:
        return profile

    with storage_call(db, "profile update"):
        UserProfileCRUD.apply_changes(db, profile, changes)
        db.commit()
        db.refresh(profile)
    return profile


def list_profiles(db: Session, actor: Optional[Actor]) -> List[UserProfile]:
    authorize_role_management(actor).enforce()
    with storage_call(db, "profile listing"):
        return UserProfileCRUD.list_all(db)


def _check_expiration(role: UserRole, expires_at: Optional[datetime]) -> None:
    if expires_at is not None and role not in EXPIRING_ROLES:
        raise DomainValidationError(messages.PROFILE_EXPIRATION_REQUIRES_TIERED_ROLE)


def assign_role(
    db: Session,
    actor: Optional[Actor],
    target_user_id: uuid.UUID,
    changes: dict[str, Any],
) -> UserProfile:
    """Privileged path for role and expiration changes.

    Runs with elevated trust: the owner-only restriction on profiles does not
    apply, but the acting user must currently resolve to ``admin``. Keys
    missing from ``changes`` keep their stored value; an explicit
    ``expires_at: None`` clears the expiration.
    """
    authorize_role_management(actor).enforce()

    if "role" not in changes and "expires_at" not in changes:
        raise DomainValidationError(messages.PROFILE_ASSIGNMENT_EMPTY)
    requested_role = UserRole(changes["role"]) if changes.get("role") else None
    requested_expiry = changes.get("expires_at")
    if requested_role is not None:
        _check_expiration(requested_role, requested_expiry)
        if target_user_id == actor.user_id and requested_role is not UserRole.ADMIN:
            raise DomainValidationError(messages.PROFILE_CANNOT_DEMOTE_SELF)

    with storage_call(db, "role assignment lookup"):
        if UserProfileCRUD.get_user(db, target_user_id) is None:
            raise NotFoundError(messages.PROFILE_NOT_FOUND)
        profile = UserProfileCRUD.ensure_profile(db, target_user_id)

    previous_role = profile.role
    previous_expires_at = profile.expires_at

    role = requested_role or UserRole(previous_role)
    if "expires_at" in changes:
        expires_at = requested_expiry
    elif role in EXPIRING_ROLES:
        expires_at = previous_expires_at
    else:
        expires_at = None

    try:
        _check_expiration(role, expires_at)
    except DomainValidationError:
        db.rollback()
        raise

    with storage_call(db, "role assignment"):
        UserProfileCRUD.set_role(db, profile, role, expires_at)
        log_role_change(
            db,
            actor_id=actor.user_id,
            target_user_id=target_user_id,
            profile_id=profile.id,
            previous_role=previous_role,
            previous_expires_at=previous_expires_at,
            new_role=role.value,
            new_expires_at=expires_at,
        )
        db.commit()
        db.refresh(profile)
    return profile
