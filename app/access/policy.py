"""Access policy for prompts and user profiles.

Every guard returns a :class:`Decision` instead of raising, so callers can
inspect a denial. ``Decision.enforce()`` converts a denial into the matching
domain error at the service boundary, before any storage call is made.
"""

import enum
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from app.core import messages
from app.core.errors import ForbiddenError, UnauthenticatedError
from app.models.user_profile import UserProfile, UserRole
from app.roles.resolver import effective_role


logger = logging.getLogger("app.access.policy")


class PromptAction(str, enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


# Only these profile fields may be changed by the profile owner
SELF_SERVICE_FIELDS = frozenset({"display_name"})


@dataclass(frozen=True)
class Actor:
    """An authenticated caller with its role resolved at request time."""

    user_id: uuid.UUID
    role: UserRole
    profile: Optional[UserProfile] = None

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


@dataclass(frozen=True)
class Decision:
    allowed: bool
    code: str = "ok"
    reason: Optional[str] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def forbid(cls, reason: str) -> "Decision":
        return cls(allowed=False, code="forbidden", reason=reason)

    @classmethod
    def unauthenticated(cls) -> "Decision":
        return cls(
            allowed=False,
            code="unauthenticated",
            reason=messages.AUTH_NOT_AUTHENTICATED,
        )

    def enforce(self) -> None:
        if self.allowed:
            return
        if self.code == "unauthenticated":
            raise UnauthenticatedError(self.reason)
        raise ForbiddenError(self.reason)


def resolve_actor(
    user_id: uuid.UUID, profile: Optional[UserProfile], now: datetime
) -> Actor:
    """Build an actor using the server clock, never a client-supplied time."""
    return Actor(user_id=user_id, role=effective_role(profile, now), profile=profile)


def authorize_prompt(actor: Optional[Actor], action: PromptAction) -> Decision:
    if action is PromptAction.READ:
        return Decision.allow()
    if actor is None:
        return Decision.unauthenticated()
    if actor.is_admin:
        return Decision.allow()
    logger.info(
        "Denied prompt %s for user %s (effective role %s)",
        action.value,
        actor.user_id,
        actor.role.value,
    )
    return Decision.forbid(messages.ACCESS_ADMIN_REQUIRED)


def authorize_profile_update(
    actor: Optional[Actor], target_user_id: uuid.UUID
) -> Decision:
    """Self-service profile edits are limited to the owner of the profile."""
    if actor is None:
        return Decision.unauthenticated()
    if actor.user_id != target_user_id:
        logger.info(
            "Denied profile update of %s by user %s", target_user_id, actor.user_id
        )
        return Decision.forbid(messages.ACCESS_PROFILE_OWNER_ONLY)
    return Decision.allow()


def authorize_role_management(actor: Optional[Actor]) -> Decision:
    """Gate for the privileged role/expiration path."""
    if actor is None:
        return Decision.unauthenticated()
    if not actor.is_admin:
        logger.warning(
            "Denied role management for user %s (effective role %s)",
            actor.user_id,
            actor.role.value,
        )
        return Decision.forbid(messages.ACCESS_ADMIN_REQUIRED)
    return Decision.allow()


def self_service_changes(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop everything a profile owner may not change, role and expiration included."""
    dropped = set(payload) - SELF_SERVICE_FIELDS
    if dropped:
        logger.info("Ignoring protected profile fields in self-service update: %s", sorted(dropped))
    return {key: value for key, value in payload.items() if key in SELF_SERVICE_FIELDS}
