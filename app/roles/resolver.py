"""Effective-role resolution.

An assigned role is what is stored on the profile. The effective role is what
authorization checks use: VIP and SVIP fall back to ``normal`` once their
expiration has passed, while ``normal`` and ``admin`` never expire.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from app.core.clock import as_utc
from app.models.user_profile import UserRole

if TYPE_CHECKING:
    from app.models.user_profile import UserProfile


NON_EXPIRING_ROLES = frozenset({UserRole.NORMAL, UserRole.ADMIN})
EXPIRING_ROLES = frozenset({UserRole.VIP, UserRole.SVIP})


def _is_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    if expires_at is None:
        return False
    return as_utc(expires_at) <= as_utc(now)


def effective_role(profile: Optional["UserProfile"], now: datetime) -> UserRole:
    """Return the role a permission check should use at ``now``."""
    if profile is None:
        return UserRole.NORMAL

    assigned = UserRole(profile.role)
    if assigned in NON_EXPIRING_ROLES:
        return assigned
    if _is_expired(profile.expires_at, now):
        return UserRole.NORMAL
    return assigned


def is_role_active(profile: Optional["UserProfile"], now: datetime) -> bool:
    """Whether the assigned role is currently in force.

    A missing profile has no assigned role, so it is reported as inactive.
    """
    if profile is None:
        return False

    assigned = UserRole(profile.role)
    if assigned in NON_EXPIRING_ROLES:
        return True
    return not _is_expired(profile.expires_at, now)


def is_admin(profile: Optional["UserProfile"], now: datetime) -> bool:
    return effective_role(profile, now) is UserRole.ADMIN
