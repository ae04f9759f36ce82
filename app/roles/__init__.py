"""User roles: storage, expiration-aware resolution and schemas."""

from .crud import UserProfileCRUD
from .resolver import effective_role, is_admin, is_role_active

__all__ = [
    "UserProfileCRUD",
    "effective_role",
    "is_admin",
    "is_role_active",
]
