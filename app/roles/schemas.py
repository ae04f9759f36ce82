"""Pydantic schemas for user profiles and role assignments."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer

from app.models.user_profile import UserProfile, UserRole
from app.roles.resolver import effective_role, is_role_active


class ProfileSelfUpdate(BaseModel):
    """Fields a user may change on their own profile.

    Unknown keys such as ``role`` or ``expires_at`` are ignored.
    """
    display_name: Optional[str] = Field(None, max_length=100)


class RoleAssignment(BaseModel):
    """Privileged role/expiration change. Omitted fields are left unchanged."""
    role: Optional[UserRole] = None
    expires_at: Optional[datetime] = None


class ProfileResponse(BaseModel):
    id: UUID
    user_id: UUID
    role: UserRole
    effective_role: UserRole
    is_active: bool
    is_admin: bool
    expires_at: Optional[datetime]
    display_name: Optional[str]
    created_at: datetime
    updated_at: datetime

    @field_serializer("id", "user_id")
    def serialize_id(self, value: UUID) -> str:
        return str(value)

    @classmethod
    def from_profile(cls, profile: UserProfile, now: datetime) -> "ProfileResponse":
        resolved = effective_role(profile, now)
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            role=UserRole(profile.role),
            effective_role=resolved,
            is_active=is_role_active(profile, now),
            is_admin=resolved is UserRole.ADMIN,
            expires_at=profile.expires_at,
            display_name=profile.display_name,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
