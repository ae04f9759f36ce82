"""Per-user role assignments with optional expiration."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import TimestampedUUIDModel


class UserRole(str, enum.Enum):
    """Assigned roles. VIP and SVIP may carry an expiration."""
    NORMAL = "normal"
    VIP = "vip"
    SVIP = "svip"
    ADMIN = "admin"


ROLE_VALUES = tuple(role.value for role in UserRole)


class UserProfile(TimestampedUUIDModel):
    __tablename__ = "user_profiles"
    __table_args__ = (
        CheckConstraint(
            "role IN ('normal', 'vip', 'svip', 'admin')", name="ck_user_profiles_role"
        ),
        Index("user_profiles_role_idx", "role"),
        Index("user_profiles_expires_at_idx", "expires_at"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.NORMAL.value
    )
    # NULL means no expiration. Ignored for normal/admin.
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
