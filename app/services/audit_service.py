from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def log_role_change(
    db: Session,
    *,
    actor_id: uuid.UUID,
    target_user_id: uuid.UUID,
    profile_id: uuid.UUID,
    previous_role: str,
    previous_expires_at: Optional[datetime],
    new_role: str,
    new_expires_at: Optional[datetime],
) -> None:
    """Record a privileged role change. Committed with the change itself."""
    log = AuditLog(
        user_id=actor_id,
        action_type="ROLE_CHANGE",
        resource_type="user_profile",
        resource_id=profile_id,
        details={
            "target_user_id": str(target_user_id),
            "previous_role": previous_role,
            "previous_expires_at": _iso(previous_expires_at),
            "new_role": new_role,
            "new_expires_at": _iso(new_expires_at),
        },
    )
    db.add(log)
