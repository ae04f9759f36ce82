#!/usr/bin/env python3
"""Assign a role directly in the database.

Operator bootstrap for the first admin, when no admin exists yet to use the
API. Later role changes should go through ``PUT /api/v1/admin/profiles/{id}/role``
so they are authorized and audited.

Usage:
    python scripts/grant_role.py <user-uuid> admin
    python scripts/grant_role.py <user-uuid> vip --expires-at 2027-01-01T00:00:00+00:00
"""

import argparse
import sys
import uuid
from datetime import datetime
from pathlib import Path

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.database import SessionLocal
from app.models.user_profile import UserRole
from app.roles.crud import UserProfileCRUD
from app.roles.resolver import EXPIRING_ROLES, effective_role
from app.core.clock import utcnow


def grant_role(user_id: uuid.UUID, role: UserRole, expires_at: datetime | None, email: str | None) -> None:
    if expires_at is not None and role not in EXPIRING_ROLES:
        print("❌ --expires-at only applies to vip and svip")
        sys.exit(1)

    db = SessionLocal()
    try:
        UserProfileCRUD.ensure_user(db, user_id, email)
        profile = UserProfileCRUD.ensure_profile(db, user_id)
        UserProfileCRUD.set_role(db, profile, role, expires_at)
        db.commit()
        db.refresh(profile)

        print("✅ Role updated")
        print(f"   User: {profile.user_id}")
        print(f"   Assigned role: {profile.role}")
        print(f"   Expires at: {profile.expires_at or 'never'}")
        print(f"   Effective role now: {effective_role(profile, utcnow()).value}")
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Assign a user role")
    parser.add_argument("user_id", type=uuid.UUID, help="Identity UUID (token subject)")
    parser.add_argument("role", choices=[r.value for r in UserRole])
    parser.add_argument("--expires-at", type=datetime.fromisoformat, default=None)
    parser.add_argument("--email", default=None)
    args = parser.parse_args()

    grant_role(args.user_id, UserRole(args.role), args.expires_at, args.email)


if __name__ == "__main__":
    main()
