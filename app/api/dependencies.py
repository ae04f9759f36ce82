from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.access.policy import Actor, resolve_actor
from app.core.clock import utcnow
from app.core.database import get_db
from app.core.errors import UnauthenticatedError
from app.core.security import decode_access_token
from app.services.identity_service import observe_identity


bearer_scheme = HTTPBearer(auto_error=False)


def get_now() -> datetime:
    """Server clock for authorization decisions. Overridden in tests."""
    return utcnow()


def get_optional_actor(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
) -> Optional[Actor]:
    """Resolve the caller, or ``None`` for anonymous requests.

    A token that is present but invalid is rejected rather than treated as
    anonymous.
    """
    if credentials is None:
        return None

    claims = decode_access_token(credentials.credentials)
    profile = observe_identity(db, claims.user_id, claims.email)
    return resolve_actor(claims.user_id, profile, now)


def get_current_actor(
    actor: Annotated[Optional[Actor], Depends(get_optional_actor)],
) -> Actor:
    if actor is None:
        raise UnauthenticatedError()
    return actor
