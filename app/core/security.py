"""Bearer token handling.

Tokens are issued by the identity provider; this service only verifies them
and reads the subject. ``create_access_token`` exists for local tooling and
tests that need a token signed with the shared key.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import uuid

from jose import JWTError, jwt

from . import messages
from .config import settings
from .errors import UnauthenticatedError

ACCESS_TOKEN_TYPE = "access"


@dataclass(frozen=True)
class TokenClaims:
    user_id: uuid.UUID
    email: Optional[str] = None


def create_access_token(
    subject: uuid.UUID | str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload: dict[str, Any] = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
        "type": ACCESS_TOKEN_TYPE,
        "jti": uuid.uuid4().hex,
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenClaims:
    """Verify ``token`` and return its claims, or raise ``UnauthenticatedError``."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError:
        raise UnauthenticatedError(messages.AUTH_TOKEN_INVALID)

    # Tokens without a type claim are accepted; other types are not.
    if payload.get("type", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise UnauthenticatedError(messages.AUTH_TOKEN_INVALID)

    subject = payload.get("sub")
    if subject is None:
        raise UnauthenticatedError(messages.AUTH_TOKEN_PAYLOAD_INVALID)

    try:
        user_id = uuid.UUID(str(subject))
    except ValueError:
        raise UnauthenticatedError(messages.AUTH_USER_ID_INVALID)

    return TokenClaims(user_id=user_id, email=payload.get("email"))
