from datetime import datetime, timezone


def utcnow() -> datetime:
    """Server-side current time used for every expiration check."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps (as returned by some drivers) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
