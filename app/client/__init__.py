"""Client-side helpers for talking to the API."""

from .like_client import LikeClient, LikeOutcome
from .liked_store import LikedStore

__all__ = ["LikeClient", "LikeOutcome", "LikedStore"]
