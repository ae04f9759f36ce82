"""HTTP client for the like counter with optimistic display updates."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

from app.core import messages
from app.core.errors import NotFoundError, StorageUnavailableError

from .liked_store import LikedStore

logger = logging.getLogger("app.client.likes")


@dataclass(frozen=True)
class LikeOutcome:
    prompt_id: str
    likes: int
    # False when the local guard suppressed the request
    sent: bool


class LikeClient:
    """Sends likes for prompts, at most once per prompt from this client.

    ``displayed`` holds the like count the client is currently showing for
    each prompt. A like bumps it immediately; if the server call fails the
    bump is reverted and the prompt is forgotten so it can be liked again.
    """

    def __init__(
        self,
        base_url: str,
        store: LikedStore,
        api_prefix: str = "/api/v1",
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.store = store
        self.api_prefix = api_prefix.rstrip("/")
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self.displayed: Dict[str, int] = {}

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "LikeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def has_liked(self, prompt_id: str) -> bool:
        return prompt_id in self.store

    def like(self, prompt_id: str, current_likes: int) -> LikeOutcome:
        key = str(prompt_id)
        if not self.store.add(key):
            logger.debug("Prompt %s already liked from this client", key)
            return LikeOutcome(key, self.displayed.get(key, current_likes), sent=False)

        self.displayed[key] = current_likes + 1
        try:
            response = self._client.post(f"{self.api_prefix}/prompts/{key}/like")
            response.raise_for_status()
            likes = int(response.json()["likes"])
        except httpx.HTTPStatusError as exc:
            self._revert(key, current_likes)
            if exc.response.status_code == 404:
                raise NotFoundError(messages.PROMPT_NOT_FOUND) from exc
            logger.warning("Like for prompt %s failed: %s", key, exc)
            raise StorageUnavailableError() from exc
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            self._revert(key, current_likes)
            logger.warning("Like for prompt %s failed: %s", key, exc)
            raise StorageUnavailableError() from exc

        self.displayed[key] = likes
        return LikeOutcome(key, likes, sent=True)

    def _revert(self, key: str, previous_likes: int) -> None:
        self.displayed[key] = previous_likes
        self.store.discard(key)
