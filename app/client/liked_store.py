"""Persistent set of prompt ids the local client has already liked."""

import json
import logging
import threading
from pathlib import Path
from typing import Set, Union

logger = logging.getLogger("app.client.liked_store")


class LikedStore:
    """JSON-file backed set, the local equivalent of browser storage.

    Only a convenience guard against double-clicking: clearing the file
    allows liking again, and the server does not track who liked what.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._ids: Set[str] = self._load()

    def _load(self) -> Set[str]:
        if not self.path.exists():
            return set()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable liked-prompts file %s: %s", self.path, exc)
            return set()
        if not isinstance(data, list):
            logger.warning(
                "Ignoring unreadable liked-prompts file %s: expected a list, got %s",
                self.path,
                type(data).__name__,
            )
            return set()
        return {item for item in data if isinstance(item, str) and item}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(sorted(self._ids)), encoding="utf-8")

    def __contains__(self, prompt_id: object) -> bool:
        return str(prompt_id) in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def add(self, prompt_id: str) -> bool:
        """Record ``prompt_id``. Returns False if it was already present."""
        with self._lock:
            key = str(prompt_id)
            if key in self._ids:
                return False
            self._ids.add(key)
            self._save()
            return True

    def discard(self, prompt_id: str) -> None:
        with self._lock:
            key = str(prompt_id)
            if key in self._ids:
                self._ids.remove(key)
                self._save()
