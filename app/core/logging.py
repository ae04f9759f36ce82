import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .config import settings

# Fields passed through ``extra=`` that are copied into the JSON line.
CONTEXT_FIELDS = ("method", "path", "status_code", "duration_ms", "user_id", "prompt_id")

NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        log: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log[field] = value if isinstance(value, (int, float)) else str(value)
        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def configure_logging() -> None:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())
    root.handlers = [handler]

    # Request lines come from LoggingMiddleware. Library chatter only at DEBUG.
    if root.level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
