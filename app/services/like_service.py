import logging
import uuid

from sqlalchemy.orm import Session

from app.catalog.crud import PromptCRUD
from app.core import messages
from app.core.database import storage_call
from app.core.errors import NotFoundError

logger = logging.getLogger("app.services.likes")


def increment_likes(db: Session, prompt_id: uuid.UUID) -> int:
    """Atomically add one like to a prompt. Open to any caller."""
    with storage_call(db, "like increment"):
        likes = PromptCRUD.increment_likes(db, prompt_id)

    if likes is None:
        raise NotFoundError(messages.PROMPT_NOT_FOUND)
    logger.debug("Prompt %s now has %s likes", prompt_id, likes, extra={"prompt_id": prompt_id})
    return likes
