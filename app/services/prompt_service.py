"""Prompt catalog operations with admin-only mutation."""

import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.orm import Session

from app.access.policy import Actor, PromptAction, authorize_prompt
from app.catalog.crud import PromptCRUD
from app.catalog.filters import filter_prompts
from app.catalog.schemas import PromptCreate, PromptUpdate
from app.core import messages
from app.core.database import storage_call
from app.core.errors import NotFoundError, StorageUnavailableError
from app.models.prompt import Prompt, PromptCategory

logger = logging.getLogger("app.services.prompt")


@dataclass
class PromptListing:
    prompts: List[Prompt] = field(default_factory=list)
    error: Optional[str] = None


def list_prompts(
    db: Session,
    search: str = "",
    category: Optional[PromptCategory] = None,
) -> PromptListing:
    """Read the whole catalog, then filter it.

    A storage failure degrades to an empty listing carrying an error message
    instead of failing the request.
    """
    try:
        with storage_call(db, "prompt listing"):
            prompts = PromptCRUD.list_all(db)
    except StorageUnavailableError:
        return PromptListing(error=messages.PROMPT_LIST_UNAVAILABLE)
    return PromptListing(prompts=filter_prompts(prompts, search, category))


def list_owned_prompts(db: Session, actor: Optional[Actor], search: str = "") -> List[Prompt]:
    """Prompts the acting admin owns, narrowed by a free-text search."""
    authorize_prompt(actor, PromptAction.UPDATE).enforce()
    with storage_call(db, "owned prompt listing"):
        prompts = PromptCRUD.list_by_owner(db, actor.user_id)
    return filter_prompts(prompts, search)


def get_prompt(db: Session, prompt_id: uuid.UUID) -> Prompt:
    with storage_call(db, "prompt lookup"):
        prompt = PromptCRUD.get_by_id(db, prompt_id)
    if prompt is None:
        raise NotFoundError(messages.PROMPT_NOT_FOUND)
    return prompt


def create_prompt(db: Session, actor: Optional[Actor], data: PromptCreate) -> Prompt:
    authorize_prompt(actor, PromptAction.CREATE).enforce()

    with storage_call(db, "prompt create"):
        prompt = PromptCRUD.create(db, owner_id=actor.user_id, **data.model_dump(mode="json"))
    logger.info(
        "Prompt %s created by %s",
        prompt.id,
        actor.user_id,
        extra={"prompt_id": prompt.id, "user_id": actor.user_id},
    )
    return prompt


def update_prompt(
    db: Session, actor: Optional[Actor], prompt_id: uuid.UUID, data: PromptUpdate
) -> Prompt:
    authorize_prompt(actor, PromptAction.UPDATE).enforce()

    prompt = get_prompt(db, prompt_id)
    with storage_call(db, "prompt update"):
        prompt = PromptCRUD.update(db, prompt, **data.model_dump(mode="json", exclude_unset=True))
    logger.info(
        "Prompt %s updated by %s",
        prompt.id,
        actor.user_id,
        extra={"prompt_id": prompt.id, "user_id": actor.user_id},
    )
    return prompt


def delete_prompt(db: Session, actor: Optional[Actor], prompt_id: uuid.UUID) -> None:
    authorize_prompt(actor, PromptAction.DELETE).enforce()

    prompt = get_prompt(db, prompt_id)
    with storage_call(db, "prompt delete"):
        PromptCRUD.delete(db, prompt)
    logger.info(
        "Prompt %s deleted by %s",
        prompt_id,
        actor.user_id,
        extra={"prompt_id": prompt_id, "user_id": actor.user_id},
    )
