"""Authorization guards evaluated before any storage mutation."""

from .policy import (
    Actor,
    Decision,
    PromptAction,
    authorize_profile_update,
    authorize_prompt,
    authorize_role_management,
    resolve_actor,
    self_service_changes,
)

__all__ = [
    "Actor",
    "Decision",
    "PromptAction",
    "authorize_profile_update",
    "authorize_prompt",
    "authorize_role_management",
    "resolve_actor",
    "self_service_changes",
]
