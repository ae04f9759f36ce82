"""Prompt catalog: storage, filtering and schemas."""

from .crud import PromptCRUD
from .filters import filter_prompts, parse_category

__all__ = ["PromptCRUD", "filter_prompts", "parse_category"]
