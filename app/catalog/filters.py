"""Client-style filtering applied to an already retrieved prompt list.

The catalog returns every prompt; search and category selection are pure
functions over that list. This is fine for a small catalog but scans the
whole set on every request.
"""

from typing import Iterable, List, Optional, Protocol, Sequence

from app.core.errors import DomainValidationError
from app.models.prompt import PromptCategory


ALL_CATEGORIES = "All"


class Filterable(Protocol):
    title: str
    description: str
    tags: Sequence[str]
    category: str


def parse_category(value: Optional[str]) -> Optional[PromptCategory]:
    """Map a category query value to a filter. ``All`` or empty means no filter."""
    if value is None or value == "" or value == ALL_CATEGORIES:
        return None
    try:
        return PromptCategory(value)
    except ValueError:
        raise DomainValidationError(f"Unknown category: {value}")


def matches_search(prompt: Filterable, search: str) -> bool:
    needle = search.lower()
    if not needle:
        return True
    return (
        needle in prompt.title.lower()
        or needle in prompt.description.lower()
        or any(needle in tag.lower() for tag in prompt.tags or ())
    )


def filter_prompts(
    prompts: Iterable[Filterable],
    search: str = "",
    category: Optional[PromptCategory] = None,
) -> List[Filterable]:
    """Keep prompts matching ``search`` (case-insensitive) and exactly ``category``.

    Order of the input is preserved.
    """
    return [
        prompt
        for prompt in prompts
        if matches_search(prompt, search)
        and (category is None or prompt.category == category.value)
    ]
