"""
Near-duplicate collapse within a single ingredient list.

An extraction pass sometimes emits the same ingredient twice at different
levels of detail ("chicken thighs" and "2 lb boneless skinless chicken
thighs"). Entries sharing a core key are collapsed to the one with the
longest raw text. Quantities are never summed here; summing belongs to
the merge engine, which combines lines from different recipes.
"""

from collections.abc import Callable, Sequence
from typing import TypeVar

from pantrylist.logging_config import get_logger
from pantrylist.normalize.core_key import extract_core_key
from pantrylist.schemas import IngredientRecord

logger = get_logger(__name__)

T = TypeVar("T")


def deduplicate(
    items: Sequence[T],
    key: Callable[[T], str] | None = None,
    raw: Callable[[T], str] | None = None,
) -> list[T]:
    """
    Keep one entry per core key: the one with the longest raw string.

    Args:
        items: Entries of one list, in input order
        key: Grouping key; defaults to the core key of the raw string
        raw: Raw text of an entry; defaults to ``str``

    Returns:
        One representative per group, ordered by each group's first
        appearance. Ties keep the earlier entry.
    """
    raw = raw or str
    key = key or (lambda item: extract_core_key(raw(item)))

    best: dict[str, T] = {}
    for item in items:
        group = key(item)
        current = best.get(group)
        if current is None:
            best[group] = item
        elif len(raw(item)) > len(raw(current)):
            logger.debug(f"Dropping {raw(current)!r} in favour of {raw(item)!r} ({group!r})")
            best[group] = item
        else:
            logger.debug(f"Dropping {raw(item)!r} in favour of {raw(current)!r} ({group!r})")

    return list(best.values())


def deduplicate_lines(lines: Sequence[str]) -> list[str]:
    """Collapse near-duplicate raw ingredient lines."""
    return deduplicate(lines)


def deduplicate_records(records: Sequence[IngredientRecord]) -> list[IngredientRecord]:
    """Collapse parsed records sharing a ``sort_key``, keeping the longest ``original``."""
    return deduplicate(records, key=lambda r: r.sort_key, raw=lambda r: r.original)
