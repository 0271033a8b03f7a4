"""
Two-list ingredient consolidation.

Combines the ingredient lines of two collections (typically two recipes
going onto one shopping list) so that same-named ingredients are summed,
units are reconciled within a family, and range quantities keep their
bounds.
"""

from collections.abc import Iterable, Sequence
from functools import reduce

from pantrylist.config import get_settings
from pantrylist.logging_config import get_logger
from pantrylist.normalize.conversion import IncompatibleUnitsError, convert_unit
from pantrylist.schemas import GroceryLine, Range, Single

logger = get_logger(__name__)


def _name_key(name: str) -> str:
    return " ".join(name.split()).casefold()


def _round(value: float) -> float:
    """Round away float noise (1 cup + 8 tbsp is 1.5 cup, not 1.4999999)."""
    rounded = round(value, get_settings().quantity_precision)
    return rounded if rounded > 0 else value


def _merge_recipe_ids(a: tuple[str, ...], b: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(a + b))


def combine_lines(a: GroceryLine, b: GroceryLine) -> GroceryLine | None:
    """
    Combine two same-named lines, or return None when their units cannot be
    reconciled.

    Rules, in order:
        - units must share a family; otherwise the lines stay separate
        - range + range sums bounds componentwise (10-15 + 10-15 = 20-30)
        - range + single treats the single as [n, n] (10-15 + 5 = 15-20)
        - single + single sums, with b converted into a's unit first
          (1 cup + 8 tablespoon = 1.5 cup)

    The result keeps a's name and unit.
    """
    try:
        b_low, b_high = (convert_unit(bound, b.unit, a.unit) for bound in b.quantity.bounds)
    except IncompatibleUnitsError as e:
        logger.warning(f"Keeping {a.name!r} entries separate: {e}")
        return None

    quantity: Single | Range
    if isinstance(a.quantity, Range) or isinstance(b.quantity, Range):
        a_low, a_high = a.quantity.bounds
        quantity = Range(min=_round(a_low + b_low), max=_round(a_high + b_high))
    else:
        quantity = Single(value=_round(a.quantity.value + b_low))

    return GroceryLine(
        name=a.name,
        quantity=quantity,
        unit=a.unit,
        recipe_ids=_merge_recipe_ids(a.recipe_ids, b.recipe_ids),
    )


def merge_lists(a: Sequence[GroceryLine], b: Sequence[GroceryLine]) -> list[GroceryLine]:
    """
    Merge two ingredient lists into one, A's entries first.

    Each B entry is combined with the first same-named (case-insensitive)
    target whose unit it can be converted into. Targets are every A entry
    plus every B entry appended so far, so same-named B entries combine
    with each other even when A lacks the name. Entries whose units cannot
    be reconciled stay separate under the same name.

    Args:
        a: Lines already on the list
        b: Lines being added

    Returns:
        New list; neither input is modified
    """
    merged: list[GroceryLine] = list(a)
    targets: dict[str, list[int]] = {}
    for index, line in enumerate(merged):
        targets.setdefault(_name_key(line.name), []).append(index)

    for line in b:
        key = _name_key(line.name)
        for index in targets.get(key, []):
            combined = combine_lines(merged[index], line)
            if combined is not None:
                merged[index] = combined
                break
        else:
            merged.append(line)
            targets.setdefault(key, []).append(len(merged) - 1)

    logger.debug(f"Merged {len(a)} + {len(b)} lines into {len(merged)}")
    return merged


def merge_many(lists: Iterable[Sequence[GroceryLine]]) -> list[GroceryLine]:
    """Fold several ingredient lists together left to right."""
    return reduce(merge_lists, lists, [])
