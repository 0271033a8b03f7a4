"""
Ingredient line parser.

Runs one free-text ingredient line through the quantity lexer, unit
normalizer, modifier extractor, core-key extractor and category classifier
to produce an immutable IngredientRecord. Parsing never raises: unreadable
input degrades to defaults and a low confidence score.
"""

from collections.abc import Iterable

from pantrylist.config import get_settings
from pantrylist.logging_config import get_logger
from pantrylist.normalize.categories import classify
from pantrylist.normalize.core_key import extract_core_key
from pantrylist.normalize.modifiers import clean_name, split_modifiers, strip_parentheticals
from pantrylist.normalize.quantity import UNICODE_FRACTIONS, lex_quantity
from pantrylist.normalize.units import extract_unit
from pantrylist.schemas import IngredientRecord, display_quantity

logger = get_logger(__name__)


def _looks_numeric(text: str) -> bool:
    """True when the line opens with something meant to be a quantity."""
    return bool(text) and (text[0].isdigit() or text[0] in UNICODE_FRACTIONS or text[0] == ".")


def _confidence(line: str, detected: bool, name_fell_back: bool) -> float:
    """
    Score how much of the line was understood.

    A missing quantity on a plain name ("salt to taste") costs little; a
    line that starts with a number we could not read, or one that leaves no
    clean name behind, is flagged for review.
    """
    if not line.strip():
        return 0.0

    score = 1.0
    if not detected:
        score -= 0.5 if _looks_numeric(line.strip()) else 0.1
    if name_fell_back:
        score = min(score, 0.5)
    return round(score, 2)


def parse_ingredient(line: str, recipe_id: str = "") -> IngredientRecord:
    """
    Parse one raw ingredient line into a structured record.

    Args:
        line: Raw ingredient text as emitted by the extraction step
        recipe_id: Identifier of the recipe the line belongs to

    Returns:
        IngredientRecord with quantity defaulting to 1, unit None when
        unrecognized, and the untouched line kept in ``original``

    Example:
        >>> record = parse_ingredient("⅛ teaspoon turmeric")
        >>> record.quantity.value, record.unit, record.name
        (0.125, 'teaspoon', 'turmeric')
    """
    line = line or ""
    text = strip_parentheticals(line)

    lexed = lex_quantity(text)
    unit = lexed.unit
    remaining = lexed.remaining
    if unit is None:
        unit, remaining = extract_unit(remaining)

    modifiers = split_modifiers(remaining)
    name = modifiers.name
    name_fell_back = not name
    if name_fell_back:
        name = clean_name(remaining)

    notes = modifiers.notes
    if lexed.size:
        notes = f"{lexed.size}, {notes}" if notes else lexed.size

    record = IngredientRecord(
        name=name,
        sort_key=extract_core_key(name),
        quantity=lexed.quantity,
        unit=unit,
        preparation=modifiers.preparation,
        notes=notes,
        category=classify(name),
        original=line,
        recipe_id=recipe_id,
        confidence=_confidence(line, lexed.detected, name_fell_back),
    )

    if record.confidence < get_settings().low_confidence_threshold:
        logger.warning(
            f"Low-confidence parse ({record.confidence:.2f}) of {line!r} -> "
            f"{record.display_quantity} {unit or ''} {name!r}"
        )
    else:
        logger.debug(f"Parsed {line!r} -> {record.display_quantity} {unit or ''} {name!r}")

    return record


def parse_ingredients(lines: Iterable[str], recipe_id: str = "") -> list[IngredientRecord]:
    """Parse every line of one recipe, keeping input order."""
    return [parse_ingredient(line, recipe_id=recipe_id) for line in lines]


def format_ingredient(record: IngredientRecord) -> str:
    """
    Render a record back to a single readable line.

    Example:
        "2 cup flour, sifted (divided)"
    """
    parts = [display_quantity(record.quantity)]
    if record.unit:
        parts.append(record.unit)
    parts.append(record.name)

    text = " ".join(part for part in parts if part)
    if record.preparation:
        text = f"{text}, {record.preparation}"
    if record.notes:
        text = f"{text} ({record.notes})"
    return text
