"""Leading quantity lexer: integers, decimals, fractions, mixed numbers and ranges."""

import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from fractions import Fraction

from pantrylist.logging_config import get_logger
from pantrylist.normalize.units import extract_unit, normalize_unit
from pantrylist.schemas import Range, Single

logger = get_logger(__name__)


UNICODE_FRACTIONS: dict[str, str] = {
    "½": "1/2",
    "¼": "1/4",
    "¾": "3/4",
    "⅓": "1/3",
    "⅔": "2/3",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

_GLYPHS = "".join(UNICODE_FRACTIONS)
_GLYPH_AFTER_DIGIT = re.compile(rf"(\d)\s*([{_GLYPHS}])")
_GLYPH = re.compile(rf"[{_GLYPHS}]")

_NUMBER = r"(?:\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?|\.\d+)"
_MIXED = re.compile(r"(\d+)\s+(\d+)/(\d+)")
_FRACTION = re.compile(r"(\d+)/(\d+)")
_DECIMAL = re.compile(r"\d+(?:\.\d+)?|\.\d+")

_UNIT_WORDS = r"[A-Za-z][A-Za-z.]*(?:\s[A-Za-z][A-Za-z.]*)?"

_RANGE_UNIT_BETWEEN = re.compile(
    rf"^(?P<low>{_NUMBER})\s*(?P<unit>{_UNIT_WORDS})\s+to\s+(?P<high>{_NUMBER})(?=\s|$)(?P<rest>.*)$",
    re.IGNORECASE,
)
_RANGE = re.compile(
    rf"^(?P<low>{_NUMBER})(?:\s*[-–—]\s*|\s+to\s+)(?P<high>{_NUMBER})(?P<rest>.*)$",
    re.IGNORECASE,
)
_SINGLE = re.compile(rf"^(?P<value>{_NUMBER})(?P<rest>.*)$")
_ARTICLE = re.compile(r"^(?:a|an)\s+(?P<rest>.+)$", re.IGNORECASE)
_SIZE = re.compile(
    rf"^(?P<size>{_NUMBER}(?:\s*-\s*(?:inches|inch|in\.?)|\s+(?:inches|inch|in\.)))(?=[\s,]|$)[\s,]*(?P<rest>.*)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class LexedQuantity:
    """Result of lexing the leading quantity of an ingredient line."""

    quantity: Single | Range
    remaining: str
    detected: bool
    unit: str | None = None  # set only when the unit sits between range bounds
    size: str | None = None  # "1-inch" in "2 1-inch pieces ginger"


def normalize_unicode_fractions(text: str) -> str:
    """
    Rewrite vulgar fraction glyphs as "n/d" text.

    A digit directly before a glyph forms a mixed number: "1½" -> "1 1/2".
    """
    if not text:
        return text
    separated = _GLYPH_AFTER_DIGIT.sub(r"\1 \2", text)
    return _GLYPH.sub(lambda m: UNICODE_FRACTIONS[m.group(0)], separated)


def parse_number(text: str) -> float | None:
    """
    Parse one numeric expression into a float.

    Handles "2", "1.5", ".5", "1/2", "1 1/2", "½" and "1½". Returns None for
    anything else, including zero denominators.
    """
    if not text:
        return None
    candidate = " ".join(normalize_unicode_fractions(text).split())

    try:
        if match := _MIXED.fullmatch(candidate):
            whole, num, den = (int(g) for g in match.groups())
            return float(whole + Fraction(num, den))
        if match := _FRACTION.fullmatch(candidate):
            return float(Fraction(int(match.group(1)), int(match.group(2))))
    except ZeroDivisionError:
        return None

    if _DECIMAL.fullmatch(candidate):
        return float(candidate)
    return None


def _build_range(low_text: str, high_text: str) -> Range | None:
    """Construct a range only when both bounds are present and ordered."""
    low = parse_number(low_text)
    high = parse_number(high_text)
    if low is None or high is None or low <= 0 or high <= 0:
        return None
    if low > high:
        logger.debug(f"Rejected descending range {low_text!r} to {high_text!r}")
        return None
    return Range(min=low, max=high)


# =============================================================================
# Matchers (tried in order, first hit wins)
# =============================================================================


def _split_size(text: str) -> tuple[str | None, str]:
    """Split a leading size descriptor ("1-inch", "2 inches") off ``text``."""
    match = _SIZE.match(text)
    if not match:
        return None, text
    return match.group("size"), match.group("rest")


def _match_size(text: str) -> LexedQuantity | None:
    """Size before the item: "1-inch piece ginger" is one piece, not 1 of anything."""
    size, rest = _split_size(text)
    if size is None:
        return None
    inner = lex_quantity(rest)
    return replace(inner, detected=True, size=size)


def _match_range_with_unit_between(text: str) -> LexedQuantity | None:
    """Range with the unit between its bounds: "1/2 teaspoon to 3/4 salt"."""
    match = _RANGE_UNIT_BETWEEN.match(text)
    if not match:
        return None
    unit = normalize_unit(match.group("unit"))
    if unit is None:
        return None
    quantity = _build_range(match.group("low"), match.group("high"))
    if quantity is None:
        return None

    rest = match.group("rest").strip()
    # "1/2 cup to 3/4 cup sugar" repeats the unit after the upper bound
    repeated, after = extract_unit(rest)
    if repeated == unit:
        rest = after
    return LexedQuantity(quantity=quantity, remaining=rest, detected=True, unit=unit)


def _match_range(text: str) -> LexedQuantity | None:
    """Range with any unit after both bounds: "1 to 2 teaspoons", "1-2 cups", "10-15"."""
    match = _RANGE.match(text)
    if not match:
        return None
    quantity = _build_range(match.group("low"), match.group("high"))
    if quantity is None:
        return None
    return LexedQuantity(quantity=quantity, remaining=match.group("rest").strip(), detected=True)


def _match_single(text: str) -> LexedQuantity | None:
    """Single number, including one glued to its unit ("500g")."""
    match = _SINGLE.match(text)
    if not match:
        return None
    value = parse_number(match.group("value"))
    if value is None or value <= 0:
        return None
    return LexedQuantity(
        quantity=Single(value=value), remaining=match.group("rest").strip(), detected=True
    )


def _match_article(text: str) -> LexedQuantity | None:
    """Leading article counts as one: "a pinch of salt", "an onion"."""
    match = _ARTICLE.match(text)
    if not match:
        return None
    return LexedQuantity(quantity=Single(value=1.0), remaining=match.group("rest"), detected=True)


QUANTITY_MATCHERS: tuple[Callable[[str], LexedQuantity | None], ...] = (
    _match_size,
    _match_range_with_unit_between,
    _match_range,
    _match_single,
    _match_article,
)


def lex_quantity(text: str) -> LexedQuantity:
    """
    Split the leading quantity off an ingredient line.

    Absence of a recognizable quantity yields ``Single(1)`` with
    ``detected=False`` and the text unchanged (apart from fraction glyphs).
    A size descriptor after the quantity ("2 1-inch pieces") is split off
    into ``size``.
    """
    normalized = " ".join(normalize_unicode_fractions(text or "").split())
    for matcher in QUANTITY_MATCHERS:
        result = matcher(normalized)
        if result is None:
            continue
        if result.size is None:
            size, rest = _split_size(result.remaining)
            if size is not None:
                result = replace(result, remaining=rest, size=size)
        return result
    return LexedQuantity(quantity=Single(value=1.0), remaining=normalized, detected=False)


def parse_quantity(text: str) -> Single | Range:
    """Parse the leading quantity of ``text``, defaulting to 1."""
    return lex_quantity(text).quantity
