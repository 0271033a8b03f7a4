"""Unit lexicon: spellings and abbreviations mapped to canonical unit names."""

import re
from enum import Enum


class UnitFamily(str, Enum):
    """Disjoint unit families; conversion never crosses a family."""

    VOLUME = "volume"
    WEIGHT = "weight"
    COUNT = "count"


# =============================================================================
# Canonical Units
# =============================================================================

VOLUME_UNITS = (
    "teaspoon",
    "tablespoon",
    "fluid ounce",
    "cup",
    "pint",
    "quart",
    "gallon",
    "milliliter",
    "liter",
)

WEIGHT_UNITS = (
    "milligram",
    "gram",
    "kilogram",
    "ounce",
    "pound",
)

COUNT_UNITS = (
    "piece",
    "slice",
    "clove",
    "head",
    "bunch",
    "sprig",
    "stalk",
    "stick",
    "can",
    "jar",
    "package",
    "bottle",
    "box",
    "bag",
    "pinch",
    "dash",
    "handful",
    "drop",
)

UNIT_FAMILIES: dict[str, UnitFamily] = {
    **{unit: UnitFamily.VOLUME for unit in VOLUME_UNITS},
    **{unit: UnitFamily.WEIGHT for unit in WEIGHT_UNITS},
    **{unit: UnitFamily.COUNT for unit in COUNT_UNITS},
}

# =============================================================================
# Aliases (lowercase spelling -> canonical)
# =============================================================================

UNIT_ALIASES: dict[str, str] = {
    # Volume
    "teaspoons": "teaspoon",
    "tsp": "teaspoon",
    "tsps": "teaspoon",
    "tablespoons": "tablespoon",
    "tbsp": "tablespoon",
    "tbsps": "tablespoon",
    "tbs": "tablespoon",
    "tbl": "tablespoon",
    "fluid ounces": "fluid ounce",
    "fl oz": "fluid ounce",
    "fl. oz": "fluid ounce",
    "fl.oz": "fluid ounce",
    "cups": "cup",
    "c": "cup",
    "pints": "pint",
    "pt": "pint",
    "quarts": "quart",
    "qt": "quart",
    "gallons": "gallon",
    "gal": "gallon",
    "milliliters": "milliliter",
    "millilitre": "milliliter",
    "millilitres": "milliliter",
    "ml": "milliliter",
    "liters": "liter",
    "litre": "liter",
    "litres": "liter",
    "l": "liter",
    # Weight
    "milligrams": "milligram",
    "mg": "milligram",
    "grams": "gram",
    "gramme": "gram",
    "grammes": "gram",
    "g": "gram",
    "kilograms": "kilogram",
    "kilo": "kilogram",
    "kilos": "kilogram",
    "kg": "kilogram",
    "ounces": "ounce",
    "oz": "ounce",
    "pounds": "pound",
    "lb": "pound",
    "lbs": "pound",
    # Count and containers
    "pieces": "piece",
    "pc": "piece",
    "pcs": "piece",
    "slices": "slice",
    "cloves": "clove",
    "heads": "head",
    "bunches": "bunch",
    "sprigs": "sprig",
    "stalks": "stalk",
    "sticks": "stick",
    "cans": "can",
    "tin": "can",
    "tins": "can",
    "jars": "jar",
    "packages": "package",
    "pkg": "package",
    "pkgs": "package",
    "packet": "package",
    "packets": "package",
    "pack": "package",
    "packs": "package",
    "bottles": "bottle",
    "boxes": "box",
    "bags": "bag",
    "pinches": "pinch",
    "dashes": "dash",
    "handfuls": "handful",
    "drops": "drop",
}

# Spellings whose meaning depends on case ("1 T sugar" vs "1 t salt")
CASE_SENSITIVE_ALIASES: dict[str, str] = {
    "T": "tablespoon",
    "Tbsp": "tablespoon",
    "t": "teaspoon",
}

_TOKEN_PUNCTUATION = re.compile(r"[.,;:]+$")


def normalize_unit(text: str | None) -> str | None:
    """
    Map a unit spelling to its canonical name.

    Returns None for empty input and for spellings outside the lexicon.
    """
    if not text:
        return None

    stripped = _TOKEN_PUNCTUATION.sub("", text.strip())
    if stripped in CASE_SENSITIVE_ALIASES:
        return CASE_SENSITIVE_ALIASES[stripped]

    lowered = " ".join(stripped.lower().split())
    if lowered in UNIT_FAMILIES:
        return lowered
    return UNIT_ALIASES.get(lowered)


def unit_family(unit: str | None) -> UnitFamily | None:
    """Family of a unit (any spelling), or None for no/unknown unit."""
    canonical = normalize_unit(unit)
    if canonical is None:
        return None
    return UNIT_FAMILIES[canonical]


def extract_unit(text: str) -> tuple[str | None, str]:
    """
    Recognize a unit among the first two tokens of ``text``.

    Two-token spellings ("fluid ounce", "fl oz") are tried before single
    tokens. No match leaves the text untouched.

    Examples:
        "cups flour" -> ("cup", "flour")
        "fl oz milk" -> ("fluid ounce", "milk")
        "large eggs" -> (None, "large eggs")
    """
    words = text.split()
    for size in (2, 1):
        if len(words) < size:
            continue
        unit = normalize_unit(" ".join(words[:size]))
        if unit is not None:
            return unit, " ".join(words[size:])
    return None, text.strip()
