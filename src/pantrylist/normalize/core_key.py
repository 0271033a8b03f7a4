"""
Core-key extraction.

The core key is the canonical matching string used to decide whether two
differently worded ingredient lines name the same physical ingredient
("2 tbsp extra-virgin olive oil" and "olive oil" both key to "oil"). It is
used for grouping and sorting only, never for display.
"""

import re
from collections.abc import Callable

from rapidfuzz import fuzz, process

from pantrylist.config import get_settings
from pantrylist.normalize.modifiers import (
    LEADING_DESCRIPTORS,
    extract_notes,
    extract_preparation,
    strip_leading_descriptors,
    strip_parentheticals,
)
from pantrylist.normalize.quantity import lex_quantity
from pantrylist.normalize.units import extract_unit

# =============================================================================
# Synonym Table (specific form -> canonical noun)
# =============================================================================

# Canonical values are fixed points: each maps to itself.
SYNONYMS: dict[str, str] = {
    # Salt and pepper
    "kosher salt": "salt",
    "sea salt": "salt",
    "table salt": "salt",
    "fine salt": "salt",
    "flaky salt": "salt",
    "flaky sea salt": "salt",
    "coarse salt": "salt",
    "himalayan salt": "salt",
    "pink salt": "salt",
    "iodized salt": "salt",
    "black pepper": "pepper",
    "ground black pepper": "pepper",
    "cracked black pepper": "pepper",
    "white pepper": "pepper",
    "black peppercorns": "pepper",
    "peppercorns": "pepper",
    "bell peppers": "bell pepper",
    "red bell pepper": "bell pepper",
    "green bell pepper": "bell pepper",
    "yellow bell pepper": "bell pepper",
    "red pepper": "bell pepper",
    "green pepper": "bell pepper",
    "capsicum": "bell pepper",
    "red pepper flakes": "chili flakes",
    "chile flakes": "chili flakes",
    "chilli flakes": "chili flakes",
    # Sugar and flour
    "granulated sugar": "sugar",
    "white sugar": "sugar",
    "caster sugar": "sugar",
    "superfine sugar": "sugar",
    "cane sugar": "sugar",
    "light brown sugar": "brown sugar",
    "dark brown sugar": "brown sugar",
    "confectioners sugar": "powdered sugar",
    "confectioners' sugar": "powdered sugar",
    "icing sugar": "powdered sugar",
    "all-purpose flour": "flour",
    "all purpose flour": "flour",
    "plain flour": "flour",
    "ap flour": "flour",
    "white flour": "flour",
    # Oils and fats
    "extra-virgin olive oil": "oil",
    "extra virgin olive oil": "oil",
    "virgin olive oil": "oil",
    "olive oil": "oil",
    "vegetable oil": "oil",
    "canola oil": "oil",
    "neutral oil": "oil",
    "cooking oil": "oil",
    "sunflower oil": "oil",
    "evoo": "oil",
    "unsalted butter": "butter",
    "salted butter": "butter",
    "sweet butter": "butter",
    "peanut butter": "peanut butter",
    # Dairy and eggs
    "egg": "eggs",
    "whole milk": "milk",
    "skim milk": "milk",
    "low-fat milk": "milk",
    "skimmed milk": "milk",
    "coconut milk": "coconut milk",
    "almond milk": "almond milk",
    "oat milk": "oat milk",
    "heavy cream": "cream",
    "heavy whipping cream": "cream",
    "whipping cream": "cream",
    "double cream": "cream",
    "sour cream": "sour cream",
    "ice cream": "ice cream",
    "cream cheese": "cream cheese",
    # Produce
    "tomato": "tomatoes",
    "roma tomatoes": "tomatoes",
    "roma tomato": "tomatoes",
    "cherry tomatoes": "tomatoes",
    "cherry tomato": "tomatoes",
    "plum tomatoes": "tomatoes",
    "grape tomatoes": "tomatoes",
    "vine tomatoes": "tomatoes",
    "tomato paste": "tomato paste",
    "tomato sauce": "tomato sauce",
    "onions": "onion",
    "red onion": "onion",
    "yellow onion": "onion",
    "white onion": "onion",
    "sweet onion": "onion",
    "onion powder": "onion powder",
    "green onion": "scallions",
    "green onions": "scallions",
    "spring onion": "scallions",
    "spring onions": "scallions",
    "scallion": "scallions",
    "garlic clove": "garlic",
    "garlic cloves": "garlic",
    "cloves garlic": "garlic",
    "garlic powder": "garlic powder",
    "flat-leaf parsley": "parsley",
    "italian parsley": "parsley",
    "coriander leaves": "cilantro",
    "lemon juice": "lemon juice",
    "lime juice": "lime juice",
    "lemon zest": "lemon zest",
    "lime zest": "lime zest",
    # Stocks and sauces
    "chicken broth": "chicken stock",
    "chicken stock": "chicken stock",
    "beef broth": "beef stock",
    "beef stock": "beef stock",
    "vegetable broth": "vegetable stock",
    "vegetable stock": "vegetable stock",
    "soy sauce": "soy sauce",
    "fish sauce": "fish sauce",
    # Baking
    "baking powder": "baking powder",
    "baking soda": "baking soda",
    "bicarbonate of soda": "baking soda",
}

CANONICAL_KEYS = frozenset(SYNONYMS.values())

STOP_WORDS = frozenset({"of", "in", "with", "for", "to", "a", "an", "the"})

_SYNONYM_PATTERNS = tuple(
    (re.compile(rf"(?<![\w-]){re.escape(key)}(?![\w-])"), value)
    for key, value in sorted(SYNONYMS.items(), key=lambda item: len(item[0]), reverse=True)
)
_SYNONYM_KEYS = tuple(SYNONYMS)

# "of" stays inside phrases like "bicarbonate of soda"; it is only dropped when leading
_INNER_DESCRIPTORS = re.compile(
    r"(?<![\w-])(?:"
    + "|".join(re.escape(d) for d in sorted(LEADING_DESCRIPTORS, key=len, reverse=True) if d != "of")
    + r")(?![\w-])"
)
_TOKEN = re.compile(r"[\w'%&-]+")


def _normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def _strip_quantity_and_unit(text: str) -> str:
    lexed = lex_quantity(text)
    if not lexed.detected:
        return text
    remaining = lexed.remaining
    if lexed.unit is None:
        _, remaining = extract_unit(remaining)
    return remaining


def _strip_phrases(text: str, extract: Callable[[str], tuple[str | None, str]]) -> str:
    phrase, text = extract(text)
    while phrase is not None:
        phrase, text = extract(text)
    return text


def _tokenize(text: str) -> list[str]:
    tokens = (token.strip("'-") for token in _TOKEN.findall(text))
    return [token for token in tokens if token]


def _strip_modifiers(text: str) -> str:
    """Lowercased phrase with quantity, unit, notes and descriptors removed."""
    text = strip_parentheticals(text.lower())
    text = _strip_quantity_and_unit(text)
    text = strip_leading_descriptors(text)
    text = _strip_phrases(text, extract_notes)
    text = _strip_phrases(text, extract_preparation)
    text = _INNER_DESCRIPTORS.sub(" ", text)
    text = strip_leading_descriptors(_normalize_whitespace(text))
    return " ".join(_tokenize(text))


# =============================================================================
# Matchers (tried in order, first hit wins)
# =============================================================================


def _match_canonical(phrase: str) -> str | None:
    """Phrase is already a canonical key."""
    return phrase if phrase in CANONICAL_KEYS else None


def _match_synonym(phrase: str) -> str | None:
    """Synonym key contained in the phrase as whole words, longest key first."""
    for pattern, value in _SYNONYM_PATTERNS:
        if pattern.search(phrase):
            return value
    return None


def _match_fuzzy_synonym(phrase: str) -> str | None:
    """Typo-tolerant synonym lookup ("all-purpose flor"), multi-word phrases only."""
    if " " not in phrase:
        return None
    best = process.extractOne(
        phrase,
        _SYNONYM_KEYS,
        scorer=fuzz.ratio,
        score_cutoff=get_settings().fuzzy_synonym_threshold,
    )
    if best is None:
        return None
    return SYNONYMS[best[0]]


def _match_last_token(phrase: str) -> str | None:
    """Last meaningful token, skipping stop words, numbers and single letters."""
    for token in reversed(phrase.split()):
        if token in STOP_WORDS or len(token) == 1 or not token[0].isalpha():
            continue
        return token
    return None


CORE_KEY_MATCHERS: tuple[Callable[[str], str | None], ...] = (
    _match_canonical,
    _match_synonym,
    _match_fuzzy_synonym,
    _match_last_token,
)


def extract_core_key(text: str) -> str:
    """
    Derive the canonical matching key of an ingredient name or raw line.

    Args:
        text: Cleaned display name, or the untouched source line

    Returns:
        Lowercase key; the whitespace-normalized lowercase input when
        nothing meaningful survives modifier stripping

    Examples:
        "2 lb boneless skinless chicken thighs" -> "thighs"
        "1 tsp kosher salt" -> "salt"
        "Roma tomatoes, diced" -> "tomatoes"
    """
    fallback = _normalize_whitespace((text or "").lower())
    phrase = _strip_modifiers(fallback)
    if not phrase:
        return fallback

    for matcher in CORE_KEY_MATCHERS:
        key = matcher(phrase)
        if key is not None:
            return key
    return fallback
