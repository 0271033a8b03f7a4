"""Descriptor, preparation and note extraction from ingredient text."""

import re
from dataclasses import dataclass

# Leading words that describe an ingredient without naming it
LEADING_DESCRIPTORS = (
    "of",
    "fresh",
    "freshly",
    "dried",
    "organic",
    "free-range",
    "free range",
    "grass-fed",
    "wild",
    "raw",
    "ripe",
    "large",
    "medium",
    "small",
    "extra-large",
    "extra large",
    "extra",
    "jumbo",
    "baby",
    "mini",
    "boneless",
    "skinless",
    "good quality",
    "good-quality",
)

PREPARATIONS = (
    "chopped",
    "finely chopped",
    "coarsely chopped",
    "roughly chopped",
    "diced",
    "finely diced",
    "cubed",
    "sliced",
    "thinly sliced",
    "thickly sliced",
    "minced",
    "finely minced",
    "grated",
    "finely grated",
    "shredded",
    "julienned",
    "spiralized",
    "melted",
    "softened",
    "beaten",
    "lightly beaten",
    "whipped",
    "whisked",
    "crushed",
    "smashed",
    "mashed",
    "peeled",
    "cored",
    "seeded",
    "deseeded",
    "pitted",
    "trimmed",
    "cleaned",
    "rinsed",
    "drained",
    "rinsed and drained",
    "drained and rinsed",
    "juiced",
    "zested",
    "toasted",
    "roasted",
    "grilled",
    "cooked",
    "precooked",
    "leftover",
    "halved",
    "quartered",
    "torn",
    "sifted",
    "packed",
    "firmly packed",
    "lightly packed",
    "cut into pieces",
    "cut into cubes",
    "cut into strips",
    "cut into wedges",
)

NOTE_PHRASES = (
    "to taste",
    "or to taste",
    "or more to taste",
    "plus more to taste",
    "as needed",
    "or as needed",
    "optional",
    "if desired",
    "plus more for serving",
    "plus more for garnish",
    "plus extra for serving",
    "plus more",
    "divided",
    "separated",
    "room temperature",
    "at room temperature",
    "for serving",
    "for garnish",
    "for dusting",
    "for frying",
    "for greasing",
    "to serve",
    "to garnish",
    "see note",
    "see notes",
    "see recipe note",
)


def _phrase_patterns(phrases: tuple[str, ...]) -> tuple[tuple[str, re.Pattern[str]], ...]:
    """Compile word-bounded patterns, longest phrase first."""
    ordered = sorted(dict.fromkeys(phrases), key=len, reverse=True)
    return tuple((p, re.compile(rf"\b{re.escape(p)}\b", re.IGNORECASE)) for p in ordered)


_PREPARATION_PATTERNS = _phrase_patterns(PREPARATIONS)
_NOTE_PATTERNS = _phrase_patterns(NOTE_PHRASES)
_LEADING_DESCRIPTOR = re.compile(
    r"^(?:"
    + "|".join(re.escape(d) for d in sorted(LEADING_DESCRIPTORS, key=len, reverse=True))
    + r")(?:[\s,]+|$)",
    re.IGNORECASE,
)
_PARENTHETICAL = re.compile(r"[(\[][^()\[\]]*[)\]]")
_UNCLOSED_PARENTHETICAL = re.compile(r"[(\[][^)\]]*$")


@dataclass(frozen=True)
class ModifierSplit:
    """Ingredient text separated into display name, preparation and notes."""

    name: str
    preparation: str | None = None
    notes: str | None = None


def strip_parentheticals(text: str) -> str:
    """Remove "(15g)", "(about 2 cups)", "[brand]" asides, nested or unclosed."""
    previous = None
    while previous != text:
        previous = text
        text = _PARENTHETICAL.sub(" ", text)
    text = _UNCLOSED_PARENTHETICAL.sub(" ", text)
    return " ".join(text.split())


def strip_leading_descriptors(text: str) -> str:
    """Remove any run of leading descriptor words ("fresh", "large", "boneless", ...)."""
    text = text.strip()
    while match := _LEADING_DESCRIPTOR.match(text):
        text = text[match.end() :].strip()
    return text


def _extract_phrase(
    text: str, patterns: tuple[tuple[str, re.Pattern[str]], ...]
) -> tuple[str | None, str]:
    for phrase, pattern in patterns:
        match = pattern.search(text)
        if match:
            remaining = text[: match.start()] + " " + text[match.end() :]
            return phrase, " ".join(remaining.split())
    return None, text


def extract_preparation(text: str) -> tuple[str | None, str]:
    """Find and remove one preparation phrase ("finely chopped" before "chopped")."""
    return _extract_phrase(text, _PREPARATION_PATTERNS)


def extract_notes(text: str) -> tuple[str | None, str]:
    """Find and remove one note phrase ("to taste", "optional", "for serving", ...)."""
    return _extract_phrase(text, _NOTE_PATTERNS)


def clean_name(text: str) -> str:
    """
    Tidy what is left of an ingredient line into a display name.

    Collapses stray separators, drops a trailing comma clause
    ("chicken, cut into 1-inch pieces" -> "chicken") and dangling
    conjunctions.
    """
    text = " ".join(text.split())
    text = re.sub(r"\s+,", ",", text)
    text = re.sub(r",(?:\s*,)+", ",", text)
    text = text.strip(" ,;:-–—")

    head, _, _ = text.partition(",")
    if head.strip():
        text = head

    text = re.sub(r"(?:\s+(?:and|or))+$", "", text, flags=re.IGNORECASE)
    text = re.sub(r"^(?:(?:and|or)\s+)+", "", text, flags=re.IGNORECASE)
    return text.strip(" ,;:-–—")


def split_modifiers(text: str) -> ModifierSplit:
    """
    Separate descriptors, one preparation phrase and one note phrase from
    the text that remains after quantity and unit removal.
    """
    remaining = strip_leading_descriptors(strip_parentheticals(text))
    preparation, remaining = extract_preparation(remaining)
    notes, remaining = extract_notes(remaining)
    name = strip_leading_descriptors(clean_name(remaining))
    return ModifierSplit(name=clean_name(name), preparation=preparation, notes=notes)
