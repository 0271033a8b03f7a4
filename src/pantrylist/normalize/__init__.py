"""Parse raw ingredient lines into canonical structured records."""

from pantrylist.normalize.categories import category_aisle, classify
from pantrylist.normalize.conversion import (
    IncompatibleUnitsError,
    UnitSystem,
    can_convert,
    convert_measurement,
    convert_unit,
    preferred_measurement,
)
from pantrylist.normalize.core_key import extract_core_key
from pantrylist.normalize.modifiers import ModifierSplit, split_modifiers
from pantrylist.normalize.parser import format_ingredient, parse_ingredient, parse_ingredients
from pantrylist.normalize.quantity import LexedQuantity, lex_quantity, parse_number, parse_quantity
from pantrylist.normalize.units import UnitFamily, extract_unit, normalize_unit, unit_family

__all__ = [
    "IncompatibleUnitsError",
    "LexedQuantity",
    "ModifierSplit",
    "UnitFamily",
    "UnitSystem",
    "can_convert",
    "category_aisle",
    "classify",
    "convert_measurement",
    "convert_unit",
    "extract_core_key",
    "extract_unit",
    "format_ingredient",
    "lex_quantity",
    "normalize_unit",
    "parse_ingredient",
    "parse_ingredients",
    "parse_number",
    "parse_quantity",
    "preferred_measurement",
    "split_modifiers",
    "unit_family",
]
