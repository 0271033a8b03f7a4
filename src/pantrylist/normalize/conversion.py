"""Unit conversion within a family and metric/imperial display equivalents."""

from enum import Enum

from pantrylist.normalize.units import UnitFamily, normalize_unit, unit_family
from pantrylist.schemas import ConvertedMeasurement, GroceryItem, Range, Single

# =============================================================================
# Conversion Tables
# =============================================================================

CUP_ML = 236.588
OUNCE_G = 28.349523125

# Volume conversions (base unit: milliliter)
TO_MILLILITERS: dict[str, float] = {
    "teaspoon": CUP_ML / 48,
    "tablespoon": CUP_ML / 16,
    "fluid ounce": CUP_ML / 8,
    "cup": CUP_ML,
    "pint": CUP_ML * 2,
    "quart": CUP_ML * 4,
    "gallon": CUP_ML * 16,
    "milliliter": 1.0,
    "liter": 1000.0,
}

# Weight conversions (base unit: gram)
TO_GRAMS: dict[str, float] = {
    "milligram": 0.001,
    "gram": 1.0,
    "kilogram": 1000.0,
    "ounce": OUNCE_G,
    "pound": OUNCE_G * 16,
}

_BASE_FACTORS: dict[UnitFamily, dict[str, float]] = {
    UnitFamily.VOLUME: TO_MILLILITERS,
    UnitFamily.WEIGHT: TO_GRAMS,
}


class IncompatibleUnitsError(ValueError):
    """Raised when a quantity cannot be expressed in the requested unit."""

    def __init__(self, from_unit: str | None, to_unit: str | None):
        super().__init__(f"Cannot convert {from_unit or 'no unit'} to {to_unit or 'no unit'}")
        self.from_unit = from_unit
        self.to_unit = to_unit


class UnitSystem(str, Enum):
    """Measurement system a user prefers to read quantities in."""

    ORIGINAL = "original"
    METRIC = "metric"
    IMPERIAL = "imperial"


def _same_unit(unit1: str | None, unit2: str | None) -> bool:
    """Compare units by canonical name, falling back to raw spelling."""
    canonical1, canonical2 = normalize_unit(unit1), normalize_unit(unit2)
    if canonical1 is not None or canonical2 is not None:
        return canonical1 == canonical2
    return (unit1 or "").strip().lower() == (unit2 or "").strip().lower()


def can_convert(unit1: str | None, unit2: str | None) -> bool:
    """
    Check if a quantity in ``unit1`` can be expressed in ``unit2``.

    True for the same unit (including both unit-less) and for two volume or
    two weight units. Count units only convert to themselves.
    """
    if _same_unit(unit1, unit2):
        return True
    family = unit_family(unit1)
    return family in _BASE_FACTORS and family == unit_family(unit2)


def convert_unit(quantity: float, from_unit: str | None, to_unit: str | None) -> float:
    """Convert ``quantity`` between units of one family."""
    if _same_unit(from_unit, to_unit):
        return quantity
    if not can_convert(from_unit, to_unit):
        raise IncompatibleUnitsError(from_unit, to_unit)

    factors = _BASE_FACTORS[unit_family(from_unit)]
    from_factor = factors[normalize_unit(from_unit)]
    to_factor = factors[normalize_unit(to_unit)]
    return quantity * from_factor / to_factor


def _metric_volume(ml: float) -> tuple[float, str]:
    if ml >= 1000:
        return round(ml / 1000, 2), "liter"
    return round(ml, 2), "milliliter"


def _imperial_volume(ml: float) -> tuple[float, str]:
    cups = ml / CUP_ML
    if cups >= 4:
        return round(cups / 4, 2), "quart"
    if cups >= 1:
        return round(cups, 2), "cup"
    if cups >= 1 / 16:
        return round(cups * 16, 2), "tablespoon"
    return round(cups * 48, 2), "teaspoon"


def _metric_weight(grams: float) -> tuple[float, str]:
    if grams >= 1000:
        return round(grams / 1000, 2), "kilogram"
    return round(grams, 2), "gram"


def _imperial_weight(grams: float) -> tuple[float, str]:
    ounces = grams / OUNCE_G
    if ounces >= 16:
        return round(ounces / 16, 2), "pound"
    return round(ounces, 2), "ounce"


def convert_measurement(quantity: float | Single | Range, unit: str | None) -> ConvertedMeasurement:
    """
    Compute metric and imperial equivalents for display.

    Ranges convert at their midpoint. Count units and unit-less quantities
    have no equivalents and yield an empty measurement.
    """
    value = quantity.midpoint if isinstance(quantity, (Single, Range)) else float(quantity)
    family = unit_family(unit)

    if family is UnitFamily.VOLUME:
        ml = value * TO_MILLILITERS[normalize_unit(unit)]
        return ConvertedMeasurement(metric=_metric_volume(ml), imperial=_imperial_volume(ml))

    if family is UnitFamily.WEIGHT:
        grams = value * TO_GRAMS[normalize_unit(unit)]
        return ConvertedMeasurement(metric=_metric_weight(grams), imperial=_imperial_weight(grams))

    return ConvertedMeasurement()


def preferred_measurement(item: GroceryItem, system: UnitSystem) -> tuple[float, str | None]:
    """Pick the quantity/unit pair to show for a user's unit preference."""
    if system is UnitSystem.METRIC and item.metric_quantity is not None:
        return item.metric_quantity, item.metric_unit
    if system is UnitSystem.IMPERIAL and item.imperial_quantity is not None:
        return item.imperial_quantity, item.imperial_unit
    return item.original_quantity, item.original_unit
