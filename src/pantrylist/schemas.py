"""Value objects shared by the normalization and consolidation engine."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


def format_number(value: float, precision: int | None = None) -> str:
    """Render a quantity as a trimmed decimal ("1.5", "8", "0.125")."""
    if precision is None:
        from pantrylist.config import get_settings

        precision = get_settings().quantity_precision
    text = f"{round(value, precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class Single(BaseModel):
    """A single numeric quantity."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["single"] = "single"
    value: float = Field(gt=0)

    @property
    def midpoint(self) -> float:
        return self.value

    @property
    def bounds(self) -> tuple[float, float]:
        return self.value, self.value


class Range(BaseModel):
    """A quantity expressed as an inclusive [min, max] interval."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["range"] = "range"
    min: float = Field(gt=0)
    max: float = Field(gt=0)

    @model_validator(mode="after")
    def check_order(self) -> "Range":
        if self.min > self.max:
            raise ValueError(f"range lower bound {self.min} exceeds upper bound {self.max}")
        return self

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    @property
    def bounds(self) -> tuple[float, float]:
        return self.min, self.max


ParsedQuantity = Annotated[Union[Single, Range], Field(discriminator="kind")]


def display_quantity(quantity: Single | Range) -> str:
    """Human-readable form of a quantity: "1.5" or "20-30"."""
    if isinstance(quantity, Range):
        return f"{format_number(quantity.min)}-{format_number(quantity.max)}"
    return format_number(quantity.value)


class Category(str, Enum):
    """Grocery-store aisle an ingredient is shelved in."""

    PRODUCE = "produce"
    MEAT_SEAFOOD = "meat-seafood"
    DAIRY_EGGS = "dairy-eggs"
    PANTRY = "pantry"
    SPICES = "spices"
    FROZEN = "frozen"
    BAKERY = "bakery"
    OTHER = "other"


class ConvertedMeasurement(BaseModel):
    """Equivalent quantities in the metric and imperial systems."""

    model_config = ConfigDict(frozen=True)

    metric: tuple[float, str] | None = None
    imperial: tuple[float, str] | None = None


class IngredientRecord(BaseModel):
    """One parsed ingredient line."""

    model_config = ConfigDict(frozen=True)

    name: str
    sort_key: str
    quantity: ParsedQuantity = Field(default_factory=lambda: Single(value=1.0))
    unit: str | None = None
    preparation: str | None = None
    notes: str | None = None
    category: Category = Category.OTHER
    original: str = ""
    recipe_id: str = ""
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)

    @property
    def display_quantity(self) -> str:
        return display_quantity(self.quantity)

    @property
    def measurement(self) -> ConvertedMeasurement:
        """Metric and imperial equivalents of this record's quantity."""
        from pantrylist.normalize.conversion import convert_measurement

        return convert_measurement(self.quantity, self.unit)


def _parse_display_range(text: str | None) -> tuple[float, float] | None:
    """Read a legacy "min-max" display string; fractions are never ranges."""
    if not text or "-" not in text or "/" in text:
        return None
    low, _, high = text.partition("-")
    try:
        bounds = float(low.strip()), float(high.strip())
    except ValueError:
        return None
    if bounds[0] <= 0 or bounds[1] <= 0 or bounds[0] > bounds[1]:
        return None
    return bounds


class GroceryLine(BaseModel):
    """A name/quantity/unit line as combined by the merge engine."""

    model_config = ConfigDict(frozen=True)

    name: str
    quantity: ParsedQuantity
    unit: str | None = None
    recipe_ids: tuple[str, ...] = ()

    @property
    def display_quantity(self) -> str:
        return display_quantity(self.quantity)

    @classmethod
    def from_display(
        cls,
        name: str,
        quantity: float,
        unit: str | None = None,
        display: str | None = None,
        recipe_ids: tuple[str, ...] = (),
    ) -> "GroceryLine":
        """
        Build a line from the stored shape where a range lives only in the
        display string and ``quantity`` holds its midpoint.
        """
        bounds = _parse_display_range(display)
        parsed: Single | Range
        if bounds is not None:
            parsed = Range(min=bounds[0], max=bounds[1])
        else:
            parsed = Single(value=quantity)
        return cls(name=name, quantity=parsed, unit=unit or None, recipe_ids=recipe_ids)

    @classmethod
    def from_record(cls, record: IngredientRecord) -> "GroceryLine":
        return cls(
            name=record.name,
            quantity=record.quantity,
            unit=record.unit,
            recipe_ids=(record.recipe_id,) if record.recipe_id else (),
        )


class GroceryItem(BaseModel):
    """Row handed to the persistence layer for one shopping-list entry."""

    model_config = ConfigDict(frozen=True)

    name: str
    sort_key: str
    original_quantity: float
    original_unit: str | None = None
    display_quantity: str
    metric_quantity: float | None = None
    metric_unit: str | None = None
    imperial_quantity: float | None = None
    imperial_unit: str | None = None
    category: Category
    checked: bool = False
    recipe_id: str = ""
    recipe_ids: tuple[str, ...] = ()
