"""Pytest configuration and shared fixtures."""

import pytest

from pantrylist.config import get_settings
from pantrylist.logging_config import clear_context
from pantrylist.schemas import GroceryLine, Range, Single

# =============================================================================
# Test Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate each test from PANTRYLIST_* variables and the settings cache."""
    for name in [
        "PANTRYLIST_QUANTITY_PRECISION",
        "PANTRYLIST_LOW_CONFIDENCE_THRESHOLD",
        "PANTRYLIST_FUZZY_SYNONYM_THRESHOLD",
        "PANTRYLIST_DEFAULT_CATEGORY",
        "PANTRYLIST_ENVIRONMENT",
        "PANTRYLIST_LOG_LEVEL",
        "PANTRYLIST_LOG_FORMAT",
    ]:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    clear_context()
    yield
    get_settings.cache_clear()
    clear_context()


# =============================================================================
# Grocery Line Fixtures
# =============================================================================


def line(name: str, quantity: float | tuple[float, float], unit: str | None = None, *recipe_ids: str):
    """Build a GroceryLine from a number or a (min, max) pair."""
    if isinstance(quantity, tuple):
        parsed = Range(min=quantity[0], max=quantity[1])
    else:
        parsed = Single(value=quantity)
    return GroceryLine(name=name, quantity=parsed, unit=unit, recipe_ids=recipe_ids)


@pytest.fixture
def make_line():
    """Factory for GroceryLine test data."""
    return line


@pytest.fixture
def pasta_recipe():
    """Ingredient lines of a tomato pasta recipe."""
    return (
        "pasta-01",
        [
            "1 lb spaghetti",
            "2 tbsp extra-virgin olive oil",
            "3 cloves garlic, minced",
            "1 (28 oz) can crushed tomatoes",
            "1/2 tsp red pepper flakes",
            "kosher salt, to taste",
            "1/4 cup fresh basil leaves, torn",
        ],
    )


@pytest.fixture
def soup_recipe():
    """Ingredient lines of a chicken soup recipe with an extraction duplicate."""
    return (
        "soup-02",
        [
            "2 lb boneless skinless chicken thighs",
            "chicken thighs",
            "1 onion, diced",
            "2-3 carrots, peeled and sliced",
            "8 cups chicken broth",
            "1 tbsp olive oil",
            "salt to taste",
        ],
    )
