"""Shopping list generation from recipe ingredient lines."""

from dataclasses import dataclass, field

from pantrylist.logging_config import LoggingContext, get_logger
from pantrylist.normalize.categories import CATEGORY_ORDER, classify
from pantrylist.normalize.conversion import convert_measurement
from pantrylist.normalize.core_key import extract_core_key
from pantrylist.normalize.parser import parse_ingredients
from pantrylist.plan.dedup import deduplicate_records
from pantrylist.plan.merge import merge_many
from pantrylist.schemas import Category, GroceryItem, GroceryLine

logger = get_logger(__name__)


@dataclass
class ShoppingList:
    """Consolidated grocery list with its rendering views."""

    list_id: str
    items: list[GroceryItem] = field(default_factory=list)

    # Grouped views
    items_by_category: dict[Category, list[GroceryItem]] = field(default_factory=dict)
    items_by_recipe: dict[str, list[GroceryItem]] = field(default_factory=dict)

    def add_item(self, item: GroceryItem) -> None:
        """Add an item and update the grouped views."""
        self.items.append(item)

        self.items_by_category.setdefault(item.category, []).append(item)

        for recipe_id in item.recipe_ids or (item.recipe_id,):
            self.items_by_recipe.setdefault(recipe_id, []).append(item)

    def category_sections(self) -> list[tuple[Category, list[GroceryItem]]]:
        """Non-empty category groups in store-walk order."""
        return [
            (category, self.items_by_category[category])
            for category in CATEGORY_ORDER
            if self.items_by_category.get(category)
        ]

    def sorted_by_key(self) -> list[GroceryItem]:
        """Items in alphabetical ``sort_key`` order."""
        return sorted(self.items, key=lambda item: (item.sort_key, item.name.casefold()))


class ShoppingListGenerator:
    """
    Generates shopping lists from recipe ingredient lines with:
    - Near-duplicate collapse within each recipe
    - Quantity summing across recipes (ranges kept as ranges)
    - Unit reconciliation within a unit family (1 cup + 8 tbsp -> 1.5 cup)
    - Metric and imperial equivalents for display
    """

    def generate(self, list_id: str, recipes: list[tuple[str, list[str]]]) -> ShoppingList:
        """
        Generate a shopping list from several recipes.

        Args:
            list_id: The grocery list ID.
            recipes: List of (recipe_id, ingredient_lines) tuples.

        Returns:
            ShoppingList with one item per consolidated ingredient.
        """
        logger.info(f"Generating shopping list {list_id} from {len(recipes)} recipes")

        with LoggingContext(list_id=list_id):
            per_recipe = [self._recipe_lines(recipe_id, lines) for recipe_id, lines in recipes]
            merged = merge_many(per_recipe)

            shopping_list = ShoppingList(list_id=list_id)
            for line in merged:
                shopping_list.add_item(self._create_item(line))

        logger.info(
            f"Generated shopping list {list_id}: {len(shopping_list.items)} items, "
            f"{len(shopping_list.items_by_category)} categories"
        )
        return shopping_list

    def _recipe_lines(self, recipe_id: str, lines: list[str]) -> list[GroceryLine]:
        """Parse and deduplicate one recipe's ingredient lines."""
        with LoggingContext(recipe_id=recipe_id):
            records = parse_ingredients(lines, recipe_id=recipe_id)
            unique = deduplicate_records(records)
            if len(unique) < len(records):
                logger.info(f"Collapsed {len(records) - len(unique)} duplicate ingredient lines")
            return [GroceryLine.from_record(record) for record in unique]

    def _create_item(self, line: GroceryLine) -> GroceryItem:
        """Create the persistence row for one merged line."""
        measurement = convert_measurement(line.quantity, line.unit)
        metric_quantity, metric_unit = measurement.metric or (None, None)
        imperial_quantity, imperial_unit = measurement.imperial or (None, None)

        return GroceryItem(
            name=line.name,
            sort_key=extract_core_key(line.name),
            original_quantity=line.quantity.midpoint,
            original_unit=line.unit,
            display_quantity=line.display_quantity,
            metric_quantity=metric_quantity,
            metric_unit=metric_unit,
            imperial_quantity=imperial_quantity,
            imperial_unit=imperial_unit,
            category=classify(line.name),
            recipe_id=line.recipe_ids[0] if line.recipe_ids else "",
            recipe_ids=line.recipe_ids,
        )
