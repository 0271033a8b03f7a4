"""Keyword-rule grocery category classification."""

import re
from dataclasses import dataclass

from pantrylist.config import get_settings
from pantrylist.schemas import Category


@dataclass(frozen=True)
class CategoryRule:
    """
    Keywords that place a name in a category unless an exclusion phrase is
    present. Keywords match at the start of a word ("ham" never matches
    "champagne"); exclusions match anywhere.
    """

    category: Category
    keywords: tuple[str, ...]
    exclusions: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        if any(phrase in name for phrase in self.exclusions):
            return False
        return any(re.search(rf"(?<!\w){re.escape(keyword)}", name) for keyword in self.keywords)


# Evaluated in order, first match wins ("cream" is dairy before anything else sees it)
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        Category.PRODUCE,
        keywords=(
            "apple", "banana", "orange", "lemon", "lime", "grape", "strawberr",
            "blueberr", "raspberr", "blackberr", "pear", "peach", "plum", "cherry",
            "cherries", "melon", "pineapple", "mango", "papaya", "kiwi", "avocado",
            "tomato", "cucumber", "lettuce", "spinach", "kale", "arugula", "cabbage",
            "broccoli", "cauliflower", "carrot", "celery", "onion", "scallion",
            "shallot", "leek", "garlic", "potato", "yam", "squash", "zucchini",
            "eggplant", "bell pepper", "jalapeño", "jalapeno", "chile pepper",
            "corn on the cob", "mushroom", "asparagus", "green bean", "brussels sprout",
            "beet", "radish", "fresh herbs", "bok choy",
        ),
        exclusions=(
            "powder", "paste", "juice", "stock", "broth", "sauce", "soup",
            "frozen", "canned", "dried", "sun-dried", "ketchup", "jam", "jelly",
        ),
    ),
    CategoryRule(
        Category.MEAT_SEAFOOD,
        keywords=(
            "chicken", "beef", "pork", "lamb", "turkey", "duck", "bacon", "sausage",
            "ham", "steak", "mince", "salmon", "tuna", "shrimp", "prawn", "crab",
            "lobster", "scallop", "fish", "tilapia", "cod", "halibut", "mahi",
            "swordfish", "anchov", "chorizo", "prosciutto", "pancetta", "veal",
        ),
        exclusions=("stock", "broth", "bouillon", "sauce", "frozen"),
    ),
    CategoryRule(
        Category.DAIRY_EGGS,
        keywords=(
            "milk", "cream", "half and half", "butter", "margarine", "cheese",
            "yogurt", "yoghurt", "egg", "parmesan", "mozzarella", "cheddar",
            "ricotta", "feta", "ghee", "crème fraîche", "creme fraiche",
        ),
        exclusions=(
            "ice cream", "peanut butter", "almond butter", "coconut milk",
            "almond milk", "oat milk", "eggplant", "cream of tartar",
        ),
    ),
    CategoryRule(
        Category.SPICES,
        keywords=(
            "salt", "pepper", "spice", "oregano", "basil", "thyme", "rosemary",
            "sage", "parsley", "cilantro", "coriander", "dill", "mint", "bay leaf",
            "bay leaves", "paprika", "cumin", "turmeric", "curry", "chili powder",
            "chili flakes", "cayenne", "cinnamon", "nutmeg", "clove", "ginger",
            "garlic powder", "onion powder", "seasoning", "cardamom", "allspice",
            "fennel seed", "mustard seed", "saffron", "vanilla",
        ),
    ),
    CategoryRule(
        Category.FROZEN,
        keywords=("frozen", "ice cream", "popsicle", "sorbet", "ice cube"),
    ),
    CategoryRule(
        Category.BAKERY,
        keywords=(
            "bread", "roll", "bun", "bagel", "muffin", "croissant", "baguette",
            "pita", "tortilla", "naan", "focaccia", "ciabatta", "sourdough",
            "brioche", "english muffin",
        ),
        exclusions=("breadcrumb", "bread crumb", "panko", "flour", "rolled"),
    ),
    CategoryRule(
        Category.PANTRY,
        keywords=(
            "flour", "sugar", "oil", "vinegar", "rice", "pasta", "noodle",
            "spaghetti", "quinoa", "couscous", "oats", "honey", "syrup", "baking",
            "yeast", "cornstarch", "cocoa", "chocolate", "beans", "chickpea",
            "lentil", "stock", "broth", "sauce", "paste", "canned", "nuts",
            "breadcrumb", "panko",
        ),
    ),
)

CATEGORY_AISLES: dict[Category, str] = {
    Category.PRODUCE: "Produce",
    Category.MEAT_SEAFOOD: "Meat & Seafood",
    Category.DAIRY_EGGS: "Dairy & Eggs",
    Category.PANTRY: "Pantry",
    Category.SPICES: "Spices & Seasonings",
    Category.FROZEN: "Frozen",
    Category.BAKERY: "Bakery",
    Category.OTHER: "Other",
}

# Display order of category groups on a rendered list
CATEGORY_ORDER: tuple[Category, ...] = tuple(rule.category for rule in CATEGORY_RULES) + (
    Category.OTHER,
)


def classify(name: str) -> Category:
    """
    Assign a cleaned ingredient name to exactly one grocery category.

    Args:
        name: Cleaned display name

    Returns:
        First category whose rule matches; the configured default for
        unmatched names and ``Category.OTHER`` for blank ones

    Examples:
        "heavy cream" -> Category.DAIRY_EGGS
        "tomato paste" -> Category.PANTRY
    """
    lowered = " ".join((name or "").lower().split())
    if not lowered:
        return Category.OTHER

    for rule in CATEGORY_RULES:
        if rule.matches(lowered):
            return rule.category
    return get_settings().default_category


def category_aisle(category: Category) -> str:
    """Store-aisle label for a category."""
    return CATEGORY_AISLES.get(category, "Other")
