"""Consolidation of parsed ingredients into shopping lists."""

from pantrylist.plan.dedup import deduplicate, deduplicate_lines, deduplicate_records
from pantrylist.plan.merge import combine_lines, merge_lists, merge_many
from pantrylist.plan.shopping_list import ShoppingList, ShoppingListGenerator

__all__ = [
    "ShoppingList",
    "ShoppingListGenerator",
    "combine_lines",
    "deduplicate",
    "deduplicate_lines",
    "deduplicate_records",
    "merge_lists",
    "merge_many",
]
