"""Grouping of branch menu items into ordered category sections."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from menu_master.models.menu_models import MenuItem

logger = logging.getLogger(__name__)

CANONICAL_CATEGORIES: tuple[str, ...] = (
    "Appetizers",
    "Main Course",
    "Grills",
    "Seafood",
    "Sandwiches",
    "Pizza",
    "Pasta",
    "Salads",
    "Soups",
    "Desserts",
    "Beverages",
    "Breakfast",
)


@dataclass
class MenuSection:
    """A titled run of menu items, as consumed by sectioned templates.

    Attributes:
        title: Category label shown as the section heading
        items: Items in their original relative order
    """

    title: str
    items: list[MenuItem] = field(default_factory=list)


@dataclass
class GroupedMenu:
    """Menu items partitioned by category.

    Attributes:
        categorized_items: Category label to items, in original relative order
        sorted_categories: Canonical categories present in categorized_items
    """

    categorized_items: dict[str, list[MenuItem]]
    sorted_categories: list[str]

    @property
    def is_empty(self) -> bool:
        """Whether there is nothing for a template to list."""
        return not self.sorted_categories

    @property
    def uncategorized(self) -> list[str]:
        """Categories present in the data but missing from the canonical order."""
        listed = set(self.sorted_categories)
        return [category for category in self.categorized_items if category not in listed]


def group_items(
    items: Iterable[MenuItem],
    canonical_order: Sequence[str] = CANONICAL_CATEGORIES,
) -> GroupedMenu:
    """Group menu items by category and order categories canonically.

    Grouping is stable: items keep their input order inside a category. Only
    categories listed in canonical_order appear in sorted_categories; other
    categories stay reachable through categorized_items.

    Args:
        items: Menu items of a single branch
        canonical_order: Fixed category display order

    Returns:
        GroupedMenu with the category mapping and the ordered category list
    """
    categorized_items: dict[str, list[MenuItem]] = {}
    for item in items:
        categorized_items.setdefault(item.category, []).append(item)

    sorted_categories = [category for category in canonical_order if category in categorized_items]
    grouped = GroupedMenu(categorized_items=categorized_items, sorted_categories=sorted_categories)

    if grouped.uncategorized:
        logger.warning(
            f"Categories outside the canonical order are not listed: {', '.join(grouped.uncategorized)}"
        )

    return grouped


def to_sections(grouped: GroupedMenu) -> list[MenuSection]:
    """Reshape a grouped menu into ordered sections.

    Args:
        grouped: Result of group_items

    Returns:
        One section per listed category, in canonical order
    """
    return [
        MenuSection(title=category, items=list(grouped.categorized_items.get(category, [])))
        for category in grouped.sorted_categories
    ]
