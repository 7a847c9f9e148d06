"""Unit tests for grouping menu items by category."""

from decimal import Decimal

import pytest

from menu_master.models.menu_models import MenuItem
from menu_master.services.category_grouper import (
    CANONICAL_CATEGORIES,
    group_items,
    to_sections,
)


def make_item(item_id: str, category: object) -> MenuItem:
    return MenuItem(
        id=item_id,
        branch_id="branch_1",
        restaurant_id="rest_1",
        name=f"Item {item_id}",
        price=Decimal("1000"),
        category=category,
    )


@pytest.mark.unit
class TestGroupItems:
    """Test suite for group_items."""

    def test_categories_follow_canonical_order(self) -> None:
        """Test that categories are ordered canonically, not by first appearance."""
        items = [
            make_item("1", "Desserts"),
            make_item("2", "Pizza"),
            make_item("3", "Pizza"),
            make_item("4", "Appetizers"),
        ]

        grouped = group_items(items)

        assert grouped.sorted_categories == ["Appetizers", "Pizza", "Desserts"]
        assert [item.id for item in grouped.categorized_items["Pizza"]] == ["2", "3"]

    def test_grouping_is_stable_within_a_category(self) -> None:
        """Test that items keep their input order inside each category."""
        items = [make_item(str(i), "Grills") for i in range(5)]

        grouped = group_items(items)

        assert [item.id for item in grouped.categorized_items["Grills"]] == ["0", "1", "2", "3", "4"]

    def test_every_item_lands_in_exactly_one_group(self) -> None:
        """Test that the groups partition the input."""
        items = [make_item("1", "Soups"), make_item("2", "Salads"), make_item("3", "Soups")]

        grouped = group_items(items)

        grouped_ids = sorted(item.id for group in grouped.categorized_items.values() for item in group)
        assert grouped_ids == ["1", "2", "3"]

    def test_non_canonical_categories_are_not_listed(self) -> None:
        """Test that unknown categories are kept but left out of the ordering."""
        items = [make_item("1", "Burgers"), make_item("2", "Pizza")]

        grouped = group_items(items)

        assert grouped.sorted_categories == ["Pizza"]
        assert "Burgers" in grouped.categorized_items
        assert grouped.uncategorized == ["Burgers"]

    def test_numeric_category_is_normalized(self) -> None:
        """Test that non-string category labels are grouped by their string form."""
        items = [make_item("1", 5), make_item("2", "5")]

        grouped = group_items(items)

        assert len(grouped.categorized_items["5"]) == 2

    def test_empty_input(self) -> None:
        """Test that no items yields an empty grouping."""
        grouped = group_items([])

        assert grouped.categorized_items == {}
        assert grouped.sorted_categories == []
        assert grouped.is_empty is True

    def test_custom_canonical_order(self) -> None:
        """Test that a different canonical order can be supplied."""
        items = [make_item("1", "Pizza"), make_item("2", "Soups")]

        grouped = group_items(items, canonical_order=["Soups", "Pizza"])

        assert grouped.sorted_categories == ["Soups", "Pizza"]

    def test_canonical_categories_list(self) -> None:
        """Test the fixed display order."""
        assert CANONICAL_CATEGORIES[0] == "Appetizers"
        assert CANONICAL_CATEGORIES[-1] == "Breakfast"
        assert len(CANONICAL_CATEGORIES) == 12


@pytest.mark.unit
class TestToSections:
    """Test suite for to_sections."""

    def test_sections_follow_sorted_categories(self) -> None:
        """Test that one section is produced per listed category, in order."""
        grouped = group_items(
            [make_item("1", "Beverages"), make_item("2", "Main Course"), make_item("3", "Unknown")]
        )

        sections = to_sections(grouped)

        assert [section.title for section in sections] == ["Main Course", "Beverages"]
        assert [item.id for item in sections[0].items] == ["2"]

    def test_empty_grouping_has_no_sections(self) -> None:
        """Test that an empty grouping produces no sections."""
        assert to_sections(group_items([])) == []
