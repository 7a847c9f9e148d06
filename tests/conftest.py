"""Shared pytest fixtures and configuration for all tests."""

import os
from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

# Keep module-level application construction in main and lambda_handler offline
os.environ.setdefault("ENVIRONMENT", "test")

from menu_master.models.menu_models import Branch, MenuItem, Restaurant  # noqa: E402
from menu_master.repositories.menu_repositories import (  # noqa: E402
    BranchRepository,
    MenuItemRepository,
    RestaurantRepository,
)
from menu_master.templates.base_template import RenderSettings  # noqa: E402

STORAGE_BASE_URL = "https://storage.example.com/menu-images"


@pytest.fixture
def render_settings() -> RenderSettings:
    """Fixture providing rendering settings with a fixed image bucket."""
    return RenderSettings(storage_base_url=STORAGE_BASE_URL, currency_label="IQD")


@pytest.fixture
def restaurant() -> Restaurant:
    """Fixture providing the Burger House restaurant."""
    return Restaurant(
        id="rest_1",
        name="Burger House",
        logo="logos/burger-house.png",
        created_at=datetime(2024, 1, 10, tzinfo=UTC),
    )


@pytest.fixture
def branch() -> Branch:
    """Fixture providing the Downtown branch using the fast food dark template."""
    return Branch(
        id="branch_1",
        restaurant_id="rest_1",
        name="Downtown",
        state="Baghdad",
        location="Karrada",
        delivery_price=Decimal("2000"),
        active_template="fast-food-dark",
        created_at=datetime(2024, 1, 11, tzinfo=UTC),
    )


@pytest.fixture
def menu_items() -> list[MenuItem]:
    """Fixture providing menu items across three canonical categories."""
    return [
        MenuItem(
            id="item_1",
            branch_id="branch_1",
            restaurant_id="rest_1",
            name="Classic Burger",
            price=Decimal("5000"),
            category="Main Course",
            image="items/classic.jpg",
            description="Beef patty with cheddar",
        ),
        MenuItem(
            id="item_2",
            branch_id="branch_1",
            restaurant_id="rest_1",
            name="Chocolate Cake",
            price=Decimal("3500"),
            category="Desserts",
        ),
        MenuItem(
            id="item_3",
            branch_id="branch_1",
            restaurant_id="rest_1",
            name="Mozzarella Sticks",
            price=Decimal("2500"),
            category="Appetizers",
            image="https://cdn.example.com/sticks.png",
        ),
    ]


@pytest.fixture
def restaurant_repository(restaurant: Restaurant) -> MagicMock:
    """Fixture providing a mocked restaurant repository holding Burger House."""
    repository = MagicMock(spec=RestaurantRepository)
    repository.list_all.return_value = [restaurant]
    repository.find_by.return_value = [restaurant]
    repository.find_by_pattern.return_value = [restaurant]
    return repository


@pytest.fixture
def branch_repository(branch: Branch) -> MagicMock:
    """Fixture providing a mocked branch repository holding Downtown."""
    repository = MagicMock(spec=BranchRepository)
    repository.list_all.return_value = [branch]
    repository.list_for_restaurant.return_value = [branch]
    repository.find_by.return_value = [branch]
    repository.find_by_pattern.return_value = [branch]
    repository.update_template.return_value = True
    return repository


@pytest.fixture
def item_repository(menu_items: list[MenuItem]) -> MagicMock:
    """Fixture providing a mocked menu item repository."""
    repository = MagicMock(spec=MenuItemRepository)
    repository.list_all.return_value = menu_items
    repository.list_for_branch.return_value = menu_items
    return repository
