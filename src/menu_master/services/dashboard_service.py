"""Summary statistics for the admin dashboard."""

import logging

from pydantic import BaseModel, Field

from menu_master.repositories.menu_repositories import (
    BranchRepository,
    MenuItemRepository,
    RestaurantRepository,
)

logger = logging.getLogger(__name__)


class DashboardStats(BaseModel):
    """Counts shown on the admin dashboard."""

    restaurant_count: int = Field(..., ge=0)
    branch_count: int = Field(..., ge=0)
    menu_item_count: int = Field(..., ge=0)
    published_branch_count: int = Field(
        ..., ge=0, description="Branches with an explicitly chosen non-default template"
    )


class DashboardService:
    """Computes the summary counts shown on the admin dashboard."""

    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        branch_repository: BranchRepository,
        item_repository: MenuItemRepository,
    ) -> None:
        """Initialize the DashboardService.

        Args:
            restaurant_repository: Repository for restaurants
            branch_repository: Repository for branches
            item_repository: Repository for menu items
        """
        self.restaurant_repository = restaurant_repository
        self.branch_repository = branch_repository
        self.item_repository = item_repository

    async def get_stats(self) -> DashboardStats | None:
        """Count restaurants, branches and menu items.

        Returns:
            DashboardStats, or None if any table could not be read
        """
        restaurants = self.restaurant_repository.list_all()
        branches = self.branch_repository.list_all()
        items = self.item_repository.list_all()

        if restaurants is None or branches is None or items is None:
            logger.error("Failed to load dashboard statistics")
            return None

        return DashboardStats(
            restaurant_count=len(restaurants),
            branch_count=len(branches),
            menu_item_count=len(items),
            published_branch_count=sum(1 for b in branches if b.has_custom_template),
        )
