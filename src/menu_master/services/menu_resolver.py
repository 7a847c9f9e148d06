"""Resolution of public menu links to restaurant, branch and menu items."""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from menu_master.models.menu_models import Branch, MenuItem, Restaurant
from menu_master.observability import traced
from menu_master.observability.metrics import record_resolution
from menu_master.repositories.menu_repositories import (
    BranchRepository,
    MenuItemRepository,
    RestaurantRepository,
)
from menu_master.utils.slugs import slug_matches

logger = logging.getLogger(__name__)

# Trailing segment of the deprecated /{restaurant}/{branch}/menu links
LEGACY_MENU_SEGMENT = "menu"

RESTAURANT_NOT_FOUND = "restaurant not found"
BRANCH_NOT_FOUND = "branch not found or not linked to restaurant"


class ResolutionStatus(str, Enum):
    """Outcome of a menu resolution."""

    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"


class AddressingMode(str, Enum):
    """How a menu path identifies its restaurant and branch."""

    SLUG = "slug"
    NAME = "name"
    ID = "id"


@dataclass
class MenuPath:
    """A parsed public menu path.

    Attributes:
        mode: SLUG for /{restaurant-slug}/{branch-slug}[/{template}],
            NAME for the legacy /{restaurant}/{branch}/menu form
        restaurant: Restaurant slug or name
        branch: Branch slug or name
        template_id: Template segment of slug links, if present
    """

    mode: AddressingMode
    restaurant: str
    branch: str
    template_id: str | None = None


@dataclass
class MenuResolution:
    """Structured result of resolving a menu.

    Missing entities and store failures are reported here rather than raised.

    Attributes:
        status: Outcome of the resolution
        restaurant: Resolved restaurant, if found
        branch: Resolved branch, if found
        items: Menu items of the branch, identifiers normalized
        reason: Human-readable reason for a failed resolution
    """

    status: ResolutionStatus
    restaurant: Restaurant | None = None
    branch: Branch | None = None
    items: list[MenuItem] = field(default_factory=list)
    reason: str | None = None

    @property
    def found(self) -> bool:
        """Whether restaurant and branch were both resolved."""
        return self.status is ResolutionStatus.RESOLVED

    @property
    def retryable(self) -> bool:
        """Whether retrying the same request may succeed."""
        return self.status is ResolutionStatus.STORE_FAILURE

    @classmethod
    def not_found(cls, reason: str, restaurant: Restaurant | None = None) -> "MenuResolution":
        return cls(status=ResolutionStatus.NOT_FOUND, restaurant=restaurant, reason=reason)

    @classmethod
    def store_failure(cls, what: str) -> "MenuResolution":
        return cls(
            status=ResolutionStatus.STORE_FAILURE,
            reason=f"failed to load {what}, please try again",
        )


def parse_menu_path(segments: Sequence[str]) -> MenuPath:
    """Parse public menu path segments into a MenuPath.

    Args:
        segments: Path segments, e.g. ["burger-house", "downtown", "fast-food-dark"]

    Returns:
        MenuPath in slug or legacy name mode

    Raises:
        ValueError: If the segments match neither link shape
    """
    parts = [segment.strip() for segment in segments if segment and segment.strip()]

    if len(parts) == 3 and parts[2].lower() == LEGACY_MENU_SEGMENT:
        return MenuPath(mode=AddressingMode.NAME, restaurant=parts[0], branch=parts[1])

    if len(parts) in (2, 3):
        return MenuPath(
            mode=AddressingMode.SLUG,
            restaurant=parts[0],
            branch=parts[1],
            template_id=parts[2] if len(parts) == 3 else None,
        )

    raise ValueError(f"Menu path must have 2 or 3 segments, got {len(parts)}")


class MenuResolver:
    """Locates the restaurant, branch and items behind a public menu link.

    Queries run strictly in order (restaurants, then branches, then items)
    since each step filters on the previous step's result.
    """

    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        branch_repository: BranchRepository,
        item_repository: MenuItemRepository,
    ) -> None:
        """Initialize the resolver.

        Args:
            restaurant_repository: Repository for restaurants
            branch_repository: Repository for branches
            item_repository: Repository for menu items
        """
        self.restaurant_repository = restaurant_repository
        self.branch_repository = branch_repository
        self.item_repository = item_repository

    async def resolve(self, path: MenuPath) -> MenuResolution:
        """Resolve a parsed menu path.

        Args:
            path: Parsed public menu path

        Returns:
            MenuResolution describing the outcome
        """
        if path.mode is AddressingMode.NAME:
            return await self.resolve_by_name(
                restaurant_name=path.restaurant, branch_name=path.branch
            )
        return await self.resolve_by_slug(
            restaurant_slug=path.restaurant, branch_slug=path.branch
        )

    @traced("resolve_menu_by_slug", arguments=("restaurant_slug", "branch_slug"))
    async def resolve_by_slug(self, restaurant_slug: str, branch_slug: str) -> MenuResolution:
        """Resolve a menu from restaurant and branch slugs.

        The first restaurant (newest first) whose slugified name equals the slug
        wins; names colliding after slugification are not disambiguated.

        Args:
            restaurant_slug: Restaurant slug from the URL
            branch_slug: Branch slug from the URL

        Returns:
            MenuResolution describing the outcome
        """
        started = time.perf_counter()
        restaurant_slug = restaurant_slug.lower()
        branch_slug = branch_slug.lower()

        restaurants = self.restaurant_repository.list_all()
        if restaurants is None:
            resolution = MenuResolution.store_failure("restaurants")
        else:
            restaurant = next((r for r in restaurants if slug_matches(r.name, restaurant_slug)), None)
            if restaurant is None:
                resolution = MenuResolution.not_found(RESTAURANT_NOT_FOUND)
            else:
                branches = self.branch_repository.list_for_restaurant(restaurant.id)
                if branches is None:
                    resolution = MenuResolution.store_failure("branches")
                else:
                    branch = next((b for b in branches if slug_matches(b.name, branch_slug)), None)
                    resolution = await self._complete(restaurant, branch)

        self._log_outcome(AddressingMode.SLUG, f"/{restaurant_slug}/{branch_slug}", resolution, started)
        return resolution

    @traced("resolve_menu_by_name", arguments=("restaurant_name", "branch_name"))
    async def resolve_by_name(self, restaurant_name: str, branch_name: str) -> MenuResolution:
        """Resolve a menu from the deprecated direct-name link form.

        Names are matched case-insensitively against stored names without
        slugification; the first match of each wins.

        Args:
            restaurant_name: Restaurant name from the URL
            branch_name: Branch name from the URL

        Returns:
            MenuResolution describing the outcome
        """
        started = time.perf_counter()

        restaurants = self.restaurant_repository.find_by_pattern("name", restaurant_name)
        if restaurants is None:
            resolution = MenuResolution.store_failure("restaurants")
        elif not restaurants:
            resolution = MenuResolution.not_found(RESTAURANT_NOT_FOUND)
        else:
            restaurant = restaurants[0]
            branches = self.branch_repository.find_by_pattern(
                "name", branch_name, restaurant_id=restaurant.id
            )
            if branches is None:
                resolution = MenuResolution.store_failure("branches")
            else:
                resolution = await self._complete(restaurant, branches[0] if branches else None)

        self._log_outcome(AddressingMode.NAME, f"/{restaurant_name}/{branch_name}", resolution, started)
        return resolution

    @traced("resolve_menu_by_id", arguments=("restaurant_id", "branch_id"))
    async def resolve_by_id(self, restaurant_id: str, branch_id: str) -> MenuResolution:
        """Resolve a menu from restaurant and branch identifiers.

        Used by the admin preview; the branch must belong to the restaurant.

        Args:
            restaurant_id: Restaurant identifier
            branch_id: Branch identifier

        Returns:
            MenuResolution describing the outcome
        """
        started = time.perf_counter()

        restaurants = self.restaurant_repository.find_by(id=restaurant_id)
        if restaurants is None:
            resolution = MenuResolution.store_failure("restaurants")
        elif not restaurants:
            resolution = MenuResolution.not_found(RESTAURANT_NOT_FOUND)
        else:
            branches = self.branch_repository.find_by(id=branch_id, restaurant_id=restaurant_id)
            if branches is None:
                resolution = MenuResolution.store_failure("branches")
            else:
                resolution = await self._complete(restaurants[0], branches[0] if branches else None)

        self._log_outcome(AddressingMode.ID, f"{restaurant_id}/{branch_id}", resolution, started)
        return resolution

    async def _complete(self, restaurant: Restaurant, branch: Branch | None) -> MenuResolution:
        """Load the items of a resolved branch, or report the branch missing."""
        if branch is None:
            return MenuResolution.not_found(BRANCH_NOT_FOUND, restaurant=restaurant)

        items = self.item_repository.list_for_branch(branch.id)
        if items is None:
            return MenuResolution.store_failure("menu items")

        return MenuResolution(
            status=ResolutionStatus.RESOLVED,
            restaurant=restaurant,
            branch=branch,
            items=items,
        )

    def _log_outcome(
        self,
        mode: AddressingMode,
        target: str,
        resolution: MenuResolution,
        started: float,
    ) -> None:
        record_resolution(mode.value, resolution.status.value, time.perf_counter() - started)

        if resolution.status is ResolutionStatus.RESOLVED:
            logger.info(f"Resolved menu {target} with {len(resolution.items)} items")
        elif resolution.status is ResolutionStatus.NOT_FOUND:
            logger.info(f"Menu {target} not found: {resolution.reason}")
        else:
            logger.error(f"Store failure while resolving menu {target}: {resolution.reason}")
