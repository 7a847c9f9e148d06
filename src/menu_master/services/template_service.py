"""Service applying templates to branches and building public menu links."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from menu_master.models.template_models import TemplateId
from menu_master.observability import traced
from menu_master.observability.metrics import record_template_apply
from menu_master.repositories.menu_repositories import BranchRepository, RestaurantRepository
from menu_master.utils.slugs import slugify

logger = logging.getLogger(__name__)


def build_public_url(origin: str, restaurant_name: str, branch_name: str, template_id: str) -> str:
    """Build the shareable link of a branch menu.

    Args:
        origin: Scheme and host, e.g. "https://menus.example.com"
        restaurant_name: Restaurant display name
        branch_name: Branch display name
        template_id: Template identifier appended as the last segment

    Returns:
        str: "{origin}/{restaurant-slug}/{branch-slug}/{template_id}"
    """
    restaurant_slug = slugify(restaurant_name) or "restaurant"
    branch_slug = slugify(branch_name) or "branch"
    return f"{origin.rstrip('/')}/{restaurant_slug}/{branch_slug}/{template_id}"


class ApplyTemplateFailure(str, Enum):
    """Why a template could not be applied."""

    UNKNOWN_TEMPLATE = "unknown_template"
    BRANCH_NOT_FOUND = "branch_not_found"
    STORE_FAILURE = "store_failure"


class BranchListFailure(str, Enum):
    """Why the branches of a restaurant could not be listed."""

    RESTAURANT_NOT_FOUND = "restaurant_not_found"
    STORE_FAILURE = "store_failure"


@dataclass
class ApplyTemplateResult:
    """Result of applying a template to a branch.

    Attributes:
        success: Whether the template was persisted
        branch_id: Branch the template was applied to
        template_id: Requested template identifier
        public_url: Shareable menu link, set on success
        failure: Failure kind, set on failure
        error_message: Operator-facing reason, set on failure
    """

    success: bool
    branch_id: str
    template_id: str
    public_url: str | None = None
    failure: ApplyTemplateFailure | None = None
    error_message: str | None = None


@dataclass
class BranchLink:
    """A branch as shown in the admin branch list.

    Attributes:
        branch_id: Branch identifier
        name: Branch display name
        state: State or region
        active_template: Stored template identifier, if any
        published: Whether a template has been applied
        has_custom_template: Whether that template is not the default one
        public_url: Shareable menu link, set once published
    """

    branch_id: str
    name: str
    state: str
    active_template: str | None
    published: bool
    has_custom_template: bool
    public_url: str | None = None


@dataclass
class BranchListResult:
    """Branches of one restaurant with their publication state."""

    success: bool
    restaurant_id: str
    branches: list[BranchLink] = field(default_factory=list)
    failure: BranchListFailure | None = None
    error_message: str | None = None


class TemplateService:
    """Persists template choices and reports the resulting public link."""

    def __init__(
        self,
        restaurant_repository: RestaurantRepository,
        branch_repository: BranchRepository,
        public_origin: str,
    ) -> None:
        """Initialize the TemplateService.

        Args:
            restaurant_repository: Repository for restaurants
            branch_repository: Repository for branches
            public_origin: Origin public menu links are built on
        """
        self.restaurant_repository = restaurant_repository
        self.branch_repository = branch_repository
        self.public_origin = public_origin

    @traced("apply_template", arguments=("branch_id", "template_id"))
    async def apply_template(self, branch_id: str, template_id: str) -> ApplyTemplateResult:
        """Store a template as the branch's active template.

        Applying the same template twice leaves the branch unchanged. Nothing
        is written when the template is unknown or the branch does not exist.

        Args:
            branch_id: Branch to update
            template_id: Template identifier to apply

        Returns:
            ApplyTemplateResult with the public link on success
        """
        if not TemplateId.is_known(template_id):
            return self._failed(
                branch_id,
                template_id,
                ApplyTemplateFailure.UNKNOWN_TEMPLATE,
                f"Unknown template '{template_id}'",
            )

        branches = self.branch_repository.find_by(id=branch_id)
        if branches is None:
            return self._failed(
                branch_id, template_id, ApplyTemplateFailure.STORE_FAILURE, "Failed to load branch"
            )
        if not branches:
            return self._failed(
                branch_id,
                template_id,
                ApplyTemplateFailure.BRANCH_NOT_FOUND,
                f"Branch {branch_id} not found",
            )
        branch = branches[0]

        if not self.branch_repository.update_template(branch_id, template_id):
            return self._failed(
                branch_id, template_id, ApplyTemplateFailure.STORE_FAILURE, "Failed to apply template"
            )

        record_template_apply(template_id, success=True)
        logger.info(f"Applied template {template_id} to branch {branch_id}")

        restaurants = self.restaurant_repository.find_by(id=branch.restaurant_id) or []
        restaurant_name = restaurants[0].name if restaurants else ""

        return ApplyTemplateResult(
            success=True,
            branch_id=branch_id,
            template_id=template_id,
            public_url=build_public_url(
                self.public_origin, restaurant_name, branch.name, template_id
            ),
        )

    @traced("list_branch_links", arguments=("restaurant_id",))
    async def list_branch_links(self, restaurant_id: str) -> BranchListResult:
        """List a restaurant's branches with their published state and link.

        Args:
            restaurant_id: Restaurant whose branches to list

        Returns:
            BranchListResult, most recently created branch first
        """
        restaurants = self.restaurant_repository.find_by(id=restaurant_id)
        if restaurants is None:
            logger.error(f"Failed to load restaurant {restaurant_id}")
            return BranchListResult(
                success=False,
                restaurant_id=restaurant_id,
                failure=BranchListFailure.STORE_FAILURE,
                error_message="Failed to load restaurant",
            )
        if not restaurants:
            return BranchListResult(
                success=False,
                restaurant_id=restaurant_id,
                failure=BranchListFailure.RESTAURANT_NOT_FOUND,
                error_message=f"Restaurant {restaurant_id} not found",
            )
        restaurant = restaurants[0]

        branches = self.branch_repository.list_for_restaurant(restaurant.id)
        if branches is None:
            logger.error(f"Failed to load branches of restaurant {restaurant_id}")
            return BranchListResult(
                success=False,
                restaurant_id=restaurant_id,
                failure=BranchListFailure.STORE_FAILURE,
                error_message="Failed to load branches",
            )

        links = []
        for branch in branches:
            published = branch.active_template is not None
            links.append(
                BranchLink(
                    branch_id=branch.id,
                    name=branch.name,
                    state=branch.state,
                    active_template=branch.active_template,
                    published=published,
                    has_custom_template=branch.has_custom_template,
                    public_url=(
                        build_public_url(
                            self.public_origin,
                            restaurant.name,
                            branch.name,
                            branch.template_id.value,
                        )
                        if published
                        else None
                    ),
                )
            )

        return BranchListResult(success=True, restaurant_id=restaurant.id, branches=links)

    def _failed(
        self,
        branch_id: str,
        template_id: str,
        failure: ApplyTemplateFailure,
        message: str,
    ) -> ApplyTemplateResult:
        record_template_apply(str(template_id), success=False)
        logger.warning(f"Could not apply template {template_id!r} to branch {branch_id}: {message}")
        return ApplyTemplateResult(
            success=False,
            branch_id=branch_id,
            template_id=template_id,
            failure=failure,
            error_message=message,
        )
