"""Admin preview of branch menus under any template."""

import logging

from menu_master.models.template_models import TemplateId
from menu_master.services.menu_resolver import MenuResolver
from menu_master.services.public_menu_service import MenuPage, PublicMenuService

logger = logging.getLogger(__name__)


class PreviewService:
    """Renders a branch menu with a template the operator is trying out.

    Unlike the public pages, the requested template wins over the branch's
    stored one, so operators can compare templates before applying one.
    """

    def __init__(self, resolver: MenuResolver, public_menu_service: PublicMenuService) -> None:
        """Initialize the PreviewService.

        Args:
            resolver: Resolves restaurant and branch identifiers
            public_menu_service: Groups and renders resolved menus
        """
        self.resolver = resolver
        self.public_menu_service = public_menu_service

    async def preview(self, restaurant_id: str, branch_id: str, template_id: str | None) -> MenuPage:
        """Render a preview of a branch menu.

        Args:
            restaurant_id: Restaurant identifier
            branch_id: Branch identifier, must belong to the restaurant
            template_id: Template to preview; unknown means default

        Returns:
            MenuPage with the preview or an error page
        """
        resolution = await self.resolver.resolve_by_id(
            restaurant_id=restaurant_id, branch_id=branch_id
        )
        if not resolution.found:
            return self.public_menu_service.error_page(resolution)

        # Items carry a denormalized restaurant id; preview only what belongs to it
        resolution.items = [item for item in resolution.items if item.restaurant_id == restaurant_id]
        return self.public_menu_service.render_resolution(resolution, TemplateId.parse(template_id))


class PreviewSession:
    """The operator's current preview selection.

    Every new selection bumps a generation counter. A preview that finishes
    after the selection changed is dropped instead of replacing the newer
    selection's page.
    """

    def __init__(self, preview_service: PreviewService) -> None:
        """Initialize an empty session.

        Args:
            preview_service: Service used to render previews
        """
        self.preview_service = preview_service
        self.restaurant_id: str | None = None
        self.branch_id: str | None = None
        self.template_id: TemplateId = TemplateId.DEFAULT
        self.page: MenuPage | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def select(
        self,
        restaurant_id: str | None = None,
        branch_id: str | None = None,
        template_id: str | None = None,
    ) -> int:
        """Change the selection.

        Choosing another restaurant clears the branch, as in the admin picker.

        Args:
            restaurant_id: New restaurant, or None to keep the current one
            branch_id: New branch, or None to keep the current one
            template_id: New template, or None to keep the current one

        Returns:
            int: Generation number of the new selection
        """
        if restaurant_id is not None and restaurant_id != self.restaurant_id:
            self.restaurant_id = restaurant_id
            self.branch_id = None
        if branch_id is not None:
            self.branch_id = branch_id
        if template_id is not None:
            self.template_id = TemplateId.parse(template_id)

        self._generation += 1
        return self._generation

    async def refresh(self) -> bool:
        """Render the current selection.

        Returns:
            bool: True if the result was kept, False if there was nothing to
                render or the selection changed while rendering
        """
        if not self.restaurant_id or not self.branch_id:
            return False

        generation = self._generation
        page = await self.preview_service.preview(
            self.restaurant_id, self.branch_id, self.template_id.value
        )

        if generation != self._generation:
            logger.debug(
                f"Discarding stale preview for generation {generation}, current is {self._generation}"
            )
            return False

        self.page = page
        return True
