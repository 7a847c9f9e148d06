"""Service rendering public menu pages from URL path segments."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from menu_master.models.template_models import TemplateId
from menu_master.services.category_grouper import group_items
from menu_master.services.menu_resolver import (
    MenuResolution,
    MenuResolver,
    ResolutionStatus,
    parse_menu_path,
)
from menu_master.templates.dispatcher import TemplateDispatcher
from menu_master.templates.pages import render_document, render_not_found, render_unavailable

logger = logging.getLogger(__name__)


@dataclass
class MenuPage:
    """A rendered public menu page.

    Attributes:
        status: Resolution outcome the page reflects
        html: Complete HTML document
        template_id: Template used, None for error pages
        reason: Reason shown on error pages
    """

    status: ResolutionStatus
    html: str
    template_id: TemplateId | None = None
    reason: str | None = None


class PublicMenuService:
    """Runs the public menu pipeline: resolve, group, dispatch, render."""

    def __init__(self, resolver: MenuResolver, dispatcher: TemplateDispatcher) -> None:
        """Initialize the service.

        Args:
            resolver: Resolves URL segments to restaurant, branch and items
            dispatcher: Selects and runs the branch's template
        """
        self.resolver = resolver
        self.dispatcher = dispatcher

    async def render_menu(self, segments: Sequence[str]) -> MenuPage:
        """Render the public menu page for a URL path.

        The branch's stored template decides the layout; the template segment
        of the link does not override it.

        Args:
            segments: URL path segments, slug or legacy name form

        Returns:
            MenuPage with the rendered document or an error page
        """
        try:
            path = parse_menu_path(segments)
        except ValueError as e:
            logger.info(f"Rejected menu path {list(segments)}: {e}")
            return self.error_page(MenuResolution.not_found("invalid menu link"))

        resolution = await self.resolver.resolve(path)
        if not resolution.found:
            return self.error_page(resolution)

        return self.render_resolution(resolution, resolution.branch.template_id)

    def render_resolution(self, resolution: MenuResolution, template_id: TemplateId) -> MenuPage:
        """Group a resolved menu and render it with the given template.

        Args:
            resolution: A resolution whose status is RESOLVED
            template_id: Template to render with

        Returns:
            MenuPage with the rendered document
        """
        restaurant, branch = resolution.restaurant, resolution.branch
        grouped = group_items(resolution.items)
        body = self.dispatcher.render(template_id, restaurant, branch, grouped)

        return MenuPage(
            status=ResolutionStatus.RESOLVED,
            html=render_document(f"{restaurant.name} - {branch.name}", body),
            template_id=template_id,
        )

    def error_page(self, resolution: MenuResolution) -> MenuPage:
        """Render the error page matching a failed resolution."""
        if resolution.status is ResolutionStatus.STORE_FAILURE:
            html = render_unavailable(resolution.reason)
        else:
            html = render_not_found(resolution.reason)
        return MenuPage(status=resolution.status, html=html, reason=resolution.reason)
