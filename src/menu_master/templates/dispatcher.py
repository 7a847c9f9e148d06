"""Selection of the template a menu is rendered with."""

import logging

from menu_master.models.menu_models import Branch, Restaurant
from menu_master.models.template_models import TemplateId
from menu_master.observability.metrics import record_render
from menu_master.services.category_grouper import GroupedMenu, to_sections
from menu_master.templates.base_template import MenuContext, MenuTemplate, RenderSettings
from menu_master.templates.default_template import DefaultTemplate
from menu_master.templates.elegant_minimal_template import ElegantMinimalTemplate
from menu_master.templates.fast_food_dark_template import FastFoodDarkTemplate
from menu_master.templates.hello_chicken_template import HelloChickenTemplate
from menu_master.templates.playful_cream_template import PlayfulCreamTemplate
from menu_master.templates.rustic_wood_template import RusticWoodTemplate

logger = logging.getLogger(__name__)


class TemplateDispatcher:
    """Routes a template identifier to exactly one template.

    Category-based templates are held in an explicit lookup table; the
    sectioned Hello Chicken template gets its input reshaped here. Unknown,
    empty and "default" identifiers all land on the default template.
    """

    def __init__(self, settings: RenderSettings) -> None:
        """Initialize the dispatcher and its templates.

        Args:
            settings: Deployment-level rendering configuration
        """
        self.settings = settings
        self.default_template = DefaultTemplate(settings)
        self.sectioned_template = HelloChickenTemplate(settings)
        self.templates: dict[TemplateId, MenuTemplate] = {
            TemplateId.DEFAULT: self.default_template,
            TemplateId.RUSTIC_WOOD: RusticWoodTemplate(settings),
            TemplateId.ELEGANT_MINIMAL: ElegantMinimalTemplate(settings),
            TemplateId.FAST_FOOD_DARK: FastFoodDarkTemplate(settings),
            TemplateId.PLAYFUL_CREAM: PlayfulCreamTemplate(settings),
        }

    def render(
        self,
        template_id: TemplateId | str | None,
        restaurant: Restaurant,
        branch: Branch,
        grouped: GroupedMenu,
    ) -> str:
        """Render a grouped menu with the requested template.

        Args:
            template_id: Template identifier; anything unknown means default
            restaurant: Resolved restaurant
            branch: Resolved branch
            grouped: Items grouped and ordered by category

        Returns:
            str: HTML fragment produced by the selected template
        """
        selected = template_id if isinstance(template_id, TemplateId) else TemplateId.parse(template_id)
        if selected.value != template_id and template_id not in (None, ""):
            logger.debug(f"Template {template_id!r} is not known, using {selected.value}")

        record_render(selected.value)

        if selected is TemplateId.HELLO_CHICKEN:
            return self.sectioned_template.render(restaurant, branch, to_sections(grouped))

        template = self.templates.get(selected, self.default_template)
        context = MenuContext(
            restaurant=restaurant,
            branch=branch,
            categorized_items=grouped.categorized_items,
            sorted_categories=grouped.sorted_categories,
        )
        return template.render(context)
