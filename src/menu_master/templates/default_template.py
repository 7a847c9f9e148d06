"""Default menu template: clean card layout, always available."""

from menu_master.models.template_models import TemplateId
from menu_master.templates.base_template import MenuContext, MenuTemplate, escape


class DefaultTemplate(MenuTemplate):
    """Card-per-category layout used when no other template is selected."""

    template_id = TemplateId.DEFAULT
    empty_css_class = "menu-empty-default card"

    def render_menu(self, context: MenuContext) -> str:
        branch = context.branch
        branch_image = self.image_tag(branch.image, "Branch", "branch-image")

        header = (
            '<header class="menu-header card">'
            f"{branch_image}"
            f'<h2 class="restaurant-name">{escape(context.restaurant.name)}</h2>'
            f'<p class="branch-name">{escape(branch.name)}</p>'
            f"{self.branch_footer(branch, 'branch-details')}"
            "</header>"
        )

        cards = []
        for category in context.sorted_categories:
            rows = "".join(
                f'<li class="menu-item" data-key="{self.item_key(item)}">'
                f"{self.item_image(item, 'item-image')}"
                f'<span class="item-name">{escape(item.name)}</span>'
                f'<span class="item-price">{self.price(item.price)}</span>'
                "</li>"
                for item in context.categorized_items.get(category, [])
            )
            cards.append(
                f'<section class="menu-category card" data-key="{escape(category)}">'
                f'<h3 class="category-title">{escape(category)}</h3>'
                f'<ul class="menu-items">{rows}</ul>'
                "</section>"
            )

        return f'<div class="menu menu-default">{header}{"".join(cards)}</div>'
