"""Rustic Wood template: wood texture background, red banner, gold prices."""

from menu_master.models.template_models import TemplateId
from menu_master.templates.base_template import MenuContext, MenuTemplate, escape

WOOD_TEXTURE_URL = "https://images.unsplash.com/photo-1558618666-fcd25c85cd64?w=1200"


class RusticWoodTemplate(MenuTemplate):
    template_id = TemplateId.RUSTIC_WOOD
    empty_css_class = "menu-empty-rustic"

    def render_menu(self, context: MenuContext) -> str:
        sections = []
        for category in context.sorted_categories:
            rows = "".join(
                f'<div class="rustic-item" data-key="{self.item_key(item)}">'
                '<div class="rustic-item-text">'
                f'<h3 class="rustic-item-name">{escape(item.name)}</h3>'
                f'<span class="rustic-item-price">{self.price(item.price)}</span>'
                '<p class="rustic-item-description">'
                f"{escape(item.description or f'Delicious {item.name.lower()} prepared with fresh ingredients')}"
                "</p>"
                "</div>"
                f"{self.item_image(item, 'rustic-item-image')}"
                "</div>"
                for item in context.categorized_items.get(category, [])
            )
            sections.append(
                f'<section class="rustic-category" data-key="{escape(category)}">'
                f'<h2 class="rustic-category-title">{escape(category)}</h2>'
                f'<div class="rustic-items">{rows}</div>'
                "</section>"
            )

        return (
            f'<div class="menu menu-rustic-wood" style="background-image: url(\'{WOOD_TEXTURE_URL}\')">'
            f'<header class="rustic-banner"><h1>{escape(context.restaurant.name)}</h1></header>'
            f'<div class="rustic-content">{"".join(sections)}</div>'
            f"{self.branch_footer(context.branch, 'rustic-footer')}"
            "</div>"
        )
