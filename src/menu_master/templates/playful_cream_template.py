"""Playful Cream template: colorful cards, the first category highlighted."""

from menu_master.models.template_models import TemplateId
from menu_master.templates.base_template import MenuContext, MenuTemplate, escape

CATEGORY_ICONS = {
    "pizza": "&#127829;",
    "beverages": "&#9749;",
    "sandwiches": "&#129386;",
}
FALLBACK_ICON = "&#127869;"


class PlayfulCreamTemplate(MenuTemplate):
    template_id = TemplateId.PLAYFUL_CREAM
    empty_css_class = "menu-empty-playful"

    def render_menu(self, context: MenuContext) -> str:
        header = (
            '<header class="playful-header">'
            f'<p class="playful-branch">{escape(context.branch.name)}</p>'
            '<span class="playful-title">Menu</span>'
            f'<span class="playful-restaurant">{escape(context.restaurant.name)}</span>'
            "</header>"
        )

        cards = []
        for index, category in enumerate(context.sorted_categories):
            icon = CATEGORY_ICONS.get(category.lower(), FALLBACK_ICON)
            special = index == 0
            rows = "".join(
                f'<div class="playful-item" data-key="{self.item_key(item)}">'
                f"{self.item_image(item, 'playful-item-image', icon)}"
                '<div class="playful-item-text">'
                f'<h4>{escape(item.name)} <span class="playful-star">&#9733;</span></h4>'
                f'<span class="playful-item-price">{self.price(item.price)}</span>'
                '<p class="playful-item-description">'
                f"{escape(item.description or f'Delicious {item.name.lower()} with fresh ingredients')}"
                "</p>"
                "</div>"
                "</div>"
                for item in context.categorized_items.get(category, [])
            )
            stars = '<p class="playful-stars">&#9733; &#9733; &#9733; &#9733; &#9733;</p>' if special else ""
            card_class = "playful-card playful-card-special" if special else "playful-card"
            cards.append(
                f'<section class="{card_class}" data-key="{escape(category)}">'
                f"{stars}<h3>{escape(category)}</h3>"
                '<h4 class="playful-card-subtitle">Menu</h4>'
                f"{rows}"
                "</section>"
            )

        return (
            '<div class="menu menu-playful-cream">'
            f"{header}"
            f'<div class="playful-grid">{"".join(cards)}</div>'
            f"{self.branch_footer(context.branch, 'playful-footer')}"
            "</div>"
        )
