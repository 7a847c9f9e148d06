"""Fast Food Dark template: dark background, orange brush-stroke headings."""

from menu_master.models.template_models import TemplateId
from menu_master.templates.base_template import MenuContext, MenuTemplate, escape

DEFAULT_TAGLINE = "Fresh and delicious, made with premium ingredients"

CATEGORY_ICONS = {
    "pizza": "&#127829;",
    "beverages": "&#9749;",
    "desserts": "&#127850;",
}
FALLBACK_ICON = "&#127869;"


def category_icon(category: str) -> str:
    return CATEGORY_ICONS.get(category.lower(), FALLBACK_ICON)


class FastFoodDarkTemplate(MenuTemplate):
    """Three-column dark layout with an icon per category."""

    template_id = TemplateId.FAST_FOOD_DARK
    empty_css_class = "menu-empty-dark"

    def render_menu(self, context: MenuContext) -> str:
        header = (
            '<header class="ffd-header">'
            '<h2 class="ffd-brush ffd-brush-left">FAST FOOD</h2>'
            '<h1 class="ffd-brush ffd-brush-right">MENU</h1>'
            f'<p class="ffd-subtitle">{escape(context.restaurant.name)} &bull; '
            f"{escape(context.branch.name)}</p>"
            "</header>"
        )

        columns = []
        for category in context.sorted_categories:
            icon = category_icon(category)
            rows = "".join(
                f'<div class="ffd-item" data-key="{self.item_key(item)}">'
                f"{self.item_image(item, 'ffd-item-image', icon)}"
                '<div class="ffd-item-line">'
                f'<h4 class="ffd-item-name">{escape(item.name)}</h4>'
                f'<span class="ffd-item-price">{self.price(item.price)}</span>'
                "</div>"
                f'<p class="ffd-item-description">{escape(item.description or DEFAULT_TAGLINE)}</p>'
                "</div>"
                for item in context.categorized_items.get(category, [])
            )
            columns.append(
                f'<section class="ffd-category" data-key="{escape(category)}">'
                f'<h3 class="ffd-category-title"><span class="ffd-icon">{icon}</span>'
                f"{escape(category.upper())}</h3>"
                f"{rows}"
                f'<div class="ffd-category-badge">{icon}</div>'
                "</section>"
            )

        return (
            '<div class="menu menu-fast-food-dark">'
            f"{header}"
            f'<div class="ffd-grid">{"".join(columns)}</div>'
            f"{self.branch_footer(context.branch, 'ffd-footer')}"
            "</div>"
        )
