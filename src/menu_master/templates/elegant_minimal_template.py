"""Elegant Minimal template: cream background, serif type, circular photos.

Beverages and Desserts are shown as a compact two-column price list below the
featured categories.
"""

from menu_master.models.template_models import TemplateId
from menu_master.templates.base_template import MenuContext, MenuTemplate, escape

SIMPLE_LIST_CATEGORIES = ("Beverages", "Desserts")
DEFAULT_DESCRIPTION = "Expertly prepared with the finest ingredients and traditional techniques."


class ElegantMinimalTemplate(MenuTemplate):
    template_id = TemplateId.ELEGANT_MINIMAL
    empty_css_class = "menu-empty-elegant"

    def render_menu(self, context: MenuContext) -> str:
        featured = [c for c in context.sorted_categories if c not in SIMPLE_LIST_CATEGORIES]
        simple = [c for c in context.sorted_categories if c in SIMPLE_LIST_CATEGORIES]

        header = (
            '<header class="elegant-header">'
            f'<span class="elegant-branch">&#10022; {escape(context.branch.name)} &#10022;</span>'
            "<h1>FOOD MENU</h1>"
            f'<p class="elegant-restaurant">{escape(context.restaurant.name)}</p>'
            "</header>"
        )

        featured_html = "".join(self._featured_category(context, category) for category in featured)

        simple_html = ""
        if simple:
            lists = "".join(self._simple_category(context, category) for category in simple)
            simple_html = f'<div class="elegant-simple-lists">{lists}</div>'

        return (
            '<div class="menu menu-elegant-minimal">'
            f"{header}{featured_html}{simple_html}"
            f"{self.branch_footer(context.branch, 'elegant-footer')}"
            "</div>"
        )

    def _featured_category(self, context: MenuContext, category: str) -> str:
        rows = "".join(
            f'<div class="elegant-item" data-key="{self.item_key(item)}">'
            f"{self.item_image(item, 'elegant-item-image rounded-full')}"
            '<div class="elegant-item-text">'
            f"<h3>{escape(item.name)}</h3>"
            f'<p class="elegant-item-price">{self.price(item.price)}</p>'
            f'<p class="elegant-item-description">{escape(item.description or DEFAULT_DESCRIPTION)}</p>'
            "</div>"
            "</div>"
            for item in context.categorized_items.get(category, [])
        )
        return (
            f'<section class="elegant-category" data-key="{escape(category)}">'
            f"<h2>&mdash; {escape(category)} &mdash;</h2>"
            f'<div class="elegant-items">{rows}</div>'
            "</section>"
        )

    def _simple_category(self, context: MenuContext, category: str) -> str:
        rows = "".join(
            f'<li data-key="{self.item_key(item)}">'
            f"{self.image_tag(item.image, item.name, 'elegant-thumb')}"
            f"<span>{escape(item.name)}</span>"
            f"<span>{self.price(item.price)}</span>"
            "</li>"
            for item in context.categorized_items.get(category, [])
        )
        return (
            f'<section class="elegant-simple" data-key="{escape(category)}">'
            f"<h3>{escape(category)}</h3><ul>{rows}</ul>"
            "</section>"
        )
