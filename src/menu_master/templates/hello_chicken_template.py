"""Hello Chicken template: bold red sections, Arabic-friendly typography.

Unlike the other templates this one consumes ordered sections and takes its
colors from the branch's template settings (primaryColor, accentColor).
"""

from menu_master.models.menu_models import Branch, Restaurant
from menu_master.models.template_models import TemplateId
from menu_master.services.category_grouper import MenuSection
from menu_master.templates.base_template import SectionedMenuTemplate, escape, safe_color

DEFAULT_PRIMARY_COLOR = "#d0021b"
DEFAULT_ACCENT_COLOR = "#fff"


class HelloChickenTemplate(SectionedMenuTemplate):
    template_id = TemplateId.HELLO_CHICKEN
    empty_css_class = "menu-empty-hello-chicken"

    def render_sections(
        self, restaurant: Restaurant, branch: Branch, sections: list[MenuSection]
    ) -> str:
        settings = branch.template_settings
        primary = safe_color(settings.get("primaryColor"), DEFAULT_PRIMARY_COLOR)
        accent = safe_color(settings.get("accentColor"), DEFAULT_ACCENT_COLOR)

        logo = self.image_tag(restaurant.logo, "Logo", "hc-logo")
        header = (
            '<header class="hc-header">'
            f"{logo}"
            f'<h1 style="color: {accent}">{escape(restaurant.name)}</h1>'
            f"<h2>{escape(branch.name)}</h2>"
            "</header>"
        )

        blocks = []
        for index, section in enumerate(sections):
            cards = []
            for item in section.items:
                description = ""
                if item.description:
                    description = f'<div class="hc-item-description" dir="rtl">{escape(item.description)}</div>'
                cards.append(
                    f'<div class="hc-item" data-key="{self.item_key(item)}">'
                    f"{self.image_tag(item.image, item.name, 'hc-item-image')}"
                    f'<div class="hc-item-name" style="color: {primary}">{escape(item.name)}</div>'
                    f"{description}"
                    f'<div class="hc-item-price">{self.price(item.price)}</div>'
                    "</div>"
                )
            blocks.append(
                f'<section class="hc-section" data-key="{escape(section.title)}-{index}">'
                f'<h3 style="color: {primary}">{escape(section.title)}</h3>'
                f'<div class="hc-items">{"".join(cards)}</div>'
                "</section>"
            )

        return (
            '<div class="menu menu-hello-chicken" '
            f'style="background: radial-gradient(circle at 20% 10%, #ffe5e5 0%, {primary} 100%); '
            f"color: {accent}; font-family: Cairo, Arial, sans-serif\">"
            f"{header}"
            f'<div class="hc-grid">{"".join(blocks)}</div>'
            '<footer class="hc-footer"><span>Powered by Menu Master</span></footer>'
            "</div>"
        )
