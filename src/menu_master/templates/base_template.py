"""Base classes and shared helpers for menu templates.

Templates are pure presentation: they receive already-resolved, normalized data
and return an HTML fragment. Every template must:
- render a distinct empty state when no category is listed
- resolve image references through resolve_image_url and fall back to the
  placeholder graphic when the browser cannot load an image
- print prices through format_price
- HTML-escape all stored text
"""

import html
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Any

from menu_master.models.menu_models import Branch, MenuItem, Restaurant
from menu_master.models.template_models import TemplateId
from menu_master.services.category_grouper import MenuSection

IMAGE_URL_SCHEMES = ("http://", "https://")

EMPTY_MENU_TITLE = "No menu items"
EMPTY_MENU_MESSAGE = "This branch has no menu items yet"

_CSS_COLOR = re.compile(r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]{3,20})$")


@dataclass(frozen=True)
class RenderSettings:
    """Deployment-level rendering configuration.

    Attributes:
        storage_base_url: Public base URL of the image bucket
        currency_label: Label printed after every price
        placeholder_image: Image shown when an item image fails to load
    """

    storage_base_url: str
    currency_label: str = "IQD"
    placeholder_image: str = "/placeholder.svg"


@dataclass
class MenuContext:
    """Normalized data a category-based template renders from."""

    restaurant: Restaurant
    branch: Branch
    categorized_items: dict[str, list[MenuItem]]
    sorted_categories: list[str]


def escape(value: Any) -> str:
    """HTML-escape a possibly missing value."""
    return html.escape("" if value is None else str(value), quote=True)


def format_price(value: Decimal | int | float | None, currency_label: str = "IQD") -> str:
    """Format a price with thousands separators followed by the currency label.

    Args:
        value: Price amount
        currency_label: Currency shown after the amount

    Returns:
        e.g. "5,000 IQD" or "12.5 IQD"
    """
    amount = Decimal(str(value if value is not None else 0))
    if amount.is_finite() and amount == amount.to_integral_value():
        text = f"{int(amount):,}"
    else:
        # toLocaleString-style: at most three fraction digits, no trailing zeros
        with localcontext() as context:
            # Stored numbers carry up to 38 digits
            context.prec = max(context.prec, len(amount.as_tuple().digits) + 3)
            rounded = amount.quantize(Decimal("0.001")).normalize()
        text = f"{rounded:,f}"
    return f"{text} {currency_label}"


def resolve_image_url(image: str | None, storage_base_url: str) -> str:
    """Turn a stored image reference into a displayable URL.

    Absolute http(s) URLs pass through; anything else is treated as a key in
    the public image bucket.

    Args:
        image: Stored image URL or storage key
        storage_base_url: Public base URL of the image bucket

    Returns:
        Displayable URL, or an empty string when there is no image
    """
    if not image:
        return ""
    if image.lower().startswith(IMAGE_URL_SCHEMES):
        return image
    return f"{storage_base_url.rstrip('/')}/{image.lstrip('/')}"


def safe_color(value: Any, default: str) -> str:
    """Return a CSS color from template settings, or the default if it looks unsafe."""
    if isinstance(value, str) and _CSS_COLOR.match(value.strip()):
        return value.strip()
    return default


class _TemplateHelpers:
    """Rendering helpers shared by both template families."""

    template_id: TemplateId

    def __init__(self, settings: RenderSettings) -> None:
        """Initialize the template.

        Args:
            settings: Deployment-level rendering configuration
        """
        self.settings = settings

    def price(self, value: Decimal | int | float | None) -> str:
        return escape(format_price(value, self.settings.currency_label))

    def image_tag(self, image: str | None, alt: str, css_class: str) -> str:
        """Render an <img> that swaps to the placeholder if it fails to load."""
        src = resolve_image_url(image, self.settings.storage_base_url)
        if not src:
            return ""
        placeholder = escape(self.settings.placeholder_image)
        return (
            f'<img src="{escape(src)}" alt="{escape(alt)}" class="{css_class}" '
            f"onerror=\"this.onerror=null;this.src='{placeholder}';\">"
        )

    def item_image(self, item: MenuItem, css_class: str, icon: str = "&#127869;") -> str:
        """Render an item image, or an icon tile when the item has none."""
        tag = self.image_tag(item.image, item.name, css_class)
        return tag or f'<div class="{css_class} menu-image-placeholder">{icon}</div>'

    def item_key(self, item: MenuItem) -> str:
        return escape(item.id)

    def branch_footer(self, branch: Branch, css_class: str) -> str:
        """Render the location and delivery price footer line."""
        return (
            f'<footer class="{css_class}">'
            f'<span class="menu-location">{escape(branch.state)} - {escape(branch.location)}</span>'
            f'<span class="menu-delivery">Delivery: {self.price(branch.delivery_price)}</span>'
            "</footer>"
        )

    def empty_state(self, css_class: str) -> str:
        """Render the "no menu items yet" state."""
        return (
            f'<div class="menu-empty {css_class}" data-template="{self.template_id.value}">'
            f"<h3>{EMPTY_MENU_TITLE}</h3>"
            f"<p>{EMPTY_MENU_MESSAGE}</p>"
            "</div>"
        )


class MenuTemplate(_TemplateHelpers, ABC):
    """Abstract base class for templates rendering categorized items.

    Subclasses set template_id and implement render_menu; render handles the
    empty state so subclasses only deal with a non-empty menu.
    """

    empty_css_class = "menu-empty-default"

    def render(self, context: MenuContext) -> str:
        """Render the menu, or the empty state when no category is listed.

        Args:
            context: Restaurant, branch and grouped items

        Returns:
            str: HTML fragment
        """
        if not context.sorted_categories:
            return self.empty_state(self.empty_css_class)
        return self.render_menu(context)

    @abstractmethod
    def render_menu(self, context: MenuContext) -> str:
        """Render a menu with at least one listed category.

        Args:
            context: Restaurant, branch and grouped items

        Returns:
            str: HTML fragment
        """
        pass


class SectionedMenuTemplate(_TemplateHelpers, ABC):
    """Abstract base class for templates rendering an ordered list of sections."""

    empty_css_class = "menu-empty-sectioned"

    def render(self, restaurant: Restaurant, branch: Branch, sections: list[MenuSection]) -> str:
        """Render the sections, or the empty state when there are none.

        Args:
            restaurant: Owning restaurant
            branch: Branch being rendered
            sections: Ordered category sections

        Returns:
            str: HTML fragment
        """
        if not sections:
            return self.empty_state(self.empty_css_class)
        return self.render_sections(restaurant, branch, sections)

    @abstractmethod
    def render_sections(
        self, restaurant: Restaurant, branch: Branch, sections: list[MenuSection]
    ) -> str:
        """Render a non-empty list of sections.

        Args:
            restaurant: Owning restaurant
            branch: Branch being rendered
            sections: Ordered category sections

        Returns:
            str: HTML fragment
        """
        pass
