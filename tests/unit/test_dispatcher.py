"""Unit tests for template dispatch and error pages."""

import pytest

from menu_master.models.menu_models import Branch, MenuItem, Restaurant
from menu_master.models.template_models import TemplateId
from menu_master.services.category_grouper import group_items
from menu_master.templates.base_template import EMPTY_MENU_TITLE, RenderSettings
from menu_master.templates.dispatcher import TemplateDispatcher
from menu_master.templates.pages import render_document, render_not_found, render_unavailable


@pytest.mark.unit
class TestTemplateDispatcher:
    """Test suite for TemplateDispatcher."""

    @pytest.fixture
    def dispatcher(self, render_settings: RenderSettings) -> TemplateDispatcher:
        """Create a dispatcher with test rendering settings."""
        return TemplateDispatcher(render_settings)

    @pytest.mark.parametrize("template_id", list(TemplateId))
    def test_each_template_is_dispatched(
        self,
        dispatcher: TemplateDispatcher,
        template_id: TemplateId,
        restaurant: Restaurant,
        branch: Branch,
        menu_items: list[MenuItem],
    ) -> None:
        """Test that each identifier selects exactly its own template."""
        html = dispatcher.render(template_id, restaurant, branch, group_items(menu_items))

        assert f"menu-{template_id.value}" in html
        for other in TemplateId:
            if other is not template_id:
                assert f'class="menu menu-{other.value}"' not in html

    @pytest.mark.parametrize("template_id", [None, "", "neon-disco", "DEFAULT"])
    def test_unknown_identifiers_use_default(
        self,
        dispatcher: TemplateDispatcher,
        template_id: str | None,
        restaurant: Restaurant,
        branch: Branch,
        menu_items: list[MenuItem],
    ) -> None:
        """Test that unknown or missing identifiers fall back to the default template."""
        html = dispatcher.render(template_id, restaurant, branch, group_items(menu_items))

        assert "menu-default" in html

    def test_string_identifier_is_parsed(
        self,
        dispatcher: TemplateDispatcher,
        restaurant: Restaurant,
        branch: Branch,
        menu_items: list[MenuItem],
    ) -> None:
        """Test that stored string identifiers select their template."""
        html = dispatcher.render("rustic-wood", restaurant, branch, group_items(menu_items))

        assert "menu-rustic-wood" in html

    def test_sectioned_template_receives_sections(
        self,
        dispatcher: TemplateDispatcher,
        restaurant: Restaurant,
        branch: Branch,
        menu_items: list[MenuItem],
    ) -> None:
        """Test that the sectioned template gets canonically ordered sections."""
        html = dispatcher.render(
            TemplateId.HELLO_CHICKEN, restaurant, branch, group_items(menu_items)
        )

        assert html.index("Appetizers") < html.index("Desserts")

    @pytest.mark.parametrize("template_id", list(TemplateId))
    def test_empty_menu_renders_empty_state(
        self,
        dispatcher: TemplateDispatcher,
        template_id: TemplateId,
        restaurant: Restaurant,
        branch: Branch,
    ) -> None:
        """Test that every template shows the empty state for an empty menu."""
        html = dispatcher.render(template_id, restaurant, branch, group_items([]))

        assert EMPTY_MENU_TITLE in html


@pytest.mark.unit
class TestPages:
    """Test suite for document and error pages."""

    def test_render_document_escapes_title(self) -> None:
        """Test that the document title is escaped."""
        html = render_document("Tom & Jerry", "<p>body</p>")

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Tom &amp; Jerry</title>" in html
        assert "<p>body</p>" in html

    def test_render_not_found_shows_reason(self) -> None:
        """Test the not-found page."""
        html = render_not_found("restaurant not found")

        assert "Menu Not Found" in html
        assert "Restaurant not found." in html

    def test_render_not_found_without_reason(self) -> None:
        """Test the not-found page without a reason."""
        html = render_not_found(None)

        assert "Menu Not Found" in html
        assert "menu-error-reason" not in html

    def test_render_unavailable(self) -> None:
        """Test the page shown on store failures."""
        html = render_unavailable("failed to load restaurants, please try again")

        assert "Temporarily Unavailable" in html
        assert "please try again" in html
