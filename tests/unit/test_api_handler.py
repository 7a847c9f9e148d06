"""Unit tests for the FastAPI public and admin endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from menu_master.handlers.api_handler import RETRY_AFTER_SECONDS, create_app
from menu_master.models.template_models import TemplateId
from menu_master.services.dashboard_service import DashboardService, DashboardStats
from menu_master.services.menu_resolver import ResolutionStatus
from menu_master.services.preview_service import PreviewService
from menu_master.services.public_menu_service import MenuPage, PublicMenuService
from menu_master.services.template_service import (
    ApplyTemplateFailure,
    ApplyTemplateResult,
    BranchLink,
    BranchListFailure,
    BranchListResult,
    TemplateService,
)

API_KEY = "test-api-key"
HEADERS = {"X-API-Key": API_KEY}


@pytest.fixture
def services() -> dict[str, MagicMock]:
    """Create mocked services for the application."""
    public_menu_service = MagicMock(spec=PublicMenuService)
    public_menu_service.render_menu = AsyncMock(
        return_value=MenuPage(
            status=ResolutionStatus.RESOLVED,
            html="<html>menu</html>",
            template_id=TemplateId.DEFAULT,
        )
    )
    template_service = MagicMock(spec=TemplateService)
    template_service.apply_template = AsyncMock()
    template_service.list_branch_links = AsyncMock()
    preview_service = MagicMock(spec=PreviewService)
    preview_service.preview = AsyncMock(
        return_value=MenuPage(status=ResolutionStatus.RESOLVED, html="<html>preview</html>")
    )
    dashboard_service = MagicMock(spec=DashboardService)
    dashboard_service.get_stats = AsyncMock()
    return {
        "public_menu_service": public_menu_service,
        "template_service": template_service,
        "preview_service": preview_service,
        "dashboard_service": dashboard_service,
    }


@pytest.fixture
def client(services: dict[str, MagicMock]) -> TestClient:
    """Create a test client with mocked dependencies."""
    return TestClient(create_app(**services, api_keys=[API_KEY]))


@pytest.mark.unit
class TestHealthEndpoint:
    """Test suite for health check endpoint."""

    def test_health_check(self, client: TestClient) -> None:
        """Test health check endpoint returns 200."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


@pytest.mark.unit
class TestPublicMenuEndpoints:
    """Test suite for public menu pages."""

    def test_slug_link(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        """Test the two-segment slug link."""
        response = client.get("/burger-house/downtown")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.text == "<html>menu</html>"
        services["public_menu_service"].render_menu.assert_awaited_once_with(
            ["burger-house", "downtown"]
        )

    def test_slug_link_with_template(
        self, client: TestClient, services: dict[str, MagicMock]
    ) -> None:
        """Test the three-segment link."""
        response = client.get("/burger-house/downtown/fast-food-dark")

        assert response.status_code == 200
        services["public_menu_service"].render_menu.assert_awaited_once_with(
            ["burger-house", "downtown", "fast-food-dark"]
        )

    def test_legacy_link_passes_raw_names(
        self, client: TestClient, services: dict[str, MagicMock]
    ) -> None:
        """Test that percent-encoded names arrive decoded."""
        client.get("/Burger%20House/Downtown/menu")

        services["public_menu_service"].render_menu.assert_awaited_once_with(
            ["Burger House", "Downtown", "menu"]
        )

    def test_not_found(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        """Test that unresolved links return 404 with the error page."""
        services["public_menu_service"].render_menu.return_value = MenuPage(
            status=ResolutionStatus.NOT_FOUND, html="<html>not found</html>"
        )

        response = client.get("/nowhere/downtown")

        assert response.status_code == 404
        assert response.text == "<html>not found</html>"

    def test_store_failure(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        """Test that store failures return 503 with Retry-After."""
        services["public_menu_service"].render_menu.return_value = MenuPage(
            status=ResolutionStatus.STORE_FAILURE, html="<html>unavailable</html>"
        )

        response = client.get("/burger-house/downtown")

        assert response.status_code == 503
        assert response.headers["retry-after"] == str(RETRY_AFTER_SECONDS)


@pytest.mark.unit
class TestAdminEndpoints:
    """Test suite for admin endpoints."""

    def test_admin_routes_require_api_key(self, client: TestClient) -> None:
        """Test that admin endpoints reject requests without a key."""
        response = client.get("/admin/templates")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing API key"

    def test_admin_routes_reject_invalid_key(self, client: TestClient) -> None:
        """Test that admin endpoints reject unknown keys."""
        response = client.get("/admin/templates", headers={"X-API-Key": "wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid API key"

    def test_list_templates(self, client: TestClient) -> None:
        """Test listing the template catalog."""
        response = client.get("/admin/templates", headers=HEADERS)

        assert response.status_code == 200
        ids = [template["id"] for template in response.json()]
        assert ids == [template.value for template in TemplateId]

    def test_apply_template(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        """Test applying a template returns the public link."""
        services["template_service"].apply_template.return_value = ApplyTemplateResult(
            success=True,
            branch_id="branch_1",
            template_id="rustic-wood",
            public_url="https://menus.example.com/burger-house/downtown/rustic-wood",
        )

        response = client.put(
            "/admin/branches/branch_1/template",
            headers=HEADERS,
            json={"template_id": "rustic-wood"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "branch_id": "branch_1",
            "template_id": "rustic-wood",
            "public_url": "https://menus.example.com/burger-house/downtown/rustic-wood",
        }
        services["template_service"].apply_template.assert_awaited_once_with(
            branch_id="branch_1", template_id="rustic-wood"
        )

    @pytest.mark.parametrize(
        ("failure", "status_code"),
        [
            (ApplyTemplateFailure.UNKNOWN_TEMPLATE, 400),
            (ApplyTemplateFailure.BRANCH_NOT_FOUND, 404),
            (ApplyTemplateFailure.STORE_FAILURE, 502),
        ],
    )
    def test_apply_template_failures(
        self,
        client: TestClient,
        services: dict[str, MagicMock],
        failure: ApplyTemplateFailure,
        status_code: int,
    ) -> None:
        """Test that each failure kind maps to its status code."""
        services["template_service"].apply_template.return_value = ApplyTemplateResult(
            success=False,
            branch_id="branch_1",
            template_id="x",
            failure=failure,
            error_message="nope",
        )

        response = client.put(
            "/admin/branches/branch_1/template", headers=HEADERS, json={"template_id": "x"}
        )

        assert response.status_code == status_code
        assert response.json()["detail"] == "nope"

    def test_list_branches(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        """Test listing branches with their published state and link."""
        services["template_service"].list_branch_links.return_value = BranchListResult(
            success=True,
            restaurant_id="rest_1",
            branches=[
                BranchLink(
                    branch_id="branch_1",
                    name="Downtown",
                    state="Baghdad",
                    active_template="rustic-wood",
                    published=True,
                    has_custom_template=True,
                    public_url="https://menus.example.com/burger-house/downtown/rustic-wood",
                ),
                BranchLink(
                    branch_id="branch_2",
                    name="Uptown",
                    state="Baghdad",
                    active_template=None,
                    published=False,
                    has_custom_template=False,
                ),
            ],
        )

        response = client.get("/admin/restaurants/rest_1/branches", headers=HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert [b["branch_id"] for b in body] == ["branch_1", "branch_2"]
        assert body[0]["public_url"].endswith("/downtown/rustic-wood")
        assert body[1]["published"] is False
        assert body[1]["public_url"] is None
        services["template_service"].list_branch_links.assert_awaited_once_with("rest_1")

    @pytest.mark.parametrize(
        ("failure", "status_code"),
        [(BranchListFailure.RESTAURANT_NOT_FOUND, 404), (BranchListFailure.STORE_FAILURE, 502)],
    )
    def test_list_branches_failures(
        self,
        client: TestClient,
        services: dict[str, MagicMock],
        failure: BranchListFailure,
        status_code: int,
    ) -> None:
        """Test that each listing failure maps to its status code."""
        services["template_service"].list_branch_links.return_value = BranchListResult(
            success=False, restaurant_id="rest_1", failure=failure, error_message="nope"
        )

        response = client.get("/admin/restaurants/rest_1/branches", headers=HEADERS)

        assert response.status_code == status_code
        assert response.json()["detail"] == "nope"

    def test_list_branches_requires_api_key(self, client: TestClient) -> None:
        """Test that the branch list is an admin endpoint."""
        response = client.get("/admin/restaurants/rest_1/branches")

        assert response.status_code == 401

    def test_preview(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        """Test previewing a branch menu."""
        response = client.get(
            "/admin/preview",
            headers=HEADERS,
            params={"restaurant_id": "rest_1", "branch_id": "branch_1", "template_id": "default"},
        )

        assert response.status_code == 200
        assert response.text == "<html>preview</html>"
        services["preview_service"].preview.assert_awaited_once_with(
            "rest_1", "branch_1", "default"
        )

    def test_preview_requires_ids(self, client: TestClient) -> None:
        """Test that previews need both identifiers."""
        response = client.get("/admin/preview", headers=HEADERS, params={"restaurant_id": "r"})

        assert response.status_code == 422

    def test_dashboard(self, client: TestClient, services: dict[str, MagicMock]) -> None:
        """Test dashboard statistics."""
        services["dashboard_service"].get_stats.return_value = DashboardStats(
            restaurant_count=2, branch_count=3, menu_item_count=10, published_branch_count=1
        )

        response = client.get("/admin/dashboard", headers=HEADERS)

        assert response.status_code == 200
        assert response.json()["menu_item_count"] == 10

    def test_dashboard_store_failure(
        self, client: TestClient, services: dict[str, MagicMock]
    ) -> None:
        """Test that a failed dashboard read returns 503."""
        services["dashboard_service"].get_stats.return_value = None

        response = client.get("/admin/dashboard", headers=HEADERS)

        assert response.status_code == 503

    def test_admin_paths_are_not_menu_links(
        self, client: TestClient, services: dict[str, MagicMock]
    ) -> None:
        """Test that admin routes take precedence over two-segment menu links."""
        client.get("/admin/templates", headers=HEADERS)

        services["public_menu_service"].render_menu.assert_not_called()
