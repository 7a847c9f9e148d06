"""FastAPI application serving public menus and the admin API."""

import logging

from fastapi import Depends, FastAPI, Header, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from menu_master.auth.admin_auth import AdminKeyValidator, require_admin_key
from menu_master.models.template_models import TEMPLATE_CATALOG, TemplateInfo
from menu_master.services.dashboard_service import DashboardService, DashboardStats
from menu_master.services.menu_resolver import ResolutionStatus
from menu_master.services.preview_service import PreviewService
from menu_master.services.public_menu_service import MenuPage, PublicMenuService
from menu_master.services.template_service import (
    ApplyTemplateFailure,
    BranchListFailure,
    TemplateService,
)

logger = logging.getLogger(__name__)

# Seconds a client should wait before retrying after a store failure
RETRY_AFTER_SECONDS = 5

_FAILURE_STATUS_CODES = {
    ApplyTemplateFailure.UNKNOWN_TEMPLATE: 400,
    ApplyTemplateFailure.BRANCH_NOT_FOUND: 404,
    ApplyTemplateFailure.STORE_FAILURE: 502,
}

_BRANCH_LIST_STATUS_CODES = {
    BranchListFailure.RESTAURANT_NOT_FOUND: 404,
    BranchListFailure.STORE_FAILURE: 502,
}


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class ApplyTemplateRequest(BaseModel):
    """Request body for applying a template to a branch."""

    template_id: str


class ApplyTemplateResponse(BaseModel):
    """Response model for a successful template application."""

    branch_id: str
    template_id: str
    public_url: str


class BranchLinkResponse(BaseModel):
    """A branch with its publication state and public menu link."""

    branch_id: str
    name: str
    state: str
    active_template: str | None
    published: bool
    has_custom_template: bool
    public_url: str | None


def menu_page_response(page: MenuPage) -> HTMLResponse:
    """Translate a rendered menu page into an HTTP response."""
    if page.status is ResolutionStatus.RESOLVED:
        return HTMLResponse(page.html)

    if page.status is ResolutionStatus.STORE_FAILURE:
        return HTMLResponse(
            page.html, status_code=503, headers={"Retry-After": str(RETRY_AFTER_SECONDS)}
        )

    return HTMLResponse(page.html, status_code=404)


def create_app(
    public_menu_service: PublicMenuService,
    template_service: TemplateService,
    preview_service: PreviewService,
    dashboard_service: DashboardService,
    api_keys: list[str],
) -> FastAPI:
    """Create and configure the FastAPI application.

    Admin and health routes are registered before the catch-all public menu
    routes so they take precedence over two-segment menu links.

    Args:
        public_menu_service: Renders public menu pages
        template_service: Applies templates to branches
        preview_service: Renders admin previews
        dashboard_service: Computes dashboard statistics
        api_keys: List of valid admin API keys

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Menu Master",
        description="Public restaurant menus and template management",
        version="1.0.0",
    )

    app.state.public_menu_service = public_menu_service
    app.state.template_service = template_service
    app.state.preview_service = preview_service
    app.state.dashboard_service = dashboard_service
    app.state.admin_key_validator = AdminKeyValidator(api_keys=api_keys)

    def validate_api_key(x_api_key: str | None = Header(None)) -> str:
        """Dependency to validate the admin API key."""
        return require_admin_key(x_api_key, app.state.admin_key_validator)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/admin/templates", response_model=list[TemplateInfo], tags=["Templates"])
    async def list_templates(_api_key: str = Depends(validate_api_key)) -> list[TemplateInfo]:
        """List the templates a branch can be published with."""
        return TEMPLATE_CATALOG

    @app.put(
        "/admin/branches/{branch_id}/template",
        response_model=ApplyTemplateResponse,
        tags=["Templates"],
    )
    async def apply_template(
        branch_id: str,
        request: ApplyTemplateRequest,
        _api_key: str = Depends(validate_api_key),
    ) -> ApplyTemplateResponse:
        """Apply a template to a branch and return its public menu link.

        Raises:
            HTTPException: 400 for an unknown template, 404 for an unknown
                branch, 502 when the store rejected the write
        """
        result = await app.state.template_service.apply_template(
            branch_id=branch_id, template_id=request.template_id
        )

        if not result.success:
            raise HTTPException(
                status_code=_FAILURE_STATUS_CODES.get(result.failure, 500),
                detail=result.error_message or "Failed to apply template",
            )

        return ApplyTemplateResponse(
            branch_id=result.branch_id,
            template_id=result.template_id,
            public_url=result.public_url or "",
        )

    @app.get(
        "/admin/restaurants/{restaurant_id}/branches",
        response_model=list[BranchLinkResponse],
        tags=["Templates"],
    )
    async def list_branches(
        restaurant_id: str, _api_key: str = Depends(validate_api_key)
    ) -> list[BranchLinkResponse]:
        """List a restaurant's branches with their published state and public link.

        Raises:
            HTTPException: 404 for an unknown restaurant, 502 when the store
                could not be read
        """
        result = await app.state.template_service.list_branch_links(restaurant_id)

        if not result.success:
            raise HTTPException(
                status_code=_BRANCH_LIST_STATUS_CODES.get(result.failure, 500),
                detail=result.error_message or "Failed to list branches",
            )

        return [
            BranchLinkResponse(
                branch_id=link.branch_id,
                name=link.name,
                state=link.state,
                active_template=link.active_template,
                published=link.published,
                has_custom_template=link.has_custom_template,
                public_url=link.public_url,
            )
            for link in result.branches
        ]

    @app.get("/admin/preview", response_class=HTMLResponse, tags=["Preview"])
    async def preview_menu(
        restaurant_id: str,
        branch_id: str,
        template_id: str | None = None,
        _api_key: str = Depends(validate_api_key),
    ) -> HTMLResponse:
        """Render a branch menu with any template, without applying it."""
        page = await app.state.preview_service.preview(restaurant_id, branch_id, template_id)
        return menu_page_response(page)

    @app.get("/admin/dashboard", response_model=DashboardStats, tags=["Dashboard"])
    async def dashboard(_api_key: str = Depends(validate_api_key)) -> DashboardStats:
        """Counts of restaurants, branches and menu items.

        Raises:
            HTTPException: 503 if the store could not be read
        """
        stats = await app.state.dashboard_service.get_stats()
        if stats is None:
            raise HTTPException(status_code=503, detail="Failed to load dashboard statistics")
        return stats

    @app.get("/{restaurant_slug}/{branch_slug}", response_class=HTMLResponse, tags=["Public Menu"])
    async def public_menu(restaurant_slug: str, branch_slug: str) -> HTMLResponse:
        """Public menu page addressed by restaurant and branch slugs."""
        page = await app.state.public_menu_service.render_menu([restaurant_slug, branch_slug])
        return menu_page_response(page)

    @app.get(
        "/{restaurant_slug}/{branch_slug}/{template_id}",
        response_class=HTMLResponse,
        tags=["Public Menu"],
    )
    async def public_menu_with_template(
        restaurant_slug: str, branch_slug: str, template_id: str
    ) -> HTMLResponse:
        """Public menu page; a trailing "menu" segment selects the legacy name form."""
        page = await app.state.public_menu_service.render_menu(
            [restaurant_slug, branch_slug, template_id]
        )
        return menu_page_response(page)

    return app
