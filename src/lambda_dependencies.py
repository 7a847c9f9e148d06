"""Cached dependency factory for the Lambda handler.

Dependencies are created once per Lambda container and reused across warm
invocations.
"""

import logging
import os
from typing import Any

from fastapi import FastAPI

from menu_master.config import (
    get_admin_api_keys,
    get_dynamodb_resource,
    get_public_origin,
    get_render_settings,
    get_table_names,
)
from menu_master.handlers.api_handler import create_app
from menu_master.observability import configure_logging, setup_observability
from menu_master.repositories.menu_repositories import (
    BranchRepository,
    MenuItemRepository,
    RestaurantRepository,
)
from menu_master.services.dashboard_service import DashboardService
from menu_master.services.menu_resolver import MenuResolver
from menu_master.services.preview_service import PreviewService
from menu_master.services.public_menu_service import PublicMenuService
from menu_master.services.template_service import TemplateService
from menu_master.templates.dispatcher import TemplateDispatcher

logger = logging.getLogger(__name__)

# Module-level caches for Lambda container reuse
_dynamodb_resource: Any | None = None
_repositories: tuple[RestaurantRepository, BranchRepository, MenuItemRepository] | None = None
_resolver: MenuResolver | None = None
_public_menu_service: PublicMenuService | None = None
_fastapi_app: FastAPI | None = None


def get_cached_dynamodb_resource() -> Any:
    """Create or retrieve the cached DynamoDB resource."""
    global _dynamodb_resource

    if _dynamodb_resource is None:
        _dynamodb_resource = get_dynamodb_resource()
    return _dynamodb_resource


def get_repositories() -> tuple[RestaurantRepository, BranchRepository, MenuItemRepository]:
    """Create or retrieve the cached restaurant, branch and item repositories."""
    global _repositories

    if _repositories is not None:
        return _repositories

    dynamodb_resource = get_cached_dynamodb_resource()
    tables = get_table_names()
    _repositories = (
        RestaurantRepository(dynamodb_resource=dynamodb_resource, table_name=tables["restaurants"]),
        BranchRepository(dynamodb_resource=dynamodb_resource, table_name=tables["branches"]),
        MenuItemRepository(dynamodb_resource=dynamodb_resource, table_name=tables["items"]),
    )

    logger.info("Repositories initialized")
    return _repositories


def get_resolver() -> MenuResolver:
    """Create or retrieve the cached menu resolver."""
    global _resolver

    if _resolver is not None:
        return _resolver

    restaurant_repository, branch_repository, item_repository = get_repositories()
    _resolver = MenuResolver(
        restaurant_repository=restaurant_repository,
        branch_repository=branch_repository,
        item_repository=item_repository,
    )
    return _resolver


def get_public_menu_service() -> PublicMenuService:
    """Create or retrieve the cached public menu service."""
    global _public_menu_service

    if _public_menu_service is not None:
        return _public_menu_service

    _public_menu_service = PublicMenuService(
        resolver=get_resolver(), dispatcher=TemplateDispatcher(get_render_settings())
    )

    logger.info("Public menu service initialized")
    return _public_menu_service


def get_fastapi_app() -> FastAPI:
    """Create or retrieve the cached FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    global _fastapi_app

    if _fastapi_app is not None:
        return _fastapi_app

    restaurant_repository, branch_repository, item_repository = get_repositories()
    public_menu_service = get_public_menu_service()

    _fastapi_app = create_app(
        public_menu_service=public_menu_service,
        template_service=TemplateService(
            restaurant_repository=restaurant_repository,
            branch_repository=branch_repository,
            public_origin=get_public_origin(),
        ),
        preview_service=PreviewService(
            resolver=get_resolver(), public_menu_service=public_menu_service
        ),
        dashboard_service=DashboardService(
            restaurant_repository=restaurant_repository,
            branch_repository=branch_repository,
            item_repository=item_repository,
        ),
        api_keys=get_admin_api_keys(),
    )

    setup_observability(_fastapi_app)

    logger.info("FastAPI application initialized")
    return _fastapi_app


def initialize_lambda_environment() -> None:
    """Configure logging once during Lambda cold start."""
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))
    logger.info("Lambda environment initialized")
