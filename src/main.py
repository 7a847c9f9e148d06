"""Main application entry point for the menu service.

This module wires repositories, templates and services into the FastAPI
application for running the service locally or in a container.
"""

import logging
import os

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


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the DynamoDB resource and repositories
    3. Builds the template dispatcher and services
    4. Creates the FastAPI app and instruments it

    Returns:
        Configured FastAPI application instance
    """
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    logger.info("Initializing menu service...")

    dynamodb_resource = get_dynamodb_resource()
    tables = get_table_names()

    restaurant_repository = RestaurantRepository(
        dynamodb_resource=dynamodb_resource, table_name=tables["restaurants"]
    )
    branch_repository = BranchRepository(
        dynamodb_resource=dynamodb_resource, table_name=tables["branches"]
    )
    item_repository = MenuItemRepository(
        dynamodb_resource=dynamodb_resource, table_name=tables["items"]
    )

    logger.info(
        f"Repositories configured - restaurants: {tables['restaurants']}, "
        f"branches: {tables['branches']}, items: {tables['items']}"
    )

    resolver = MenuResolver(
        restaurant_repository=restaurant_repository,
        branch_repository=branch_repository,
        item_repository=item_repository,
    )
    public_menu_service = PublicMenuService(
        resolver=resolver, dispatcher=TemplateDispatcher(get_render_settings())
    )

    app = create_app(
        public_menu_service=public_menu_service,
        template_service=TemplateService(
            restaurant_repository=restaurant_repository,
            branch_repository=branch_repository,
            public_origin=get_public_origin(),
        ),
        preview_service=PreviewService(resolver=resolver, public_menu_service=public_menu_service),
        dashboard_service=DashboardService(
            restaurant_repository=restaurant_repository,
            branch_repository=branch_repository,
            item_repository=item_repository,
        ),
        api_keys=get_admin_api_keys(),
    )

    setup_observability(app)

    logger.info("Menu service initialized successfully")
    return app


# Create the application only outside test mode so test collection stays offline
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
