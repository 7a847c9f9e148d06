"""Environment-driven configuration shared by the server and Lambda entry points."""

import logging
import os
from typing import Any

import boto3

from menu_master.templates.base_template import RenderSettings

logger = logging.getLogger(__name__)

DEFAULT_PUBLIC_ORIGIN = "http://localhost:8001"


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )

    logger.info(f"Using AWS DynamoDB in region {region}")
    return boto3.resource("dynamodb", region_name=region)


def get_table_names() -> dict[str, str]:
    """Table names keyed by entity, from the environment."""
    return {
        "restaurants": os.getenv("DYNAMODB_RESTAURANTS_TABLE", "restaurants"),
        "branches": os.getenv("DYNAMODB_BRANCHES_TABLE", "branches"),
        "items": os.getenv("DYNAMODB_MENU_ITEMS_TABLE", "menu-items"),
    }


def get_render_settings() -> RenderSettings:
    """Read rendering configuration from the environment.

    Raises:
        ValueError: If STORAGE_PUBLIC_BASE_URL is not set
    """
    storage_base_url = os.getenv("STORAGE_PUBLIC_BASE_URL")
    if not storage_base_url:
        raise ValueError("STORAGE_PUBLIC_BASE_URL must be set in environment")

    return RenderSettings(
        storage_base_url=storage_base_url,
        currency_label=os.getenv("CURRENCY_LABEL", "IQD"),
    )


def get_public_origin() -> str:
    """Origin that shareable menu links are built on, from PUBLIC_ORIGIN."""
    return os.getenv("PUBLIC_ORIGIN", DEFAULT_PUBLIC_ORIGIN)


def get_admin_api_keys() -> list[str]:
    """Parse the comma-separated ADMIN_API_KEY variable."""
    api_keys_str = os.getenv("ADMIN_API_KEY", "")
    api_keys = [key.strip() for key in api_keys_str.split(",") if key.strip()]

    if not api_keys:
        logger.warning("No ADMIN_API_KEY configured - using development key")
        api_keys = ["dummy-key-for-development"]

    return api_keys
