"""Logging, tracing and metrics for the menu service."""

from menu_master.observability.config import configure_logging, setup_observability
from menu_master.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
