"""Custom metrics for the public menu pipeline."""

from opentelemetry import metrics

from menu_master.observability.config import SERVICE_NAME

meter = metrics.get_meter(SERVICE_NAME)

menu_resolution_counter = meter.create_counter(
    name="menu_resolution_total",
    description="Public menu resolutions by addressing mode and outcome",
    unit="1",
)

menu_resolution_duration = meter.create_histogram(
    name="menu_resolution_duration_seconds",
    description="Time spent resolving a public menu against the store",
    unit="s",
)

menu_render_counter = meter.create_counter(
    name="menu_render_total",
    description="Rendered menus by template",
    unit="1",
)

template_apply_counter = meter.create_counter(
    name="template_apply_total",
    description="Template applications by template and outcome",
    unit="1",
)


def record_resolution(mode: str, outcome: str, duration_seconds: float) -> None:
    """Record a finished menu resolution.

    Args:
        mode: Addressing mode ("slug", "name" or "id")
        outcome: Resolution status ("resolved", "not_found", "store_failure")
        duration_seconds: Duration in seconds
    """
    menu_resolution_counter.add(1, {"mode": mode, "outcome": outcome})
    menu_resolution_duration.record(duration_seconds, {"mode": mode})


def record_render(template_id: str) -> None:
    """Record a rendered menu.

    Args:
        template_id: Template the menu was rendered with
    """
    menu_render_counter.add(1, {"template": template_id})


def record_template_apply(template_id: str, success: bool) -> None:
    """Record an attempt to apply a template to a branch.

    Args:
        template_id: Requested template identifier
        success: Whether the write was accepted
    """
    template_apply_counter.add(
        1, {"template": template_id, "outcome": "success" if success else "failure"}
    )
