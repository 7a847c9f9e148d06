"""OpenTelemetry tracing decorators."""

import asyncio
import functools
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span

from menu_master.observability.config import SERVICE_NAME

F = TypeVar("F", bound=Callable[..., Any])


def _record_failure(span: Span, error: Exception) -> None:
    span.set_attribute("success", False)
    span.set_attribute("error.type", type(error).__name__)
    span.record_exception(error)


def traced(span_name: str | None = None, arguments: tuple[str, ...] = ()) -> Callable[[F], F]:
    """Run the decorated function inside a span.

    Selected keyword arguments are copied onto the span as "menu.<name>"
    attributes, which is how slugs and branch ids show up in traces.

    Args:
        span_name: Name for the span (defaults to the function name)
        arguments: Keyword argument names to record as span attributes

    Returns:
        Decorated function with tracing

    Example:
        @traced("resolve_menu", arguments=("restaurant_slug", "branch_slug"))
        async def resolve_by_slug(self, restaurant_slug: str, branch_slug: str): ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(SERVICE_NAME)

        def start(kwargs: dict[str, Any]) -> Any:
            attributes = {"function.name": func.__name__}
            for argument in arguments:
                if kwargs.get(argument) is not None:
                    attributes[f"menu.{argument}"] = str(kwargs[argument])
            return tracer.start_as_current_span(name, attributes=attributes)

        if asyncio.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with start(kwargs) as span:
                    try:
                        result = await func(*args, **kwargs)
                    except Exception as e:
                        _record_failure(span, e)
                        raise
                    span.set_attribute("success", True)
                    return result

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with start(kwargs) as span:
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _record_failure(span, e)
                    raise
                span.set_attribute("success", True)
                return result

        return sync_wrapper  # type: ignore

    return decorator
