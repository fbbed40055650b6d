"""
lazycell OpenTelemetry Helpers

Thin access to the OpenTelemetry tracing API for load spans. lazycell never
installs a tracer provider; without one the API hands out no-op spans.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import structlog
from opentelemetry import trace
from pydantic import ValidationError

from .config import get_settings

logger = structlog.get_logger(__name__)

TRACER_NAME = "lazycell"


def get_tracer(name: str = TRACER_NAME, version: Optional[str] = None):
    """
    Get tracer instance for manual instrumentation.

    Args:
        name: Instrumentation name
        version: Instrumentation version

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name, version)


def tracing_enabled() -> bool:
    """
    Read TRACE_LOADS, treating unreadable settings as tracing on.

    A misconfigured environment must not break loads, so validation errors
    are logged and the default is used.
    """
    try:
        return get_settings().TRACE_LOADS
    except ValidationError as e:
        logger.warning(
            "Invalid lazycell settings, using defaults for load tracing",
            error=str(e),
        )
        return True


@contextmanager
def load_span(
    name: str, attributes: Optional[Dict[str, Any]] = None
) -> Iterator[Optional[trace.Span]]:
    """
    Run the enclosed block inside a span when load tracing is enabled.

    Exceptions leaving the block mark the span as failed and are re-raised.

    Args:
        name: Span name
        attributes: Span attributes

    Yields:
        The active span, or None when TRACE_LOADS is off
    """
    if not tracing_enabled():
        yield None
        return

    with get_tracer().start_as_current_span(
        name, attributes=attributes, record_exception=False, set_status_on_exception=False
    ) as span:
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
            raise
