"""Telemetry — OpenTelemetry configuration and instrumentation helpers.

Provides a unified way to configure tracing and a decorator to wrap
step resolution and navigation in spans.
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

P = ParamSpec("P")
R = TypeVar("R")


class TelemetryService:
    """Configures OpenTelemetry tracing and root logging."""

    def __init__(
        self,
        service_name: str,
        version: str = "0.1.0",
        exporter: SpanExporter | None = None,
        log_level: int = logging.INFO,
    ) -> None:
        self.resource = Resource.create(
            {
                SERVICE_NAME: service_name,
                SERVICE_VERSION: version,
            }
        )
        self.provider = TracerProvider(resource=self.resource)

        # Console output unless the caller supplies an exporter
        self.exporter = exporter or ConsoleSpanExporter()
        self.provider.add_span_processor(SimpleSpanProcessor(self.exporter))

        trace.set_tracer_provider(self.provider)
        self.tracer = trace.get_tracer(service_name, version)

        self._setup_logging(log_level)

    def _setup_logging(self, log_level: int) -> None:
        """Attach a console handler to the ``stepper`` logger."""
        stepper_logger = logging.getLogger("stepper")
        if not stepper_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            stepper_logger.addHandler(handler)
        stepper_logger.setLevel(log_level)

    def shutdown(self) -> None:
        """Flush and stop span processing."""
        self.provider.shutdown()


def trace_span(name: str | None = None) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator to wrap a function execution in an OpenTelemetry span.

    Args:
        name: Optional span name. If not provided, uses the function name.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        span_name = name or func.__name__

        @functools.wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            tracer = trace.get_tracer(__name__)
            with tracer.start_as_current_span(span_name) as span:
                try:
                    return await func(*args, **kwargs)  # type: ignore
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
                    raise

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            tracer = trace.get_tracer(__name__)
            with tracer.start_as_current_span(span_name) as span:
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    span.record_exception(e)
                    span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
                    raise

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper

    return decorator
