"""
Distributed Tracing

OpenTelemetry setup shared by every microservice:

1. init_tracing() installs a TracerProvider + W3C TraceContext propagator
2. traced_span() opens a span whose status is set exactly once on exit
3. inject_trace_headers() / extract_trace_context() carry the trace across
   HTTP hops

Usage:
    provider = init_tracing("temperature_service", TracingConfig.from_env())
    tracer = trace.get_tracer(__name__)

    with traced_span(tracer, "resolve-temperature", {"cep": cep}) as scope:
        ...
        scope.set_attribute("city", city)
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional

from opentelemetry import context as otel_context
from opentelemetry import propagate, trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Status, StatusCode
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from core.config.tracing_config import (
    EXPORTER_CONSOLE,
    EXPORTER_OTLP,
    PROTOCOL_HTTP,
    TracingConfig,
)
from core.errors import ServiceError

logger = logging.getLogger(__name__)

NO_TRACE_ID = "-"


# =============================================================================
# Bootstrap
# =============================================================================

def _build_exporter(config: TracingConfig):
    if config.exporter == EXPORTER_CONSOLE:
        return ConsoleSpanExporter()
    if config.exporter == EXPORTER_OTLP:
        if config.otlp_protocol == PROTOCOL_HTTP:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
            return OTLPSpanExporter(endpoint=config.otlp_endpoint)
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        return OTLPSpanExporter(endpoint=config.otlp_endpoint, insecure=True)
    return None


def init_tracing(service_name: str, config: TracingConfig) -> Optional[TracerProvider]:
    """
    Install the global tracer provider and the W3C trace context propagator.

    Args:
        service_name: Value for the service.name resource attribute
        config: Exporter settings

    Returns:
        The installed provider (call shutdown() on exit), or None when
        tracing is disabled
    """
    propagate.set_global_textmap(TraceContextTextMapPropagator())

    if not config.enabled:
        logger.info(f"Tracing disabled for {service_name}")
        return None

    provider = TracerProvider(
        resource=Resource.create({
            "service.name": service_name,
            "deployment.environment": config.environment,
        })
    )
    exporter = _build_exporter(config)
    if exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    logger.info(
        f"✅ Tracing initialized for {service_name} "
        f"(exporter={config.exporter}, endpoint={config.otlp_endpoint})"
    )
    return provider


def shutdown_tracing(provider: Optional[TracerProvider]) -> None:
    if provider is None:
        return
    try:
        provider.shutdown()
    except Exception as e:
        logger.error(f"❌ Failed to shutdown tracer provider: {e}")


# =============================================================================
# Propagation
# =============================================================================

def inject_trace_headers(headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
    """Write the active trace context (traceparent/tracestate) into headers"""
    propagate.inject(headers)
    return headers


def extract_trace_context(headers: Mapping[str, str]) -> otel_context.Context:
    """Read a trace context from inbound headers; empty context if absent"""
    return propagate.extract(headers)


def format_trace_id(span: trace.Span) -> str:
    span_context = span.get_span_context()
    if not span_context.is_valid:
        return NO_TRACE_ID
    return trace.format_trace_id(span_context.trace_id)


def current_trace_id() -> str:
    return format_trace_id(trace.get_current_span())


# =============================================================================
# Span scope
# =============================================================================

class SpanScope:
    """
    Handle on an open span.

    Status is never set directly; call mark_error() and the scope applies
    Error or Ok exactly once when it closes.
    """

    def __init__(self, span: trace.Span):
        self.span = span
        self._error: Optional[str] = None

    @property
    def trace_id(self) -> str:
        return format_trace_id(self.span)

    @property
    def failed(self) -> bool:
        return self._error is not None

    def set_attribute(self, key: str, value: Any) -> None:
        self.span.set_attribute(key, value)

    def mark_error(self, description: str) -> None:
        self._error = description


@contextmanager
def traced_span(
    tracer: trace.Tracer,
    name: str,
    attributes: Optional[Dict[str, Any]] = None,
    context: Optional[otel_context.Context] = None,
) -> Iterator[SpanScope]:
    """
    Open a span that is guaranteed to end with a status on every exit path.

    Exceptions are recorded and mark the span Error before propagating.
    A ServiceError leaving the scope gets the span's trace id attached so the
    error envelope can report it.
    """
    with tracer.start_as_current_span(
        name,
        context=context,
        attributes=attributes,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        scope = SpanScope(span)
        try:
            yield scope
        except BaseException as exc:
            if isinstance(exc, ServiceError) and not exc.trace_id and scope.trace_id != NO_TRACE_ID:
                exc.trace_id = scope.trace_id
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, scope._error or str(exc) or type(exc).__name__))
            raise
        if scope.failed:
            span.set_status(Status(StatusCode.ERROR, scope._error))
        else:
            span.set_status(Status(StatusCode.OK))


__all__ = [
    "init_tracing",
    "shutdown_tracing",
    "inject_trace_headers",
    "extract_trace_context",
    "current_trace_id",
    "format_trace_id",
    "SpanScope",
    "traced_span",
]
