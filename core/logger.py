"""
Service Logger Setup

Configures stdlib logging once per process. Every record carries the active
trace_id/span_id so log lines can be joined with traces.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from opentelemetry import trace

from .config.logging_config import LoggingConfig

_configured_services = set()


class TraceContextFilter(logging.Filter):
    """Stamp trace_id and span_id of the current span onto each record"""

    def filter(self, record: logging.LogRecord) -> bool:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            record.trace_id = trace.format_trace_id(span_context.trace_id)
            record.span_id = trace.format_span_id(span_context.span_id)
        else:
            record.trace_id = "-"
            record.span_id = "-"
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON object per line"""

    def __init__(self, service_name: str, environment: str):
        super().__init__()
        self.service_name = service_name
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service_name,
            "environment": self.environment,
            "trace_id": getattr(record, "trace_id", "-"),
            "span_id": getattr(record, "span_id", "-"),
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_service_logger(service_name: str, config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure root logging for a service and return the service logger.

    Safe to call more than once; handlers are only installed the first time
    per service.

    Args:
        service_name: Logger name, also reported in structured output
        config: Logging settings (defaults to LoggingConfig.from_env())

    Returns:
        Logger named after the service
    """
    config = config or LoggingConfig.from_env(service_name)
    service_logger = logging.getLogger(service_name)

    if service_name in _configured_services:
        return service_logger

    if config.enable_structured:
        formatter: logging.Formatter = StructuredFormatter(service_name, config.environment)
    else:
        formatter = logging.Formatter(config.log_format)

    handlers = []
    if config.enable_console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, config.log_level, logging.INFO))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(TraceContextFilter())
        root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _configured_services.add(service_name)
    return service_logger


__all__ = ["setup_service_logger", "TraceContextFilter", "StructuredFormatter"]
