"""
Shared Test Fixtures

Helpers used across all test layers.

Structure:
    - tracing.py: Span lookups over the in-memory exporter
    - http.py: httpx transports standing in for upstream services
"""

from .http import RecordingTransport, json_response
from .tracing import (
    spans_named,
    span_named,
    trace_id_hex,
    is_error,
    is_ok,
)

__all__ = [
    "RecordingTransport",
    "json_response",
    "spans_named",
    "span_named",
    "trace_id_hex",
    "is_error",
    "is_ok",
]
