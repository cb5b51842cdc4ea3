#!/usr/bin/env python3
"""Distributed tracing configuration (OpenTelemetry)"""
import os
from dataclasses import dataclass

from core.errors import ConfigurationMissingError

EXPORTER_OTLP = "otlp"
EXPORTER_CONSOLE = "console"
EXPORTER_NONE = "none"

PROTOCOL_GRPC = "grpc"
PROTOCOL_HTTP = "http/protobuf"


def _bool(val: str) -> bool:
    return val.lower() == "true"


@dataclass(frozen=True)
class TracingConfig:
    """Trace exporter settings, read once at startup"""
    enabled: bool = True
    exporter: str = EXPORTER_OTLP
    otlp_endpoint: str = "http://otel-collector:4317"
    otlp_protocol: str = PROTOCOL_GRPC
    environment: str = "development"

    @classmethod
    def from_env(cls) -> 'TracingConfig':
        """Load tracing config from environment variables"""
        return cls(
            enabled=_bool(os.getenv("TRACING_ENABLED", "true")),
            exporter=os.getenv("OTEL_TRACES_EXPORTER", EXPORTER_OTLP).lower(),
            otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://otel-collector:4317"),
            otlp_protocol=os.getenv("OTEL_EXPORTER_OTLP_PROTOCOL", PROTOCOL_GRPC).lower(),
            environment=os.getenv("ENV") or os.getenv("ENVIRONMENT", "development"),
        )

    @classmethod
    def disabled(cls) -> 'TracingConfig':
        return cls(enabled=False, exporter=EXPORTER_NONE)

    def validate(self) -> 'TracingConfig':
        if self.enabled and self.exporter == EXPORTER_OTLP:
            if not self.otlp_endpoint:
                raise ConfigurationMissingError("OTEL_EXPORTER_OTLP_ENDPOINT")
            if self.otlp_protocol not in (PROTOCOL_GRPC, PROTOCOL_HTTP):
                raise ConfigurationMissingError("OTEL_EXPORTER_OTLP_PROTOCOL")
        return self
