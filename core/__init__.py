#!/usr/bin/env python3
"""
Core Module for the CEP weather microservices

Shared components used by every service.

COMPONENTS:
    - config/: Frozen per-service configuration loaded from the environment
    - errors.py: Error taxonomy base classes and the error envelope handler
    - logger.py: Logging setup with trace correlation
    - tracing.py: OpenTelemetry bootstrap, span scopes, header propagation
    - request_context.py: Request deadlines and client-disconnect cancellation
    - service_client_base.py: Base class for outbound HTTP clients
    - postal_code.py: CEP validation

USAGE:
    from core.config import TemperatureServiceConfig
    from core.tracing import traced_span

    config = TemperatureServiceConfig.from_env().validate()
"""

__version__ = "1.0.0"
