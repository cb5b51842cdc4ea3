"""
Gateway Service Factory

Builds GatewayService with its real temperature service client.
"""
from typing import Optional

import httpx
from opentelemetry import trace

from core.config import GatewayServiceConfig
from microservices.temperature_service.client import TemperatureServiceClient

from .gateway_service import GatewayService


def create_gateway_service(
    config: GatewayServiceConfig,
    tracer: Optional[trace.Tracer] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GatewayService:
    """
    Create GatewayService talking to the configured temperature service.

    Args:
        config: Validated gateway configuration
        tracer: Tracer for the gateway span (global tracer if omitted)
        transport: Optional httpx transport (tests route to an in-process app)
    """
    client = TemperatureServiceClient(
        base_url=config.temperature_service_url,
        timeout=config.request_timeout,
        transport=transport,
    )
    return GatewayService(client, tracer=tracer)
