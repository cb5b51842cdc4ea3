"""
Temperature Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that builds I/O-backed lookup clients.

Usage:
    from .factory import create_temperature_service
    service = create_temperature_service(config)
"""
from typing import Optional

import httpx
from opentelemetry import trace

from core.config import TemperatureServiceConfig

from .clients import ViaCepClient, WeatherApiClient
from .protocols import LocationLookupProtocol, WeatherLookupProtocol
from .temperature_service import TemperatureService


def create_temperature_service(
    config: TemperatureServiceConfig,
    tracer: Optional[trace.Tracer] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TemperatureService:
    """
    Create TemperatureService with the ViaCEP and WeatherAPI clients.

    Args:
        config: Validated service configuration
        tracer: Tracer for service and client spans (global tracer if omitted)
        transport: Optional httpx transport shared by both clients

    Returns:
        Configured TemperatureService instance
    """
    location_lookup = ViaCepClient(
        base_url=config.viacep_api_url,
        timeout=config.request_timeout,
        transport=transport,
        tracer=tracer,
    )
    weather_lookup = WeatherApiClient(
        api_key=config.weatherapi_key,
        base_url=config.weatherapi_url,
        timeout=config.request_timeout,
        transport=transport,
        tracer=tracer,
    )
    return TemperatureService(location_lookup, weather_lookup, tracer=tracer)


def create_temperature_service_for_testing(
    location_lookup: LocationLookupProtocol,
    weather_lookup: WeatherLookupProtocol,
    tracer: Optional[trace.Tracer] = None,
) -> TemperatureService:
    """
    Create TemperatureService with mock lookups for testing.

    Args:
        location_lookup: Test double for the location lookup
        weather_lookup: Test double for the weather lookup
        tracer: Optional tracer (tests pass one backed by an in-memory exporter)
    """
    return TemperatureService(location_lookup, weather_lookup, tracer=tracer)
