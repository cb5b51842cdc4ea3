"""
Temperature Service Component Test Configuration

Pytest fixtures for component testing with mocked dependencies.
"""
import pytest
import pytest_asyncio

from core.config import TracingConfig
from microservices.temperature_service.factory import create_temperature_service_for_testing

from .mocks import MockLocationLookup, MockWeatherLookup


@pytest.fixture
def mock_location_lookup():
    """Create mock location lookup"""
    return MockLocationLookup()


@pytest.fixture
def mock_weather_lookup():
    """Create mock weather lookup"""
    return MockWeatherLookup()


@pytest_asyncio.fixture
async def temperature_service(mock_location_lookup, mock_weather_lookup, tracer):
    """TemperatureService with mocked lookups and an in-memory tracer"""
    service = create_temperature_service_for_testing(
        mock_location_lookup, mock_weather_lookup, tracer=tracer
    )
    yield service
    await service.close()


@pytest.fixture
def temperature_app(temperature_config, mock_location_lookup, mock_weather_lookup, tracer):
    """Temperature service app wired to the mocked lookups"""
    from microservices.temperature_service.main import create_app

    service = create_temperature_service_for_testing(
        mock_location_lookup, mock_weather_lookup, tracer=tracer
    )
    return create_app(temperature_config, TracingConfig.disabled(), service=service)
