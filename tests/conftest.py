"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - integration/: Gateway and temperature service wired in-process,
                    third-party APIs mocked at the HTTP transport
    - component/  : One service with mocked collaborators
    - unit/       : Pure functions, no I/O
"""
import os
import sys

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

os.environ.setdefault("ENV", "testing")
os.environ.setdefault("TRACING_ENABLED", "false")

from core.config import GatewayServiceConfig, TemperatureServiceConfig


def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "unit: pure logic tests, no I/O")
    config.addinivalue_line("markers", "component: single service with mocked dependencies")
    config.addinivalue_line("markers", "integration: both services wired in-process")


# =============================================================================
# Tracing
# =============================================================================

@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def tracer(tracer_provider):
    """Tracer whose spans land in span_exporter"""
    return tracer_provider.get_tracer("tests")


# =============================================================================
# Service configuration
# =============================================================================

@pytest.fixture
def temperature_config() -> TemperatureServiceConfig:
    return TemperatureServiceConfig(
        viacep_api_url="http://viacep.test/ws/",
        weatherapi_url="http://weatherapi.test/v1/current.json",
        weatherapi_key="test-weather-key",
        request_timeout=5.0,
    )


@pytest.fixture
def gateway_config() -> GatewayServiceConfig:
    return GatewayServiceConfig(
        temperature_service_url="http://temperature-service.test",
        request_timeout=5.0,
    )
