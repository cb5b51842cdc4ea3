"""
Component Test Layer Configuration

One service at a time with its collaborators mocked:

    tests/component/
    ├── temperature_service/   Mock lookups, MockTransport for ViaCEP/WeatherAPI
    └── gateway_service/       MockTransport standing in for the temperature service

Usage:
    pytest tests/component -v
    pytest tests/component/gateway_service -v
"""
import os

import pytest

# Set testing environment BEFORE any app is built
os.environ["ENV"] = "testing"
os.environ["TRACING_ENABLED"] = "false"


def pytest_collection_modifyitems(items):
    for item in items:
        if "/component/" in str(item.fspath):
            item.add_marker(pytest.mark.component)
