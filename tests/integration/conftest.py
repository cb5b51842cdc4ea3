"""
Integration Test Layer Configuration

Gateway and temperature service run in-process: the gateway's client talks
to the temperature app through httpx.ASGITransport, and the temperature
app's ViaCEP/WeatherAPI clients hit an httpx.MockTransport.

Usage:
    pytest tests/integration -v
"""
import os

import pytest

os.environ["ENV"] = "testing"
os.environ["TRACING_ENABLED"] = "false"


def pytest_collection_modifyitems(items):
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
