"""
Gateway Service Component Test Configuration

The temperature service is replaced by an httpx.MockTransport so the real
TemperatureServiceClient (trace and deadline headers included) is exercised.
"""
import json
from typing import Optional

import httpx
import pytest
import pytest_asyncio

from core.config import TracingConfig
from microservices.gateway_service.factory import create_gateway_service
from tests.fixtures import RecordingTransport


class FakeTemperatureService:
    """Scripted temperature service answers"""

    def __init__(self):
        self._status = 200
        self._content = b"{}"
        self._content_type = "application/json"
        self._error: Optional[Exception] = None
        self.transport = RecordingTransport(self.handle)

    @property
    def requests(self):
        return self.transport.requests

    def set_response(self, status_code: int, payload, content_type: str = "application/json"):
        self._status = status_code
        self._content = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        self._content_type = content_type

    def set_error(self, error: Exception):
        self._error = error

    def handle(self, request: httpx.Request) -> httpx.Response:
        if self._error is not None:
            raise self._error
        return httpx.Response(
            self._status,
            content=self._content,
            headers={"content-type": self._content_type},
        )


@pytest.fixture
def temperature_upstream():
    """Create fake temperature service"""
    return FakeTemperatureService()


@pytest_asyncio.fixture
async def gateway_service(gateway_config, temperature_upstream, tracer):
    service = create_gateway_service(gateway_config, tracer=tracer, transport=temperature_upstream.transport)
    yield service
    await service.close()


@pytest.fixture
def gateway_app(gateway_config, temperature_upstream, tracer):
    from microservices.gateway_service.main import create_app

    service = create_gateway_service(gateway_config, tracer=tracer, transport=temperature_upstream.transport)
    return create_app(gateway_config, TracingConfig.disabled(), service=service)
