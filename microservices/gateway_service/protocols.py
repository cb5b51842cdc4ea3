"""
Gateway Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Protocol, runtime_checkable

import httpx

from core.errors import ServiceError


# =============================================================================
# Custom Exceptions
# =============================================================================


class InvalidRequestFormatError(ServiceError):
    """Raised when the body is not a JSON object with a string cep"""
    status_code = 400
    message = "invalid request format"


class UpstreamUnavailableError(ServiceError):
    """Raised when the temperature service cannot be reached"""
    status_code = 500
    message = "temperature service unavailable"


# =============================================================================
# Client Protocols (for service-to-service communication)
# =============================================================================


@runtime_checkable
class TemperatureServiceClientProtocol(Protocol):
    """
    Client for temperature_service.

    Implementations:
    - TemperatureServiceClient (production)
    - httpx.MockTransport / ASGITransport backed clients (testing)
    """

    async def get_temperature_by_cep(self, cep: str) -> httpx.Response:
        """GET /cep/{cep}; raises httpx.HTTPError when unreachable."""
        ...

    async def close(self) -> None:
        """Close HTTP client."""
        ...
