"""
Temperature Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Protocol, runtime_checkable

from core.errors import ServiceError


# =============================================================================
# Lookup (collaborator) errors - never leave the service
# =============================================================================


class ExternalLookupError(Exception):
    """Base exception for external lookup collaborators"""
    pass


class LookupNotFoundError(ExternalLookupError):
    """Raised when the location provider has no such CEP"""
    def __init__(self, cep: str):
        self.cep = cep
        super().__init__(f"CEP not found: {cep}")


class LookupTransportError(ExternalLookupError):
    """Raised on network failures, unexpected statuses or undecodable payloads"""
    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"Provider {provider} error: {message}")


# =============================================================================
# Service errors - rendered as the error envelope
# =============================================================================


class PostalCodeNotFoundError(ServiceError):
    """Raised when the CEP does not resolve to a city"""
    status_code = 404
    message = "can not find zipcode"


class LocationLookupFailedError(ServiceError):
    """Raised when the location lookup fails for any other reason"""
    status_code = 500
    message = "error fetching city"


class WeatherLookupFailedError(ServiceError):
    """Raised when the weather lookup fails (including unknown cities)"""
    status_code = 500
    message = "error fetching temperature"


# =============================================================================
# Lookup Protocols
# =============================================================================


@runtime_checkable
class LocationLookupProtocol(Protocol):
    """
    Interface for CEP → city resolution.

    Implementations:
    - ViaCepClient (production)
    - MockLocationLookup (testing)
    """

    async def lookup_city(self, cep: str) -> str:
        """
        Resolve a CEP to a city name.

        Args:
            cep: Validated 8-digit CEP

        Returns:
            Non-empty city name

        Raises:
            LookupNotFoundError: The provider does not know the CEP
            LookupTransportError: Any other failure
        """
        ...

    async def close(self) -> None:
        """Close HTTP client connections."""
        ...


@runtime_checkable
class WeatherLookupProtocol(Protocol):
    """
    Interface for city → current temperature.

    Implementations:
    - WeatherApiClient (production)
    - MockWeatherLookup (testing)
    """

    async def lookup_temperature(self, city: str) -> float:
        """
        Fetch the current temperature for a city.

        Args:
            city: City name

        Returns:
            Temperature in Celsius

        Raises:
            LookupTransportError: On any failure, unknown city included
        """
        ...

    async def close(self) -> None:
        """Close HTTP client connections."""
        ...
