#!/usr/bin/env python3
"""Service configuration for the CEP weather services

One frozen config per service, built once at startup by create_app() and
handed to constructors. Nothing reads these from module globals.
"""
import os
from dataclasses import dataclass

from core.errors import ConfigurationMissingError


def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


def _mask(secret: str) -> str:
    if not secret:
        return "<unset>"
    return secret[:2] + "*" * max(len(secret) - 2, 4)


@dataclass(frozen=True)
class GatewayServiceConfig:
    """Edge gateway settings"""

    service_name: str = "gateway_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8080

    # Downstream temperature (resolver) service
    temperature_service_url: str = "http://temperature-service:8090"

    # Budget for the whole inbound request, in seconds
    request_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> 'GatewayServiceConfig':
        """Load gateway configuration from environment variables"""
        return cls(
            service_host=os.getenv("SERVICE_HOST", "0.0.0.0"),
            service_port=_int(os.getenv("GATEWAY_SERVICE_PORT", ""), 8080),
            temperature_service_url=(
                os.getenv("TEMPERATURE_SERVICE_URL")
                or os.getenv("SERVICE_B_URL", "http://temperature-service:8090")
            ),
            request_timeout=_float(os.getenv("REQUEST_TIMEOUT_SECONDS", ""), 10.0),
        )

    def validate(self) -> 'GatewayServiceConfig':
        if not self.temperature_service_url:
            raise ConfigurationMissingError("TEMPERATURE_SERVICE_URL")
        return self

    def describe(self) -> str:
        return (
            f"temperature_service_url={self.temperature_service_url} "
            f"request_timeout={self.request_timeout}s"
        )


@dataclass(frozen=True)
class TemperatureServiceConfig:
    """Temperature (resolver) service settings"""

    service_name: str = "temperature_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8090

    # External APIs
    viacep_api_url: str = "https://viacep.com.br/ws/"
    weatherapi_url: str = "http://api.weatherapi.com/v1/current.json"
    weatherapi_key: str = ""

    request_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> 'TemperatureServiceConfig':
        """Load temperature service configuration from environment variables"""
        return cls(
            service_host=os.getenv("SERVICE_HOST", "0.0.0.0"),
            service_port=_int(os.getenv("TEMPERATURE_SERVICE_PORT", ""), 8090),
            viacep_api_url=os.getenv("VIACEP_API_URL", "https://viacep.com.br/ws/"),
            weatherapi_url=os.getenv("WEATHERAPI_URL", "http://api.weatherapi.com/v1/current.json"),
            weatherapi_key=os.getenv("WEATHERAPI_KEY", ""),
            request_timeout=_float(os.getenv("REQUEST_TIMEOUT_SECONDS", ""), 10.0),
        )

    def validate(self) -> 'TemperatureServiceConfig':
        if not self.viacep_api_url:
            raise ConfigurationMissingError("VIACEP_API_URL")
        if not self.weatherapi_url:
            raise ConfigurationMissingError("WEATHERAPI_URL")
        if not self.weatherapi_key:
            raise ConfigurationMissingError("WEATHERAPI_KEY")
        return self

    def describe(self) -> str:
        return (
            f"viacep_api_url={self.viacep_api_url} weatherapi_url={self.weatherapi_url} "
            f"weatherapi_key={_mask(self.weatherapi_key)} request_timeout={self.request_timeout}s"
        )
