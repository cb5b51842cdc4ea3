"""
Temperature Service Microservice

Resolves a CEP to a city (ViaCEP) and reports its current temperature
(WeatherAPI) in Celsius, Fahrenheit and Kelvin.
"""

from .client import TemperatureServiceClient
from .temperature_service import TemperatureService
from .models import (
    LocationResult,
    WeatherReading,
    TemperatureReport,
    ErrorEnvelope,
)

__version__ = "1.0.0"
__all__ = [
    "TemperatureServiceClient",
    "TemperatureService",
    "LocationResult",
    "WeatherReading",
    "TemperatureReport",
    "ErrorEnvelope",
]
