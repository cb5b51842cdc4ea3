"""
Temperature Service Clients

External API clients used by the temperature service
"""

from .viacep_client import ViaCepClient
from .weatherapi_client import WeatherApiClient

__all__ = ["ViaCepClient", "WeatherApiClient"]
