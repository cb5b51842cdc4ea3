"""
WeatherAPI Client

Weather lookup backed by weatherapi.com:

    GET {weatherapi_url}?key={api_key}&q={city}  ->  {"current": {"temp_c": 25.5}}
"""

import logging
from typing import Optional

import httpx
from opentelemetry import trace
from pydantic import ValidationError

from core.errors import ConfigurationMissingError, DeadlineExceededError
from core.service_client_base import BaseServiceClient
from core.tracing import traced_span

from ..models import WeatherApiCurrentResponse
from ..protocols import LookupTransportError

logger = logging.getLogger(__name__)


class WeatherApiClient(BaseServiceClient):
    """Fetches the current Celsius temperature for a city"""

    service_name = "weatherapi"

    def __init__(
        self,
        api_key: str,
        base_url: str = "http://api.weatherapi.com/v1/current.json",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        tracer: Optional[trace.Tracer] = None,
    ):
        if not api_key:
            raise ConfigurationMissingError("WEATHERAPI_KEY")
        super().__init__(base_url=base_url, timeout=timeout, transport=transport)
        self.api_key = api_key
        self.tracer = tracer or trace.get_tracer(__name__)

    async def lookup_temperature(self, city: str) -> float:
        """
        Fetch the current temperature in Celsius.

        WeatherAPI has no distinct "unknown city" answer we rely on: any
        non-200 or undecodable body is a transport error.

        Raises:
            LookupTransportError: On any failure
        """
        with traced_span(self.tracer, "lookup-temperature", {
            "city": city,
            "http.method": "GET",
            # API key omitted from the recorded URL
            "http.url": f"{self.base_url}?q={city}",
        }) as scope:
            logger.info(f"Fetching temperature for city: {city}")
            try:
                response = await self.get("", params={"key": self.api_key, "q": city})
            except (httpx.HTTPError, DeadlineExceededError) as e:
                logger.error(f"Error making request to WeatherAPI: {e!r}")
                raise LookupTransportError(self.service_name, str(e) or type(e).__name__) from e

            scope.set_attribute("http.status_code", response.status_code)

            if response.status_code != 200:
                logger.error(f"WeatherAPI returned non-200 status: {response.status_code}")
                raise LookupTransportError(
                    self.service_name, f"failed to fetch temperature for city: {city}"
                )

            try:
                payload = WeatherApiCurrentResponse.model_validate_json(response.content)
            except ValidationError as e:
                logger.error(f"Error decoding response: {e}")
                raise LookupTransportError(self.service_name, "undecodable response") from e

            temp_c = payload.current.temp_c
            scope.set_attribute("fetch.temperature_c", temp_c)
            logger.info(f"Temperature for city {city}: {temp_c:.2f}°C")
            return temp_c
