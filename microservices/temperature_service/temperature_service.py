"""
Temperature Service - Business Logic

Resolves a CEP to its city, reads the city's current temperature and reports
it in Celsius, Fahrenheit and Kelvin.
"""

import logging
from typing import Optional

from opentelemetry import trace

from core.postal_code import validate_cep
from core.tracing import traced_span

from .conversion import celsius_to_fahrenheit, celsius_to_kelvin
from .models import LocationResult, TemperatureReport, WeatherReading
from .protocols import (
    LocationLookupFailedError,
    LocationLookupProtocol,
    LookupNotFoundError,
    LookupTransportError,
    PostalCodeNotFoundError,
    WeatherLookupFailedError,
    WeatherLookupProtocol,
)

logger = logging.getLogger(__name__)


class TemperatureService:
    """CEP → city → temperature pipeline"""

    def __init__(
        self,
        location_lookup: LocationLookupProtocol,
        weather_lookup: WeatherLookupProtocol,
        tracer: Optional[trace.Tracer] = None,
    ):
        self.location_lookup = location_lookup
        self.weather_lookup = weather_lookup
        self.tracer = tracer or trace.get_tracer(__name__)

    async def close(self):
        """Close lookup clients"""
        await self.location_lookup.close()
        await self.weather_lookup.close()

    # =============================================================================
    # Resolution
    # =============================================================================

    async def resolve(self, cep: str) -> TemperatureReport:
        """
        Resolve a CEP to a temperature report.

        The weather lookup only starts once the location lookup has finished;
        the first failure ends the request.

        Raises:
            InvalidPostalCodeError: CEP is not 8 digits (422)
            PostalCodeNotFoundError: No city for the CEP (404)
            LocationLookupFailedError: Location provider failed (500)
            WeatherLookupFailedError: Weather provider failed (500)
        """
        with traced_span(self.tracer, "resolve-temperature", {"cep": str(cep)}) as scope:
            logger.info(f"CEP received: {cep}")
            validate_cep(cep)

            location = await self._fetch_location(cep)
            scope.set_attribute("city", location.city)

            reading = await self._fetch_weather(location.city)
            scope.set_attribute("temperature_c", reading.temp_c)

            report = self._build_report(reading)
            logger.info(
                f"Converted temperatures for city {report.city}: "
                f"{report.temp_F}°F, {report.temp_K}K"
            )
            return report

    async def _fetch_location(self, cep: str) -> LocationResult:
        try:
            city = await self.location_lookup.lookup_city(cep)
        except LookupNotFoundError as e:
            logger.info(f"No city for CEP {cep}")
            raise PostalCodeNotFoundError() from e
        except LookupTransportError as e:
            logger.error(f"Error fetching city for CEP {cep}: {e}")
            raise LocationLookupFailedError() from e

        if not city:
            # empty is "not found", never a result
            raise PostalCodeNotFoundError()
        logger.info(f"City found for CEP {cep}: {city}")
        return LocationResult(cep=cep, city=city)

    async def _fetch_weather(self, city: str) -> WeatherReading:
        try:
            temp_c = await self.weather_lookup.lookup_temperature(city)
        except LookupTransportError as e:
            logger.error(f"Error fetching temperature for city {city}: {e}")
            raise WeatherLookupFailedError() from e
        return WeatherReading(city=city, temp_c=temp_c)

    @staticmethod
    def _build_report(reading: WeatherReading) -> TemperatureReport:
        return TemperatureReport(
            city=reading.city,
            temp_C=reading.temp_c,
            temp_F=celsius_to_fahrenheit(reading.temp_c),
            temp_K=celsius_to_kelvin(reading.temp_c),
        )


__all__ = ["TemperatureService"]
