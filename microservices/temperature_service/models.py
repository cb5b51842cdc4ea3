"""
Temperature Service Models

Request, response and upstream payload models for CEP → temperature
resolution.
"""

from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field

ABSOLUTE_ZERO_C = -273.15
MAX_READING_C = 1000.0


# Domain Models

class LocationResult(BaseModel):
    """City resolved from a CEP"""
    cep: str = Field(..., description="8-digit postal code")
    city: str = Field(..., min_length=1, description="Resolved city name")


class WeatherReading(BaseModel):
    """Current temperature for a city"""
    city: str
    temp_c: float = Field(..., description="Temperature in Celsius")


# Response Models

class TemperatureReport(BaseModel):
    """Temperature for a CEP's city in three units"""
    city: str
    temp_C: float = Field(..., description="Temperature in Celsius")
    temp_F: float = Field(..., description="Temperature in Fahrenheit, 2 decimals")
    temp_K: float = Field(..., description="Temperature in Kelvin, 2 decimals")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"city": "São Paulo", "temp_C": 25.5, "temp_F": 77.9, "temp_K": 298.65}
        }
    )


class ErrorEnvelope(BaseModel):
    """Error body shared by every service"""
    message: str
    code: int
    trace_id: Optional[str] = None


# Upstream payloads

class ViaCepAddress(BaseModel):
    """Subset of a ViaCEP /{cep}/json/ response"""
    localidade: str = ""
    # ViaCEP answers 200 {"erro": true} (older: "true") for unknown CEPs
    erro: Optional[Union[bool, str]] = None

    @property
    def not_found(self) -> bool:
        return self.erro in (True, "true") or not self.localidade.strip()


class WeatherApiCurrentConditions(BaseModel):
    temp_c: float = Field(..., allow_inf_nan=False, ge=ABSOLUTE_ZERO_C, le=MAX_READING_C)


class WeatherApiCurrentResponse(BaseModel):
    """Subset of a WeatherAPI current.json response"""
    current: WeatherApiCurrentConditions


__all__ = [
    "LocationResult",
    "WeatherReading",
    "TemperatureReport",
    "ErrorEnvelope",
    "ViaCepAddress",
    "WeatherApiCurrentConditions",
    "WeatherApiCurrentResponse",
    "ABSOLUTE_ZERO_C",
    "MAX_READING_C",
]
