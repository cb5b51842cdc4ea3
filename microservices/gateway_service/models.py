"""
Gateway Service Models
"""

from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict, Field, StrictStr


# Request Models

class CepRequest(BaseModel):
    """Inbound request body"""
    cep: StrictStr = Field(..., description="8-digit CEP")

    model_config = ConfigDict(json_schema_extra={"example": {"cep": "01001000"}})


# Response Models

@dataclass(frozen=True)
class ForwardedResponse:
    """Temperature service response relayed verbatim to the client"""
    status_code: int
    content: bytes
    media_type: str = "application/json"


__all__ = ["CepRequest", "ForwardedResponse"]
