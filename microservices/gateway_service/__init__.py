"""
Gateway Service Microservice

Public entry point: validates a CEP and forwards it to the temperature
service with the trace context attached.
"""

from .gateway_service import GatewayService
from .models import CepRequest, ForwardedResponse

__version__ = "1.0.0"
__all__ = ["GatewayService", "CepRequest", "ForwardedResponse"]
