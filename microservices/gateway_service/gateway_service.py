"""
Gateway Service - Business Logic

Validates the inbound CEP and forwards it to the temperature service,
relaying the answer untouched.
"""

import logging
from typing import Optional

import httpx
from opentelemetry import trace
from pydantic import ValidationError

from core.errors import DeadlineExceededError
from core.postal_code import validate_cep
from core.tracing import traced_span

from .models import CepRequest, ForwardedResponse
from .protocols import (
    InvalidRequestFormatError,
    TemperatureServiceClientProtocol,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


class GatewayService:
    """Edge gateway: validate, forward, relay"""

    def __init__(
        self,
        temperature_client: TemperatureServiceClientProtocol,
        tracer: Optional[trace.Tracer] = None,
    ):
        self.temperature_client = temperature_client
        self.tracer = tracer or trace.get_tracer(__name__)

    async def close(self):
        await self.temperature_client.close()

    @staticmethod
    def parse_request(body: bytes) -> CepRequest:
        """
        Parse the inbound body.

        Raises:
            InvalidRequestFormatError: Not JSON, not an object, or cep missing/not a string
        """
        try:
            return CepRequest.model_validate_json(body)
        except ValidationError as e:
            logger.info(f"Rejecting malformed request body: {e.error_count()} error(s)")
            raise InvalidRequestFormatError() from e

    async def handle(self, body: bytes) -> ForwardedResponse:
        """
        Validate the request and forward it to the temperature service.

        Nothing is sent downstream unless the body parses and the CEP is
        8 digits.

        Args:
            body: Raw request body, expected {"cep": "<8 digits>"}

        Returns:
            The temperature service's status, body and content type

        Raises:
            InvalidRequestFormatError: Malformed body (400)
            InvalidPostalCodeError: CEP not 8 digits (422)
            UpstreamUnavailableError: Temperature service unreachable (500)
        """
        with traced_span(self.tracer, "handle-cep-request") as scope:
            logger.info("Request received")
            cep_request = self.parse_request(body)
            scope.set_attribute("cep", cep_request.cep)
            cep = validate_cep(cep_request.cep)

            try:
                response = await self.temperature_client.get_temperature_by_cep(cep)
            except (httpx.HTTPError, DeadlineExceededError) as e:
                # the client only ever sees the generic message
                logger.error(f"Failed to contact temperature service for CEP {cep}: {e!r}")
                raise UpstreamUnavailableError() from e

            scope.set_attribute("http.status_code", response.status_code)
            if response.status_code >= 400:
                scope.mark_error(f"temperature service returned {response.status_code}")
            logger.info(f"Relaying temperature service response {response.status_code} for CEP {cep}")

            return ForwardedResponse(
                status_code=response.status_code,
                content=response.content,
                media_type=response.headers.get("content-type", "application/json"),
            )


__all__ = ["GatewayService"]
