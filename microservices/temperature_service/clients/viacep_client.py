"""
ViaCEP Client

Location lookup backed by the ViaCEP REST API:

    GET {viacep_api_url}{cep}/json/  ->  {"localidade": "São Paulo", ...}
"""

import logging
from typing import Optional

import httpx
from opentelemetry import trace
from pydantic import ValidationError

from core.errors import DeadlineExceededError
from core.service_client_base import BaseServiceClient
from core.tracing import traced_span

from ..models import ViaCepAddress
from ..protocols import LookupNotFoundError, LookupTransportError

logger = logging.getLogger(__name__)

# ViaCEP rejects malformed CEPs with 400; some mirrors answer 404
NOT_FOUND_STATUSES = (400, 404)


class ViaCepClient(BaseServiceClient):
    """Resolves a CEP to a city name through ViaCEP"""

    service_name = "viacep"

    def __init__(
        self,
        base_url: str = "https://viacep.com.br/ws/",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        tracer: Optional[trace.Tracer] = None,
    ):
        super().__init__(base_url=base_url, timeout=timeout, transport=transport)
        self.tracer = tracer or trace.get_tracer(__name__)

    async def lookup_city(self, cep: str) -> str:
        """
        Resolve a CEP to its city (localidade).

        Args:
            cep: Validated 8-digit CEP

        Returns:
            City name

        Raises:
            LookupNotFoundError: Unknown CEP (400/404, empty localidade or erro flag)
            LookupTransportError: Network failure, other status, bad payload
        """
        path = f"/{cep}/json/"
        with traced_span(self.tracer, "lookup-city", {
            "cep": cep,
            "http.method": "GET",
            "http.url": f"{self.base_url}{path}",
        }) as scope:
            logger.info(f"Fetching city for CEP {cep}")
            try:
                response = await self.get(path)
            except (httpx.HTTPError, DeadlineExceededError) as e:
                logger.error(f"Error making request to ViaCEP: {e!r}")
                raise LookupTransportError(self.service_name, str(e) or type(e).__name__) from e

            scope.set_attribute("http.status_code", response.status_code)

            if response.status_code in NOT_FOUND_STATUSES:
                logger.info(f"ViaCEP returned {response.status_code} for CEP {cep}")
                raise LookupNotFoundError(cep)
            if response.status_code != 200:
                logger.error(f"Non-OK HTTP status: {response.status_code}")
                raise LookupTransportError(self.service_name, f"non-OK HTTP status: {response.status_code}")

            try:
                address = ViaCepAddress.model_validate_json(response.content)
            except ValidationError as e:
                logger.error(f"Error decoding response: {e}")
                raise LookupTransportError(self.service_name, "undecodable response") from e

            if address.not_found:
                logger.info(f"CEP {cep} not found")
                raise LookupNotFoundError(cep)

            scope.set_attribute("city", address.localidade)
            return address.localidade
