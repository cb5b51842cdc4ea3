"""
Temperature Service Client

Client library other microservices use to call the temperature service.
"""

import logging
from typing import Optional

import httpx

from core.service_client_base import BaseServiceClient

logger = logging.getLogger(__name__)


class TemperatureServiceClient(BaseServiceClient):
    """Temperature Service HTTP client"""

    service_name = "temperature_service"
    propagate_deadline = True

    def __init__(
        self,
        base_url: str = "http://localhost:8090",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Temperature Service client

        Args:
            base_url: Temperature service base URL
            timeout: Per-request ceiling; the caller's deadline may shorten it
            transport: Optional httpx transport
        """
        super().__init__(base_url=base_url, timeout=timeout, transport=transport)

    async def get_temperature_by_cep(self, cep: str) -> httpx.Response:
        """
        Fetch the temperature report for a CEP.

        The raw response is returned whatever its status so callers can relay
        it untouched.

        Args:
            cep: 8-digit CEP

        Returns:
            The temperature service's response

        Raises:
            httpx.HTTPError: Service unreachable or timed out
            DeadlineExceededError: No request budget left

        Example:
            >>> async with TemperatureServiceClient() as client:
            ...     response = await client.get_temperature_by_cep("01001000")
            ...     print(response.json()["temp_C"])
        """
        response = await self.get(f"/cep/{cep}")
        logger.debug(f"Temperature service answered {response.status_code} for CEP {cep}")
        return response
