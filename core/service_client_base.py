"""
Base HTTP Client for outbound calls

Base class for every outbound HTTP client (peer microservices and external
APIs). It handles:
1. Trace context injection (W3C traceparent) on every request
2. Deadline enforcement from the inbound request's budget
3. HTTP client lifecycle
4. Timeouts

Usage:
    class ViaCepClient(BaseServiceClient):
        service_name = "viacep"

        async def lookup_city(self, cep: str):
            response = await self.get(f"/{cep}/json/")
            return response.json()
"""

import httpx
import logging
from typing import Optional, Dict, Any
from abc import ABC

from .errors import DeadlineExceededError
from .request_context import deadline_headers, remaining_timeout
from .tracing import inject_trace_headers

logger = logging.getLogger(__name__)


class BaseServiceClient(ABC):
    """
    Outbound HTTP client base class.

    Subclasses set service_name. Peer microservices also set
    propagate_deadline so the callee learns the remaining budget.
    """

    service_name: str = None
    propagate_deadline: bool = False

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client

        Args:
            base_url: Base URL every request path is appended to
            timeout: Upper bound for a single request (seconds)
            transport: Optional httpx transport (tests pass MockTransport)
        """
        if not self.service_name:
            raise ValueError(f"{self.__class__.__name__} must define 'service_name'")

        self.base_url = base_url.rstrip('/')
        self.client = httpx.AsyncClient(
            timeout=timeout,
            headers=self._build_default_headers(),
            transport=transport,
        )

        logger.debug(f"Initialized {self.service_name} client: {self.base_url}")

    def _build_default_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "User-Agent": f"cep-weather-client/{self.service_name}",
        }

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()
        logger.debug(f"Closed {self.service_name} client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ========================================
    # HTTP methods
    # ========================================

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Send a request with trace headers, bounded by the request deadline.

        Raises:
            DeadlineExceededError: If no budget is left to make the call
            httpx.HTTPError: On transport failures (including timeouts)
        """
        url = f"{self.base_url}{path}"
        outbound_headers = dict(headers or {})
        inject_trace_headers(outbound_headers)

        kwargs: Dict[str, Any] = {}
        budget = remaining_timeout()
        if budget is not None:
            if budget <= 0:
                raise DeadlineExceededError(self.service_name)
            kwargs["timeout"] = min(budget, self.client.timeout.read or budget)
            if self.propagate_deadline:
                outbound_headers.update(deadline_headers())

        return await self.client.request(
            method, url, params=params, headers=outbound_headers, **kwargs
        )

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        """GET request"""
        return await self.request("GET", path, params=params, headers=headers)


__all__ = ["BaseServiceClient"]
