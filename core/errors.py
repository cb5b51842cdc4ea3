"""
Shared Error Taxonomy

Base exceptions for every microservice plus the FastAPI handler that renders
them as the common error envelope:

    {"message": "...", "code": 422, "trace_id": "..."}

Service-specific errors live in each service's protocols.py and subclass
ServiceError so the same handler covers them.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for per-request errors that map to one HTTP status"""

    status_code: int = 500
    message: str = "internal server error"

    def __init__(self, message: Optional[str] = None, trace_id: Optional[str] = None):
        self.message = message or self.message
        self.trace_id = trace_id
        super().__init__(self.message)

    def to_envelope(self) -> Dict[str, Any]:
        envelope: Dict[str, Any] = {"message": self.message, "code": self.status_code}
        if self.trace_id:
            envelope["trace_id"] = self.trace_id
        return envelope


class InvalidPostalCodeError(ServiceError):
    """Raised when a CEP is not exactly 8 ASCII digits"""

    status_code = 422
    message = "invalid zipcode"

    def __init__(self, cep: Any = None, trace_id: Optional[str] = None):
        self.cep = cep
        super().__init__(trace_id=trace_id)


class DeadlineExceededError(Exception):
    """Raised when the request budget is spent before an outbound call"""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Deadline exceeded before calling {target}")


class ConfigurationMissingError(Exception):
    """Raised at startup when a required setting is absent. Never per request."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Required configuration missing: {setting}")


# =============================================================================
# FastAPI integration
# =============================================================================

async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.warning(
        f"Error: {exc.message}, Code: {exc.status_code}, TraceID: {exc.trace_id or '-'} "
        f"({request.method} {request.url.path})"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


def register_error_handlers(app: FastAPI) -> None:
    """Render every ServiceError raised by a route as the error envelope"""
    app.add_exception_handler(ServiceError, service_error_handler)


__all__ = [
    "ServiceError",
    "InvalidPostalCodeError",
    "DeadlineExceededError",
    "ConfigurationMissingError",
    "register_error_handlers",
]
