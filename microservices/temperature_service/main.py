"""
Temperature Service - Main Application

Resolves a CEP to its city's current temperature in °C, °F and K.

Run:
    uvicorn microservices.temperature_service.main:create_app --factory --port 8090
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Path, Request
from fastapi.responses import Response

from core.config import LoggingConfig, TemperatureServiceConfig, TracingConfig, load_environment
from core.errors import register_error_handlers
from core.logger import setup_service_logger
from core.request_context import (
    CLIENT_CLOSED_REQUEST,
    ClientDisconnectedError,
    inbound_request_scope,
    run_until_disconnected,
)
from core.tracing import init_tracing, shutdown_tracing

from .factory import create_temperature_service
from .models import ErrorEnvelope, TemperatureReport
from .temperature_service import TemperatureService

SERVICE_NAME = "temperature_service"
SERVICE_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    404: {"model": ErrorEnvelope, "description": "CEP not found"},
    422: {"model": ErrorEnvelope, "description": "Invalid CEP"},
    500: {"model": ErrorEnvelope, "description": "Lookup failure"},
}


class TemperatureMicroservice:
    """Holds the service and the tracer provider for the app's lifetime"""

    def __init__(self, config: TemperatureServiceConfig, service: TemperatureService, tracer_provider=None):
        self.config = config
        self.service = service
        self.tracer_provider = tracer_provider

    async def shutdown(self):
        try:
            await self.service.close()
        finally:
            shutdown_tracing(self.tracer_provider)
        logger.info("Temperature service shutting down")


def create_app(
    config: Optional[TemperatureServiceConfig] = None,
    tracing_config: Optional[TracingConfig] = None,
    service: Optional[TemperatureService] = None,
) -> FastAPI:
    """
    Build the temperature service application.

    Configuration is read and validated here, before the app can accept a
    request; a missing WEATHERAPI_KEY raises ConfigurationMissingError.

    Args:
        config: Service configuration (from the environment if omitted)
        tracing_config: Tracing configuration (from the environment if omitted)
        service: Pre-built TemperatureService (tests inject one with mocks)
    """
    if config is None or tracing_config is None:
        load_environment()
    config = (config or TemperatureServiceConfig.from_env()).validate()
    tracing_config = (tracing_config or TracingConfig.from_env()).validate()

    setup_service_logger(SERVICE_NAME, LoggingConfig.from_env(SERVICE_NAME))
    tracer_provider = init_tracing(SERVICE_NAME, tracing_config)
    microservice = TemperatureMicroservice(
        config=config,
        service=service or create_temperature_service(config),
        tracer_provider=tracer_provider,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"✅ Temperature service started ({config.describe()})")
        yield
        await microservice.shutdown()

    app = FastAPI(
        title="Temperature Service",
        description="Resolves a CEP to its city's current temperature",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.microservice = microservice
    register_error_handlers(app)

    # =============================================================================
    # Health Check
    # =============================================================================

    @app.get("/health")
    async def health_check():
        """Health check"""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
        }

    # =============================================================================
    # Temperature Endpoint
    # =============================================================================

    @app.get("/cep/{cep}", response_model=TemperatureReport, responses=ERROR_RESPONSES)
    async def get_temperature_by_cep(
        request: Request,
        cep: str = Path(..., description="8-digit CEP"),
    ):
        """
        Get the current temperature for a CEP's city

        - **cep**: 8-digit Brazilian postal code
        """
        with inbound_request_scope(request.headers, config.request_timeout):
            try:
                return await run_until_disconnected(request, microservice.service.resolve(cep))
            except ClientDisconnectedError:
                return Response(status_code=CLIENT_CLOSED_REQUEST)

    return app


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    import uvicorn

    load_environment()
    config = TemperatureServiceConfig.from_env()
    uvicorn.run(
        "microservices.temperature_service.main:create_app",
        factory=True,
        host=config.service_host,
        port=config.service_port,
    )


if __name__ == "__main__":
    main()
