"""
Gateway Service - Main Application

Public edge of the CEP weather platform: POST /cep {"cep": "01001000"}

Run:
    uvicorn microservices.gateway_service.main:create_app --factory --port 8080
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import Response

from core.config import GatewayServiceConfig, LoggingConfig, TracingConfig, load_environment
from core.errors import register_error_handlers
from core.logger import setup_service_logger
from core.request_context import (
    CLIENT_CLOSED_REQUEST,
    ClientDisconnectedError,
    inbound_request_scope,
    run_until_disconnected,
)
from core.tracing import init_tracing, shutdown_tracing
from microservices.temperature_service.models import ErrorEnvelope, TemperatureReport

from .factory import create_gateway_service
from .gateway_service import GatewayService
from .models import CepRequest

SERVICE_NAME = "gateway_service"
SERVICE_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

RESPONSES = {
    200: {"model": TemperatureReport, "description": "Temperature service response, relayed"},
    400: {"model": ErrorEnvelope, "description": "Malformed request body"},
    404: {"model": ErrorEnvelope, "description": "CEP not found"},
    422: {"model": ErrorEnvelope, "description": "Invalid CEP"},
    500: {"model": ErrorEnvelope, "description": "Temperature service unavailable or failed"},
}


class GatewayMicroservice:
    """Holds the service and the tracer provider for the app's lifetime"""

    def __init__(self, config: GatewayServiceConfig, service: GatewayService, tracer_provider=None):
        self.config = config
        self.service = service
        self.tracer_provider = tracer_provider

    async def shutdown(self):
        try:
            await self.service.close()
        finally:
            shutdown_tracing(self.tracer_provider)
        logger.info("Gateway service shutting down")


def create_app(
    config: Optional[GatewayServiceConfig] = None,
    tracing_config: Optional[TracingConfig] = None,
    service: Optional[GatewayService] = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        config: Gateway configuration (from the environment if omitted)
        tracing_config: Tracing configuration (from the environment if omitted)
        service: Pre-built GatewayService (tests inject one)
    """
    if config is None or tracing_config is None:
        load_environment()
    config = (config or GatewayServiceConfig.from_env()).validate()
    tracing_config = (tracing_config or TracingConfig.from_env()).validate()

    setup_service_logger(SERVICE_NAME, LoggingConfig.from_env(SERVICE_NAME))
    tracer_provider = init_tracing(SERVICE_NAME, tracing_config)
    microservice = GatewayMicroservice(
        config=config,
        service=service or create_gateway_service(config),
        tracer_provider=tracer_provider,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"✅ Gateway service started ({config.describe()})")
        yield
        await microservice.shutdown()

    app = FastAPI(
        title="Gateway Service",
        description="Validates a CEP and forwards it to the temperature service",
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
    # CEP Endpoint
    # =============================================================================

    @app.post(
        "/cep",
        responses=RESPONSES,
        openapi_extra={
            "requestBody": {
                "required": True,
                "content": {"application/json": {"schema": CepRequest.model_json_schema()}},
            }
        },
    )
    async def post_cep(request: Request):
        """
        Get the current temperature for a CEP

        The body is parsed here rather than by FastAPI so malformed input
        gets the 400 error envelope.
        """
        body = await request.body()
        with inbound_request_scope(request.headers, config.request_timeout):
            try:
                forwarded = await run_until_disconnected(request, microservice.service.handle(body))
            except ClientDisconnectedError:
                return Response(status_code=CLIENT_CLOSED_REQUEST)
        return Response(
            content=forwarded.content,
            status_code=forwarded.status_code,
            media_type=forwarded.media_type,
        )

    return app


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    import uvicorn

    load_environment()
    config = GatewayServiceConfig.from_env()
    uvicorn.run(
        "microservices.gateway_service.main:create_app",
        factory=True,
        host=config.service_host,
        port=config.service_port,
    )


if __name__ == "__main__":
    main()
