#!/usr/bin/env python3
"""Configuration for the CEP weather services

Configuration pieces:
- service_config: per-service endpoints, API keys and request budgets
- tracing_config: OpenTelemetry exporter settings
- logging_config: logging configuration

Every config is a frozen dataclass built with from_env() once at startup.
load_environment() pulls an optional .env file into the process environment
first; real environment variables always win.
"""
import os
from dotenv import load_dotenv

from .logging_config import LoggingConfig
from .service_config import GatewayServiceConfig, TemperatureServiceConfig
from .tracing_config import TracingConfig

ENV_FILES = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}


def load_environment() -> str:
    """Load the .env file for the current ENV, returning the environment name"""
    env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
    load_dotenv(ENV_FILES.get(env, ENV_FILES["development"]), override=False)
    load_dotenv(".env", override=False)
    return env


__all__ = [
    'load_environment',
    'LoggingConfig',
    'TracingConfig',
    'GatewayServiceConfig',
    'TemperatureServiceConfig',
]
