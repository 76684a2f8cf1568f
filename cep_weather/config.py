"""
Configuration for the CEP weather services.
"""

import os

from pydantic import BaseModel


class ExternalAPIConfig:
    """External API configuration"""

    VIACEP_BASE_URL = "https://viacep.com.br"
    WEATHERAPI_BASE_URL = "http://api.weatherapi.com"
    DEFAULT_TIMEOUT = 10.0


class ServiceConfig(BaseModel):
    """Runtime configuration passed explicitly into clients, services and the app."""

    weather_api_key: str = ""
    external_call_url: str = "http://localhost:8081/weather"
    request_name_otel: str = "cep-weather-request"
    viacep_base_url: str = ExternalAPIConfig.VIACEP_BASE_URL
    weatherapi_base_url: str = ExternalAPIConfig.WEATHERAPI_BASE_URL
    request_timeout: float = ExternalAPIConfig.DEFAULT_TIMEOUT
    service_name: str = "cep-weather"
    otel_console_export: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Build configuration from environment variables, keeping defaults for unset ones."""
        env_map = {
            "weather_api_key": "WEATHER_API_KEY",
            "external_call_url": "EXTERNAL_CALL_URL",
            "request_name_otel": "REQUEST_NAME_OTEL",
            "viacep_base_url": "VIACEP_BASE_URL",
            "weatherapi_base_url": "WEATHERAPI_BASE_URL",
            "request_timeout": "REQUEST_TIMEOUT",
            "service_name": "OTEL_SERVICE_NAME",
            "otel_console_export": "OTEL_CONSOLE_EXPORT",
            "log_level": "LOG_LEVEL",
        }
        values = {
            field: os.environ[var] for field, var in env_map.items() if var in os.environ
        }
        return cls(**values)
