"""
FastAPI application exposing the zipcode relay and lookup endpoints.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry import trace
from pydantic import ValidationError

from cep_weather import __version__
from cep_weather.config import ServiceConfig
from cep_weather.errors import ZIPCODE_NOT_FOUND, ZipcodeWeatherError
from cep_weather.external_api import ViaCepClient, WeatherApiClient, WeatherRelayClient
from cep_weather.models import CepRequest, ErrorResponse, WeatherReading
from cep_weather.telemetry import configure_tracing, extract_context
from cep_weather.weather_service import TemperatureLookupService, TemperatureRelayService

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[ServiceConfig] = None, tracer: Optional[trace.Tracer] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Service configuration (defaults to the environment)
        tracer: Tracer for request spans (defaults to a provider built from config)

    Returns:
        FastAPI: Configured application
    """
    config = config or ServiceConfig.from_env()
    provider = None
    if tracer is None:
        provider = configure_tracing(config)
        tracer = provider.get_tracer(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI):  # pylint: disable=unused-argument
        yield
        if provider is not None:
            # Flush spans still buffered by the batch processor
            provider.shutdown()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="CEP Weather Service",
        description="Temperature lookup by Brazilian zipcode",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """Root endpoint providing API information."""
        return {
            "service": "CEP Weather Service",
            "version": __version__,
            "status": "active",
            "endpoints": {
                "relay_weather": "POST /weather",
                "lookup_weather": "/weather/{zipcode}",
                "health_check": "/health",
                "documentation": "/docs",
            },
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.post("/weather", response_model=WeatherReading)
    async def relay_weather(request: Request):
        """
        Relay a zipcode from the request body to the weather upstream.

        Returns:
            WeatherReading: Temperatures for the zipcode

        Raises:
            HTTPException: 400 for a bad body or upstream failure,
                422 for an invalid zipcode, 404 for an unknown zipcode
        """
        body = await request.body()
        try:
            # A JSON null body decodes to an empty request, leaving cep unset
            if body.strip() == b"null":
                payload = CepRequest()
            else:
                payload = CepRequest.model_validate_json(body)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail="Invalid request body") from e

        parent = extract_context(request.headers)
        with tracer.start_as_current_span(config.request_name_otel, context=parent) as span:
            context = trace.set_span_in_context(span, parent)
            service = TemperatureRelayService(WeatherRelayClient.from_config(config))
            try:
                return await service.execute(payload.cep, context)
            except ZipcodeWeatherError as e:
                if e.is_input_error:
                    raise HTTPException(status_code=422, detail=e.message) from e
                logger.warning("Relay failed for %r: %s", payload.cep, e.message)
                if e.message == ZIPCODE_NOT_FOUND:
                    raise HTTPException(status_code=404, detail=e.message) from e
                raise HTTPException(status_code=400, detail=e.message) from e

    @app.get("/weather/{zipcode}")
    async def lookup_weather(zipcode: str, request: Request) -> Dict[str, float]:
        """
        Resolve a zipcode to its city and return the city's temperatures.

        Raises:
            HTTPException: 404 for an unknown zipcode, 500 for anything else
        """
        parent = extract_context(request.headers)
        with tracer.start_as_current_span(config.request_name_otel, context=parent) as span:
            context = trace.set_span_in_context(span, parent)
            service = TemperatureLookupService(
                ViaCepClient.from_config(config), WeatherApiClient.from_config(config)
            )
            try:
                return await service.execute(zipcode, context)
            except ZipcodeWeatherError as e:
                logger.warning("Lookup failed for %s: %s", zipcode, e.message)
                if e.message == ZIPCODE_NOT_FOUND:
                    raise HTTPException(status_code=404, detail=e.message) from e
                raise HTTPException(status_code=500, detail=e.message) from e

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):  # pylint: disable=unused-argument
        """Global exception handler for unhandled errors."""
        logger.error("Unhandled exception: %s", str(exc))
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal Server Error",
                message="An unexpected error occurred",
                status_code=500,
            ).model_dump(),
        )

    return app
