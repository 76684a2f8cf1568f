"""
External API clients for the relay upstream, ViaCEP and WeatherAPI.
"""

import asyncio
import logging
from typing import Dict, Optional, Protocol

import aiohttp
from opentelemetry.context import Context
from opentelemetry.propagate import inject
from pydantic import ValidationError

from cep_weather.config import ServiceConfig
from cep_weather.errors import (
    WEATHER_DECODE_FAILED,
    WEATHER_FETCH_FAILED,
    DecodeError,
    LocationFetchError,
    TransportError,
    UpstreamError,
    WeatherFetchError,
    ZipcodeNotFoundError,
)
from cep_weather.models import CurrentWeather, ViaCepResponse, WeatherApiResponse, WeatherReading

logger = logging.getLogger(__name__)


def _trace_headers(context: Optional[Context]) -> Dict[str, str]:
    """Build outbound headers carrying the given trace context."""
    headers: Dict[str, str] = {}
    inject(headers, context=context)
    return headers


class LocationResolver(Protocol):
    """Resolves a zipcode to a city name."""

    async def resolve(self, zipcode: str, context: Optional[Context] = None) -> str: ...


class WeatherFetcher(Protocol):
    """Fetches current weather for a city name."""

    async def fetch(self, location: str, context: Optional[Context] = None) -> CurrentWeather: ...


class WeatherRelayClient:
    """
    Client for the relay upstream that answers GET {base}/{zipcode} with a temperature triple.
    """

    def __init__(self, base_url: str, timeout: float):
        """
        Initialize the relay client.

        Args:
            base_url: Upstream base URL, joined with the zipcode as a path segment
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "WeatherRelayClient":
        return cls(config.external_call_url, config.request_timeout)

    async def get_weather(self, zipcode: str, context: Optional[Context] = None) -> WeatherReading:
        """
        Get the temperature triple for a zipcode, propagating the trace context.

        Args:
            zipcode: Validated 8-digit zipcode
            context: Trace context to inject into the outbound request headers

        Returns:
            WeatherReading: Temperatures reported by the upstream

        Raises:
            ZipcodeNotFoundError: If the upstream answers 404
            UpstreamError: If the upstream answers any other non-200 status
            DecodeError: If a 200 body cannot be decoded
            TransportError: If the upstream cannot be reached
        """
        url = f"{self.base_url}/{zipcode}"
        headers = _trace_headers(context)

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                logger.debug("Requesting relayed weather data: %s", url)
                async with session.get(url, headers=headers) as response:
                    status = response.status
                    reason = response.reason
                    body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Relay upstream unreachable for %s: %s", zipcode, str(e))
            raise TransportError(f"{WEATHER_FETCH_FAILED}: {e}") from e

        if status == 404:
            logger.warning("Relay upstream has no data for zipcode %s", zipcode)
            raise ZipcodeNotFoundError()

        if status != 200:
            logger.error("Relay upstream error for %s (status: %d)", zipcode, status)
            raise UpstreamError(f"{WEATHER_FETCH_FAILED}: {status} {reason}", status_code=status)

        try:
            return WeatherReading.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"{WEATHER_DECODE_FAILED}: {e}") from e


class ViaCepClient:
    """Geocoding client resolving a zipcode to a city through ViaCEP."""

    def __init__(self, base_url: str, timeout: float):
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "ViaCepClient":
        return cls(config.viacep_base_url, config.request_timeout)

    async def resolve(self, zipcode: str, context: Optional[Context] = None) -> str:
        """
        Resolve a zipcode to its city name.

        An empty ``localidade`` is how ViaCEP reports an unknown zipcode.
        """
        url = f"{self.base_url}/ws/{zipcode}/json/"
        headers = _trace_headers(context)

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                logger.debug("Requesting location for zipcode: %s", zipcode)
                async with session.get(url, headers=headers) as response:
                    status = response.status
                    body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("ViaCEP unreachable for %s: %s", zipcode, str(e))
            raise TransportError(str(e) or type(e).__name__) from e

        if status != 200:
            logger.error("ViaCEP error for %s (status: %d)", zipcode, status)
            raise LocationFetchError(status_code=status)

        try:
            location = ViaCepResponse.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(str(e)) from e

        if location.localidade == "":
            logger.warning("ViaCEP has no locality for zipcode %s", zipcode)
            raise ZipcodeNotFoundError()

        return location.localidade


class WeatherApiClient:
    """Client for the WeatherAPI current conditions endpoint."""

    def __init__(self, api_key: str, base_url: str, timeout: float):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "WeatherApiClient":
        return cls(config.weather_api_key, config.weatherapi_base_url, config.request_timeout)

    async def fetch(self, location: str, context: Optional[Context] = None) -> CurrentWeather:
        url = f"{self.base_url}/v1/current.json"
        params = {"key": self.api_key, "q": location}
        headers = _trace_headers(context)

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                logger.debug("Requesting weather data for location: %s", location)
                async with session.get(url, params=params, headers=headers) as response:
                    status = response.status
                    body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("WeatherAPI unreachable for %s: %s", location, str(e))
            raise TransportError(f"{WEATHER_FETCH_FAILED}: {e}") from e

        if status != 200:
            logger.error("WeatherAPI error for %s (status: %d)", location, status)
            raise WeatherFetchError(status_code=status)

        try:
            return WeatherApiResponse.model_validate_json(body).current
        except ValidationError as e:
            raise DecodeError(f"{WEATHER_FETCH_FAILED}: {e}") from e
