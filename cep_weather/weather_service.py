"""
Service layer for the two zipcode-to-temperature pipelines.
"""

import logging
from typing import Any, Dict, Optional

from opentelemetry.context import Context

from cep_weather.errors import InvalidZipcodeError
from cep_weather.external_api import LocationResolver, WeatherFetcher, WeatherRelayClient
from cep_weather.models import WeatherReading
from cep_weather.validation import is_valid_zipcode

logger = logging.getLogger(__name__)

KELVIN_OFFSET = 273.15


class TemperatureRelayService:
    """
    Validates a loosely typed zipcode and relays it to a single weather upstream.
    """

    def __init__(self, client: WeatherRelayClient):
        """
        Initialize the relay service.

        Args:
            client: Client for the upstream weather endpoint
        """
        self.client = client

    async def execute(self, zipcode: Any, context: Optional[Context] = None) -> WeatherReading:
        """
        Get the temperature triple for a zipcode.

        Args:
            zipcode: Raw zipcode taken from the request body, of any JSON type
            context: Trace context of the inbound request

        Returns:
            WeatherReading: Temperatures reported by the upstream

        Raises:
            InvalidZipcodeError: If zipcode is not an 8-digit string
            ZipcodeWeatherError: Any upstream-layer failure, unchanged
        """
        if not isinstance(zipcode, str):
            logger.warning("Zipcode is not a string: %r", zipcode)
            raise InvalidZipcodeError()

        if not is_valid_zipcode(zipcode):
            logger.warning("Invalid zipcode format: %r", zipcode)
            raise InvalidZipcodeError()

        return await self.client.get_weather(zipcode, context)


class TemperatureLookupService:
    """
    Resolves a zipcode to a city, then fetches and normalizes that city's temperature.
    """

    def __init__(self, resolver: LocationResolver, fetcher: WeatherFetcher):
        self.resolver = resolver
        self.fetcher = fetcher

    async def execute(self, zipcode: str, context: Optional[Context] = None) -> Dict[str, float]:
        """
        Get Celsius, Fahrenheit and Kelvin temperatures for a zipcode.

        Kelvin is derived from the provider's Celsius value.
        """
        if not is_valid_zipcode(zipcode):
            logger.warning("Invalid zipcode format: %r", zipcode)
            raise InvalidZipcodeError()

        location = await self.resolver.resolve(zipcode, context)
        weather = await self.fetcher.fetch(location, context)

        return {
            "temp_C": weather.temp_c,
            "temp_F": weather.temp_f,
            "temp_K": weather.temp_c + KELVIN_OFFSET,
        }
