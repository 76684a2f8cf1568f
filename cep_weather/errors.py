"""
Exception hierarchy for the CEP weather pipelines.
"""

from typing import Optional

INVALID_ZIPCODE = "invalid zipcode"
ZIPCODE_NOT_FOUND = "can not find zipcode"
LOCATION_FETCH_FAILED = "failed to fetch location"
WEATHER_FETCH_FAILED = "failed to fetch weather data"
WEATHER_DECODE_FAILED = "failed to decode weather data"


class ZipcodeWeatherError(Exception):
    """Base exception for zipcode weather errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_input_error(self) -> bool:
        """True when the caller supplied bad data rather than an upstream failing."""
        return False


class InvalidZipcodeError(ZipcodeWeatherError):
    """Zipcode is not a string of exactly 8 digits."""

    def __init__(self, message: str = INVALID_ZIPCODE):
        super().__init__(message)

    @property
    def is_input_error(self) -> bool:
        return True


class ZipcodeNotFoundError(ZipcodeWeatherError):
    """An upstream could not resolve the zipcode."""

    def __init__(self, message: str = ZIPCODE_NOT_FOUND):
        super().__init__(message, status_code=404)


class UpstreamError(ZipcodeWeatherError):
    """An upstream answered with an unexpected status."""


class LocationFetchError(UpstreamError):
    """Geocoding provider answered with a non-200 status."""

    def __init__(self, message: str = LOCATION_FETCH_FAILED, status_code: Optional[int] = None):
        super().__init__(message, status_code)


class WeatherFetchError(UpstreamError):
    """Weather provider answered with a non-200 status."""

    def __init__(self, message: str = WEATHER_FETCH_FAILED, status_code: Optional[int] = None):
        super().__init__(message, status_code)


class DecodeError(ZipcodeWeatherError):
    """Upstream returned a payload that could not be decoded."""


class TransportError(ZipcodeWeatherError):
    """Upstream could not be reached."""
