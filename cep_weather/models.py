"""
Pydantic models for request/response validation.

Upstream models decode the way the upstream services' own clients do: numbers
must be JSON numbers, while missing fields and nulls fall back to zero values.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator


class CepRequest(BaseModel):
    """Request body for the relay endpoint. The zipcode may be any JSON value."""

    cep: Any = None


class WeatherReading(BaseModel):
    """Temperature triple returned by the relay upstream."""

    temp_c: float = Field(0.0, strict=True, validation_alias=AliasChoices("temp_c", "temp_C"))
    temp_f: float = Field(0.0, strict=True, validation_alias=AliasChoices("temp_f", "temp_F"))
    temp_k: float = Field(0.0, strict=True, validation_alias=AliasChoices("temp_k", "temp_K"))


class ViaCepResponse(BaseModel):
    """Subset of the ViaCEP lookup response."""

    localidade: str = Field("", strict=True)

    @field_validator("localidade", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class CurrentWeather(BaseModel):
    """Current conditions reported by WeatherAPI."""

    temp_c: float = Field(0.0, strict=True)
    temp_f: float = Field(0.0, strict=True)


class WeatherApiResponse(BaseModel):
    """Model for WeatherAPI current.json response."""

    current: CurrentWeather = Field(default_factory=CurrentWeather)

    @field_validator("current", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class ErrorResponse(BaseModel):
    """Response model for error cases."""

    error: str
    message: str
    status_code: int
