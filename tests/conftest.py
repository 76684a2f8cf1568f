"""
Pytest configuration and shared fixtures.
"""

from typing import Awaitable, Callable, Iterable

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from cep_weather.config import ServiceConfig


@pytest.fixture
def sample_zipcode() -> str:
    """Sample valid zipcode for testing."""
    return "12345678"


@pytest.fixture
def sample_api_key() -> str:
    """Sample WeatherAPI key for testing."""
    return "test_weatherapi_key_123"


@pytest.fixture
def mock_relay_response() -> dict:
    """Relay upstream body for a known zipcode."""
    return {"temp_c": 25.5, "temp_f": 77.9, "temp_k": 298.65}


@pytest.fixture
def mock_viacep_response() -> dict:
    """ViaCEP body for a known zipcode."""
    return {
        "cep": "12345-678",
        "logradouro": "Avenida Paulista",
        "bairro": "Bela Vista",
        "localidade": "São Paulo",
        "uf": "SP",
    }


@pytest.fixture
def mock_weatherapi_response() -> dict:
    """WeatherAPI current.json body."""
    return {
        "location": {"name": "Sao Paulo", "country": "Brazil"},
        "current": {"temp_c": 25.5, "temp_f": 77.9, "humidity": 65},
    }


@pytest.fixture
def test_config(sample_api_key) -> ServiceConfig:
    """Configuration pointing at unreachable upstreams."""
    return ServiceConfig(
        weather_api_key=sample_api_key,
        external_call_url="http://127.0.0.1:1/weather",
        viacep_base_url="http://127.0.0.1:1",
        weatherapi_base_url="http://127.0.0.1:1",
        request_name_otel="test-request",
        request_timeout=2.0,
    )


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracer(span_exporter):
    """SDK tracer whose finished spans land in span_exporter."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider.get_tracer("tests")


@pytest.fixture
def fake_upstream() -> Callable[..., Awaitable]:
    """
    Run a coroutine against an in-process aiohttp server.

    Usage: await fake_upstream(routes, lambda base_url: client_call(base_url))
    """

    async def run(routes: Iterable[web.RouteDef], call: Callable[[str], Awaitable]):
        app = web.Application()
        app.add_routes(routes)
        async with TestServer(app) as server:
            return await call(f"http://{server.host}:{server.port}")

    return run
