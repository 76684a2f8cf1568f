"""
OpenTelemetry setup and inbound trace context extraction.
"""

import logging
from typing import Mapping

from opentelemetry.context import Context
from opentelemetry.propagate import extract
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from cep_weather.config import ServiceConfig

logger = logging.getLogger(__name__)


def extract_context(headers: Mapping[str, str]) -> Context:
    """Rebuild the caller's trace context from inbound HTTP headers."""
    return extract(headers)


def configure_tracing(config: ServiceConfig) -> TracerProvider:
    """
    Build a tracer provider for the service.

    Args:
        config: Service configuration; only service_name and otel_console_export are read

    Returns:
        TracerProvider: Provider to obtain the request tracer from
    """
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: config.service_name}))
    if config.otel_console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        logger.info("Console span export enabled for %s", config.service_name)
    return provider
