"""Tracing for the net worth API.

Only spans are exported. Requests, portfolio service calls and cache table
queries are instrumented; the engine adds its own ``networth.*`` spans via
:func:`get_tracer`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.semconv.resource import ResourceAttributes
from sqlalchemy.engine import Engine

from app.config import AppSettings

logger = logging.getLogger(__name__)

_instrumented = False


def build_tracer_provider(settings: AppSettings) -> TracerProvider:
    """Return a provider that samples by ratio and ships spans over OTLP/gRPC."""

    resource = Resource.create(
        {
            ResourceAttributes.SERVICE_NAME: settings.telemetry_service_name or settings.app_name,
            ResourceAttributes.SERVICE_NAMESPACE: "networth",
        }
    )
    provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_ratio)),
    )
    exporter = OTLPSpanExporter(
        endpoint=settings.telemetry_otlp_endpoint or None,
        insecure=settings.telemetry_otlp_insecure,
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    return provider


def setup_telemetry(app: FastAPI, settings: AppSettings, engine: Engine | None = None) -> bool:
    """Install the tracer provider and instrumentation once per process.

    Returns ``True`` when instrumentation is active after the call.
    """

    global _instrumented  # noqa: PLW0603

    if _instrumented:
        return True
    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled via configuration")
        return False

    provider = build_tracer_provider(settings)
    trace.set_tracer_provider(provider)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
    HTTPXClientInstrumentor().instrument(tracer_provider=provider)
    if engine is not None:
        SQLAlchemyInstrumentor().instrument(engine=engine, tracer_provider=provider)

    _instrumented = True
    logger.info("Tracing enabled for %s", settings.telemetry_service_name or settings.app_name)
    return True


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer from the global provider; a no-op tracer until tracing is set up."""

    return trace.get_tracer(name)


__all__ = ["build_tracer_provider", "setup_telemetry", "get_tracer"]
