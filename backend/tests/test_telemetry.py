from __future__ import annotations

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.semconv.resource import ResourceAttributes

from app.config import AppSettings
from app.core.telemetry import build_tracer_provider, get_tracer, setup_telemetry


def test_disabled_telemetry_leaves_app_uninstrumented():
    app = FastAPI()
    assert setup_telemetry(app, AppSettings(telemetry_enabled=False)) is False
    assert not getattr(app, "_is_instrumented_by_opentelemetry", False)


def test_tracer_provider_names_the_service():
    settings = AppSettings(telemetry_service_name="networth-test", telemetry_sample_ratio=0.5)
    provider = build_tracer_provider(settings)
    try:
        attributes = provider.resource.attributes
        assert attributes[ResourceAttributes.SERVICE_NAME] == "networth-test"
        assert attributes[ResourceAttributes.SERVICE_NAMESPACE] == "networth"
    finally:
        provider.shutdown()


def test_get_tracer_is_usable_without_setup():
    tracer = get_tracer("networth.tests")
    with tracer.start_as_current_span("networth.noop") as span:
        assert isinstance(span, trace.Span)
