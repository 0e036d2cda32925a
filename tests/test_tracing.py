import pytest
from app.config import TestingConfig


def load_app(otel_enabled):
    from app import create_app
    config = type("TracingConfig", (TestingConfig,), {
        "OTEL_ENABLED": otel_enabled,
        # console exporter, nothing leaves the process
        "DEBUG": True,
    })
    return create_app(config)


@pytest.fixture()
def test_client():
    return load_app(True).test_client()


def test_traceparent_header(test_client):
    resp = test_client.get("/health")
    assert resp.status_code == 200
    traceparent = resp.headers.get("traceparent")
    assert traceparent
    version, trace_id, span_id, flags = traceparent.split("-")
    assert version == "00"
    assert len(trace_id) == 32
    assert len(span_id) == 16


def test_no_traceparent_without_tracing():
    resp = load_app(False).test_client().get("/health")
    assert resp.status_code == 200
    assert "traceparent" not in resp.headers


def _local_tracer():
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import SimpleSpanProcessor
    from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
    from app.telemetry import ActorSpanProcessor

    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(ActorSpanProcessor())
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider.get_tracer("tests"), exporter


def test_spans_carry_actor_role_and_country():
    from flask import g
    from app.auth.policy import Actor

    tracer, exporter = _local_tracer()
    app = load_app(False)
    with app.test_request_context("/"):
        with tracer.start_as_current_span("anonymous"):
            pass
        g.actor = Actor(id=3, role="manager", country="india")
        with tracer.start_as_current_span("query"):
            pass
    spans = {s.name: s for s in exporter.get_finished_spans()}
    assert "enduser.role" not in spans["anonymous"].attributes
    assert spans["query"].attributes["enduser.id"] == "3"
    assert spans["query"].attributes["enduser.role"] == "manager"
    assert spans["query"].attributes["app.country"] == "india"


def test_tag_current_span_labels_request_span():
    from app.auth.policy import Actor
    from app.telemetry import tag_current_span

    tracer, exporter = _local_tracer()
    with tracer.start_as_current_span("request"):
        tag_current_span(Actor(id=9, role="admin", country="america"))
    span = exporter.get_finished_spans()[0]
    assert span.attributes["enduser.role"] == "admin"
    assert span.attributes["app.country"] == "america"


def test_tag_current_span_without_tracing_is_noop():
    from app.auth.policy import Actor
    from app.telemetry import tag_current_span

    tag_current_span(Actor(id=1, role="member", country="india"))
