from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.flask import FlaskInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from models import db


def actor_attributes(actor):
    if actor is None:
        return {}
    return {
        "enduser.id": actor.id,
        "enduser.role": actor.role,
        "app.country": actor.country,
    }


def _request_actor():
    try:
        from flask import g
        return getattr(g, "actor", None)
    except RuntimeError:
        # outside an app context
        return None


def tag_current_span(actor):
    """Label the active request span with who is acting and in which partition."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(actor_attributes(actor))


class ActorSpanProcessor(SpanProcessor):
    """Copies the request's actor onto every span started while it is known.

    Query spans opened after authentication carry the role and country, so a
    trace shows which partition a statement ran for.
    """

    def on_start(self, span, parent_context=None):
        attributes = actor_attributes(_request_actor())
        if attributes:
            span.set_attributes(attributes)


def build_provider(app):
    service_name = app.config.get("OTEL_SERVICE_NAME", "food-ordering-backend")
    resource = Resource.create({
        "service.name": service_name,
        "deployment.environment": "testing" if app.config.get("TESTING") else (
            "development" if app.config.get("DEBUG") else "production"
        ),
    })
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(ActorSpanProcessor())
    if app.config.get("DEBUG"):
        exporter = ConsoleSpanExporter()
    else:
        exporter = OTLPSpanExporter(endpoint=app.config.get("OTEL_EXPORTER_OTLP_ENDPOINT"))
    provider.add_span_processor(BatchSpanProcessor(exporter))
    return provider


def init_tracing(app):
    """Initialize OpenTelemetry tracing for the Flask app."""
    trace.set_tracer_provider(build_provider(app))
    set_global_textmap(TraceContextTextMapPropagator())

    FlaskInstrumentor().instrument_app(app)
    with app.app_context():
        SQLAlchemyInstrumentor().instrument(engine=db.engine)
