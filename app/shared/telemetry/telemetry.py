"""OpenTelemetry tracing for the audit service.

Spans come from inbound API requests, outbound Snipe-IT calls, the audit
store and any function decorated with ``traced``. Log records gain
trace/span ids once logging is instrumented.
"""

import logging
from collections.abc import Callable

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import Settings

logger = logging.getLogger(__name__)

# Health probes would otherwise produce one span per poll.
UNTRACED_URLS = "/api/health"


class Telemetry:
    """Owns the tracer provider and the instrumentors hooked onto it."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
        exporter: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.exporter = exporter
        self.otlp_endpoint = otlp_endpoint
        self.sample_rate = sample_rate
        self.provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Telemetry":
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
            exporter=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )

    def _build_exporter(self) -> SpanExporter | None:
        """Pick the span exporter; None means spans are sampled but not shipped."""
        kind = self.exporter.lower()
        if kind == "none":
            return None
        if kind == "otlp":
            if not self.otlp_endpoint:
                logger.warning("TELEMETRY_OTLP_ENDPOINT is empty, falling back to console")
                return ConsoleSpanExporter()
            return OTLPSpanExporter(
                endpoint=self.otlp_endpoint,
                insecure=self.otlp_endpoint.startswith("http://"),
            )
        if kind != "console":
            logger.warning("Unknown telemetry exporter %r, using console", self.exporter)
        return ConsoleSpanExporter()

    def start(self) -> TracerProvider | None:
        """Create the tracer provider and register it globally.

        Failures are logged and leave telemetry off; the API keeps serving.
        """
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.service_name,
                        SERVICE_VERSION: self.service_version,
                        "deployment.environment": self.environment,
                    }
                ),
                sampler=TraceIdRatioBased(self.sample_rate),
            )
            exporter = self._build_exporter()
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception as e:
            logger.exception("Tracing could not be started: %s", e)
            return None
        self.provider = provider
        logger.info(
            "Tracing started for %s %s (exporter=%s, sample_rate=%s)",
            self.service_name,
            self.service_version,
            self.exporter,
            self.sample_rate,
        )
        return provider

    def _hook(self, what: str, attach: Callable[[TracerProvider], None]) -> None:
        if self.provider is None:
            return
        try:
            attach(self.provider)
        except Exception as e:
            logger.exception("Could not instrument %s: %s", what, e)
        else:
            logger.debug("Instrumented %s", what)

    def instrument_app(self, app: FastAPI) -> None:
        """Inbound requests, outbound httpx calls and log records."""
        self._hook(
            "fastapi",
            lambda provider: FastAPIInstrumentor.instrument_app(
                app, tracer_provider=provider, excluded_urls=UNTRACED_URLS
            ),
        )
        self._hook(
            "httpx",
            lambda provider: HTTPXClientInstrumentor().instrument(tracer_provider=provider),
        )
        self._hook(
            "logging",
            lambda provider: LoggingInstrumentor().instrument(
                tracer_provider=provider, set_logging_format=True
            ),
        )

    def instrument_engine(self, engine: AsyncEngine) -> None:
        """Audit store queries; the instrumentor needs the sync engine underneath."""
        self._hook(
            "sqlalchemy",
            lambda provider: SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=provider
            ),
        )

    def shutdown(self) -> None:
        """Flush pending spans."""
        if self.provider is None:
            return
        try:
            self.provider.shutdown()
        except Exception as e:
            logger.exception("Tracing shutdown failed: %s", e)
        self.provider = None


_active: Telemetry | None = None


def get_telemetry() -> Telemetry | None:
    """Telemetry started by the lifespan, if any."""
    return _active


def set_telemetry(telemetry: Telemetry | None) -> None:
    global _active
    _active = telemetry
