import logging
import os

from opentelemetry import metrics, trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import format_span_id, format_trace_id, get_current_span

from .config import Settings


def _otlp_endpoint() -> str:
    return os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://otel-collector:4318").rstrip("/")


def _log_hook(span, record):
    context = (span or get_current_span()).get_span_context()
    if context and context.is_valid:
        record.__dict__.setdefault("trace_id", format_trace_id(context.trace_id))
        record.__dict__.setdefault("span_id", format_span_id(context.span_id))


def configure_logging(settings: Settings) -> None:
    if not settings.otel_enabled:
        logging.basicConfig(
            level=settings.log_level.upper(),
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
        return
    LoggingInstrumentor().instrument(
        set_logging_format=True,
        log_level=logging.getLevelName(settings.log_level.upper()),
        log_hook=_log_hook,
    )


def configure_otel(app, settings: Settings) -> None:
    configure_logging(settings)
    if not settings.otel_enabled:
        return

    service_name = os.getenv("OTEL_SERVICE_NAME", "book-catalog")
    resource = Resource.create({"service.name": service_name, "service.version": settings.version})

    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{_otlp_endpoint()}/v1/traces")))
    trace.set_tracer_provider(tracer_provider)

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=f"{_otlp_endpoint()}/v1/metrics"),
        export_interval_millis=15000,
    )
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[metric_reader]))

    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(OTLPLogExporter(endpoint=f"{_otlp_endpoint()}/v1/logs")))
    set_logger_provider(logger_provider)
    logging.getLogger().addHandler(LoggingHandler(level=logging.INFO, logger_provider=logger_provider))

    HTTPXClientInstrumentor().instrument()
    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=tracer_provider,
        meter_provider=metrics.get_meter_provider(),
    )
