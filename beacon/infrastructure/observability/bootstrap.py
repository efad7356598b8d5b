from __future__ import annotations

import re
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider, sampling
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator

from beacon.api import LIVENESS_PATH
from beacon.core.logging import get_logger
from beacon.domain.common.utils import StringUtils

if TYPE_CHECKING:
    from fastapi import FastAPI
    from opentelemetry.sdk.trace.sampling import Sampler

    from beacon.core.config import Configuration

logger = get_logger(__name__)


def _sampler(ratio: float) -> Sampler:
    if ratio >= 1.0:
        return sampling.ALWAYS_ON

    if ratio <= 0.0:
        return sampling.ALWAYS_OFF

    return sampling.TraceIdRatioBased(ratio)


def _exact_url_pattern(path: str) -> str:
    # excluded urls are searched against the full request url
    return f'^[a-z]+://[^/]+{re.escape(path)}$'


def traced_url_exclusions(config: Configuration) -> str:
    """Configured exclusions plus the liveness and metrics endpoints."""
    excluded = [
        url.strip()
        for url in config.observability.excluded_urls.split(',')
        if url.strip()
    ]
    excluded += [
        _exact_url_pattern(LIVENESS_PATH),
        _exact_url_pattern(config.observability.metrics_path),
    ]
    return ','.join(excluded)


def _tracer_provider(config: Configuration) -> TracerProvider:
    resource = Resource.create(
        {
            'service.name': StringUtils.service_name(),
            'service.version': config.app_version,
            'service.namespace': config.app_environment,
            'deployment.environment': config.app_environment,
        }
    )

    return TracerProvider(
        sampler=_sampler(config.observability.tracing_sample_ratio),
        resource=resource,
    )


# noinspection HttpUrlsUsage
def _setup_tracing(config: Configuration) -> TracerProvider:
    """Setup distributed tracing with OpenTelemetry."""
    provider = _tracer_provider(config)

    endpoint = str(config.observability.traces_endpoint)
    if not endpoint.startswith('http'):
        endpoint = f'http://{endpoint}'

    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=endpoint, insecure=True, timeout=30),
            max_queue_size=2048,
            max_export_batch_size=512,
            export_timeout_millis=30000,
            schedule_delay_millis=5000,
        )
    )

    if config.app_debug or config.observability.traces_to_console:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    logger.bind(endpoint=endpoint).info('tracing enabled')

    return provider


def _setup_metrics(app: FastAPI, config: Configuration) -> None:
    metrics_path = config.observability.metrics_path

    # every collector lives in the per-app registry; the in-progress gauge
    # would land in the global one, so it stays off
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_round_latency_decimals=True,
        should_instrument_requests_inprogress=False,
        excluded_handlers=[f'^{LIVENESS_PATH}$', f'^{metrics_path}$'],
        registry=CollectorRegistry(),
    )

    instrumentator.instrument(app).expose(
        app, endpoint=metrics_path, include_in_schema=False
    )


def _setup_fastapi_instrumentation(
    app: FastAPI, config: Configuration, provider: TracerProvider
) -> None:
    """Setup FastAPI-specific instrumentation."""
    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls=traced_url_exclusions(config),
        tracer_provider=provider,
        http_capture_headers_server_request=['content-type', 'user-agent'],
        http_capture_headers_server_response=['content-type', 'content-length'],
    )


def configure_observability(app: FastAPI, config: Configuration) -> None:
    """Configure metrics and, when enabled, tracing for the application."""
    if config.observability.enabled:
        _setup_metrics(app, config)

    if config.observability.tracing_enabled:
        provider = _setup_tracing(config)
        _setup_fastapi_instrumentation(app, config, provider)
