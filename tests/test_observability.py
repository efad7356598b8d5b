"""Tests for Prometheus metrics exposition and request tracing."""

from __future__ import annotations

import re

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace import sampling
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)

from beacon.core.application import get_application
from beacon.core.config import Configuration
from beacon.infrastructure.observability.bootstrap import (
    _sampler,
    _setup_fastapi_instrumentation,
    _tracer_provider,
    traced_url_exclusions,
)


def test_metrics_are_exposed_in_prometheus_format(client: TestClient) -> None:
    client.get('/404')

    resp = client.get('/metrics')

    assert resp.status_code == 200
    assert resp.headers['content-type'].startswith('text/plain')
    assert 'http_requests_total' in resp.text
    assert 'handler="/404"' in resp.text


def test_liveness_requests_are_not_counted(client: TestClient) -> None:
    for _ in range(3):
        client.get('/up')

    resp = client.get('/metrics')

    assert 'handler="/up"' not in resp.text


def test_metrics_can_be_disabled(use_config, auth_headers: dict[str, str]) -> None:
    app = get_application(config=use_config(OBSERVABILITY_ENABLED='false'))

    with TestClient(app) as test_client:
        resp = test_client.get('/metrics', headers=auth_headers)

    assert resp.status_code == 404


def test_independent_apps_keep_separate_metrics(
    config: Configuration, auth_headers: dict[str, str]
) -> None:
    first = get_application(config=config)
    second = get_application(config=config)

    for app in (first, second):
        with TestClient(app) as test_client:
            assert test_client.get('/up').status_code == 200
            resp = test_client.get('/metrics', headers=auth_headers)
            assert resp.status_code == 200


def test_sampler_follows_ratio() -> None:
    assert _sampler(1.0) is sampling.ALWAYS_ON
    assert _sampler(1.5) is sampling.ALWAYS_ON
    assert _sampler(0.0) is sampling.ALWAYS_OFF
    assert _sampler(-1.0) is sampling.ALWAYS_OFF

    partial = _sampler(0.25)
    assert isinstance(partial, sampling.TraceIdRatioBased)
    assert partial.rate == 0.25


# ── Tracing ───────────────────────────────────────────────────────────────────


@pytest.fixture()
def spans() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture()
def traced_client(config: Configuration, spans: InMemorySpanExporter) -> TestClient:
    app = FastAPI()

    @app.get('/up')
    async def up() -> dict[str, str]:
        return {'status': 'OK'}

    @app.get('/upload')
    async def upload() -> dict[str, str]:
        return {'status': 'stored'}

    provider = _tracer_provider(config)
    provider.add_span_processor(SimpleSpanProcessor(spans))
    _setup_fastapi_instrumentation(app, config, provider)

    return TestClient(app)


def test_liveness_requests_are_not_traced(
    traced_client: TestClient, spans: InMemorySpanExporter
) -> None:
    traced_client.get('/up')
    traced_client.get('/up', params={'verbose': 'true'})

    assert spans.get_finished_spans() == ()


def test_lookalike_paths_are_traced(
    traced_client: TestClient, spans: InMemorySpanExporter
) -> None:
    traced_client.get('/upload')

    assert spans.get_finished_spans()


def test_custom_metrics_path_is_excluded_from_tracing(use_config) -> None:
    patterns = traced_url_exclusions(
        use_config(OBSERVABILITY_METRICS_PATH='/prom')
    ).split(',')

    assert any(re.search(p, 'http://testserver/prom') for p in patterns)
    assert not any(re.search(p, 'http://testserver/promotions') for p in patterns)
    assert not any(re.search(p, 'http://testserver/upgrade') for p in patterns)
