"""Tests for the gunicorn runner options."""

from __future__ import annotations

import multiprocessing

from beacon.core.config import Configuration
from beacon.main import gunicorn_options


def test_single_worker_outside_production(config: Configuration) -> None:
    options = gunicorn_options(config)

    assert options['workers'] == 1
    assert options['worker_class'] == 'uvicorn.workers.UvicornWorker'
    assert options['bind'] == f'{config.api.host}:{config.api.port}'
    assert options['reload'] is False


def test_production_scales_workers_with_cpus(use_config) -> None:
    options = gunicorn_options(use_config(ENVIRONMENT='production'))

    assert options['workers'] == multiprocessing.cpu_count() * 2 + 1
    assert options['reload'] is False


def test_development_reloads(use_config) -> None:
    assert gunicorn_options(use_config(ENVIRONMENT='development'))['reload'] is True
