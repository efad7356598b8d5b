"""Shared pytest fixtures.

The application is wired once per session in the ``test`` environment.
Tests that need a different configuration swap ``di[Configuration]`` through
``use_config`` and get the original back afterwards.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from kink import di

from beacon.core.config import Configuration, get_config
from beacon.core.container import wire_dependencies


def pytest_configure(config: pytest.Config) -> None:
    os.environ['ENVIRONMENT'] = 'test'
    os.environ['TZ'] = 'UTC'
    os.environ['OBSERVABILITY_TRACING_ENABLED'] = 'false'
    os.environ['LOG_TO_STDERR'] = 'false'


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture(scope='session')
def config() -> Configuration:
    get_config.cache_clear()
    wire_dependencies()
    return di[Configuration]


@pytest.fixture(scope='session')
def application(config: Configuration) -> FastAPI:
    return di[FastAPI]


@pytest.fixture()
def client(application: FastAPI) -> Iterator[TestClient]:
    with TestClient(application) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    return {'Authorization': 'Bearer test-token'}


@pytest.fixture()
def use_config(
    config: Configuration, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Callable[..., Configuration]]:
    """Build a Configuration from env overrides and make it the active one."""

    def _use(**env: str) -> Configuration:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        replacement = Configuration()
        di[Configuration] = replacement
        return replacement

    yield _use
    di[Configuration] = config
