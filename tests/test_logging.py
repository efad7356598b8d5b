"""Tests for loguru setup and the access-log middleware."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from beacon.core.logging import setup_logging


@pytest.fixture()
def restore_logging() -> Iterator[None]:
    yield
    setup_logging()


@pytest.mark.usefixtures('restore_logging')
def test_file_sinks_receive_sanitized_records(use_config, tmp_path: Path) -> None:
    log_file = tmp_path / 'app.log'
    use_config(LOG_TO_FILE='true', LOG_FILE_PATH=str(log_file))

    setup_logging()
    logger.info('calling upstream with Authorization: Bearer very-secret')
    logger.error('upstream failed')
    logger.remove()

    written = log_file.read_text()
    assert 'very-secret' not in written
    assert '<REDACTED_AUTH>' in written
    assert 'upstream failed' in (tmp_path / 'error.log').read_text()


@pytest.mark.usefixtures('restore_logging')
def test_loki_without_handler_package_only_warns(
    use_config, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setitem(sys.modules, 'loki_logger_handler', None)
    use_config(LOG_TO_LOKI='true', LOG_TO_STDERR='true')

    setup_logging()
    logger.remove()

    assert 'loki-logger-handler is not installed' in capsys.readouterr().err


@pytest.mark.usefixtures('restore_logging')
def test_stderr_sink_writes_json_records(
    use_config, capsys: pytest.CaptureFixture[str]
) -> None:
    use_config(LOG_JSON='true', LOG_TO_STDERR='true')

    setup_logging()
    logger.info('hello')
    logger.remove()

    line = capsys.readouterr().err.strip().splitlines()[-1]
    assert json.loads(line)['record']['message'] == 'hello'


def test_access_log_line_per_request(client: TestClient) -> None:
    records: list[dict[str, Any]] = []
    sink_id = logger.add(
        lambda message: records.append(message.record), level='INFO'
    )
    try:
        client.get(
            '/up',
            headers={
                'X-Request-ID': 'req-7',
                'X-Forwarded-For': '203.0.113.9, 10.0.0.1',
            },
        )
    finally:
        logger.remove(sink_id)

    access = [r for r in records if r['extra'].get('event') == 'request']
    assert len(access) == 1
    extra = access[0]['extra']
    assert extra['request_id'] == 'req-7'
    assert extra['method'] == 'GET'
    assert extra['path'] == '/up'
    assert extra['status_code'] == 200
    assert extra['client_ip'] == '203.0.113.9'
    assert access[0]['message'] == 'GET /up 200'
