"""Unit tests for the liveness report value object and its builder."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from beacon.core.config import Configuration
from beacon.domain.common.utils import DateTimeUtils
from beacon.domain.health import LIVENESS_STATUS, LivenessReport, check_liveness


def test_check_liveness_uses_given_configuration(config: Configuration) -> None:
    report = check_liveness(config=config)

    assert report.status == LIVENESS_STATUS == 'OK'
    assert report.environment == config.app_environment
    assert report.timestamp.tzinfo is not None


def test_check_liveness_resolves_configuration_from_container(
    config: Configuration,
) -> None:
    report = check_liveness()  # type: ignore[call-arg]

    assert report.environment == 'test'


def test_check_liveness_builds_a_fresh_report_each_call(
    config: Configuration,
) -> None:
    first = check_liveness(config=config)
    second = check_liveness(config=config)

    assert first is not second
    assert second.timestamp >= first.timestamp


def test_report_is_immutable() -> None:
    report = LivenessReport(
        timestamp=datetime(2026, 10, 19, tzinfo=timezone.utc), environment='test'
    )

    with pytest.raises(ValidationError):
        report.environment = 'production'  # type: ignore[misc]


def test_report_rejects_other_status() -> None:
    with pytest.raises(ValidationError):
        LivenessReport(
            status='DOWN',  # type: ignore[arg-type]
            timestamp=datetime.now(timezone.utc),
            environment='test',
        )


def test_report_serializes_timestamp_as_iso8601() -> None:
    report = LivenessReport(
        timestamp=datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc),
        environment='production',
    )

    assert report.model_dump(mode='json') == {
        'status': 'OK',
        'timestamp': '2026-10-19T08:30:00+00:00',
        'environment': 'production',
    }


def test_isoformat_refuses_naive_datetimes() -> None:
    with pytest.raises(ValueError, match='naive'):
        DateTimeUtils.isoformat(datetime(2026, 10, 19, 8, 30))
