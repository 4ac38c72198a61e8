"""Unit tests for notification policy value types."""

from __future__ import annotations

from datetime import UTC, datetime, time, timedelta

import pytest
from journal_api.services._shared.errors import PolicyMalformedError
from journal_api.services.delivery.policy import Decision, IntervalMode, NotificationPolicy


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("NONE", IntervalMode.NONE),
        ("when_app_opens", IntervalMode.WHEN_APP_OPENS),
        (" DAILY_SPECIFIC_TIME ", IntervalMode.DAILY_SPECIFIC_TIME),
        ("HOURLY", IntervalMode.UNKNOWN),
        ("", IntervalMode.UNKNOWN),
        (None, IntervalMode.UNKNOWN),
    ],
)
def test_interval_mode_parsing(raw, expected):
    assert IntervalMode(raw) is expected


def test_unknown_is_not_selectable():
    assert IntervalMode.UNKNOWN not in IntervalMode.selectable()
    assert len(IntervalMode.selectable()) == 3


def test_default_policy_prompts_when_app_opens():
    policy = NotificationPolicy.default()
    assert policy.interval_mode is IntervalMode.WHEN_APP_OPENS
    assert policy.in_app_enabled is True
    assert policy.last_delivered_at is None


def test_required_time_raises_when_missing():
    policy = NotificationPolicy(interval_mode=IntervalMode.DAILY_SPECIFIC_TIME)
    with pytest.raises(PolicyMalformedError):
        policy.required_time()


def test_required_time_returns_configured_time():
    policy = NotificationPolicy(
        interval_mode=IntervalMode.DAILY_SPECIFIC_TIME, specific_time=time(9, 0)
    )
    assert policy.required_time() == time(9, 0)


def test_delivered_at_never_moves_backwards():
    now = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    policy = NotificationPolicy(last_delivered_at=now)

    assert policy.delivered_at(now - timedelta(minutes=5)).last_delivered_at == now
    assert policy.delivered_at(now + timedelta(minutes=5)).last_delivered_at == now + timedelta(
        minutes=5
    )


def test_delivered_at_accepts_naive_values_as_utc():
    stored = datetime(2025, 3, 1, 12, 0)
    policy = NotificationPolicy(last_delivered_at=stored)
    later = datetime(2025, 3, 1, 13, 0, tzinfo=UTC)
    assert policy.delivered_at(later).last_delivered_at == later


def test_decision_helpers():
    now = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
    assert Decision.no("mode_none") == Decision(deliver=False, reason="mode_none")
    yes = Decision.yes(now, "rearmed")
    assert yes.deliver is True
    assert yes.new_last_delivered_at == now
