"""Unit tests for :class:`DeliveryEligibilityEngine`."""

from __future__ import annotations

from datetime import UTC, datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytest
from journal_api.services.delivery.engine import DeliveryEligibilityEngine
from journal_api.services.delivery.policy import IntervalMode, NotificationPolicy

TODAY_10 = datetime(2025, 3, 1, 10, 0, tzinfo=UTC)


@pytest.fixture()
def engine() -> DeliveryEligibilityEngine:
    return DeliveryEligibilityEngine(rearm_interval=timedelta(hours=3))


def _when_app_opens(last: datetime | None = None, **kwargs) -> NotificationPolicy:
    return NotificationPolicy(
        interval_mode=IntervalMode.WHEN_APP_OPENS, last_delivered_at=last, **kwargs
    )


def _daily(at: time | None, last: datetime | None = None, **kwargs) -> NotificationPolicy:
    return NotificationPolicy(
        interval_mode=IntervalMode.DAILY_SPECIFIC_TIME,
        specific_time=at,
        last_delivered_at=last,
        **kwargs,
    )


# ----------------------------- Master switch ------------------------------ #
@pytest.mark.parametrize(
    "policy",
    [
        _when_app_opens(None, in_app_enabled=False),
        _when_app_opens(TODAY_10 - timedelta(days=3), in_app_enabled=False),
        _daily(time(9, 0), None, in_app_enabled=False),
        _daily(None, None, in_app_enabled=False),
        NotificationPolicy(interval_mode=IntervalMode.UNKNOWN, in_app_enabled=False),
    ],
)
def test_in_app_disabled_never_delivers(engine, policy):
    decision = engine.decide(policy, TODAY_10)
    assert decision.deliver is False
    assert decision.reason == "in_app_disabled"


def test_mode_none_never_delivers(engine):
    decision = engine.decide(NotificationPolicy(interval_mode=IntervalMode.NONE), TODAY_10)
    assert decision.deliver is False
    assert decision.new_last_delivered_at is None


def test_unknown_mode_fails_closed(engine):
    decision = engine.decide(NotificationPolicy(interval_mode=IntervalMode("WEEKLY")), TODAY_10)
    assert decision.deliver is False
    assert decision.reason == "mode_unknown"


# ---------------------------- WHEN_APP_OPENS ------------------------------ #
def test_first_open_delivers(engine):
    decision = engine.decide(_when_app_opens(None), TODAY_10)
    assert decision.deliver is True
    assert decision.new_last_delivered_at == TODAY_10


def test_within_cooldown_does_not_deliver(engine):
    decision = engine.decide(_when_app_opens(TODAY_10 - timedelta(hours=1)), TODAY_10)
    assert decision.deliver is False
    assert decision.reason == "cooldown"


def test_after_cooldown_delivers(engine):
    decision = engine.decide(_when_app_opens(TODAY_10 - timedelta(hours=4)), TODAY_10)
    assert decision.deliver is True
    assert decision.new_last_delivered_at == TODAY_10


def test_exactly_at_cooldown_boundary_delivers(engine):
    assert engine.decide(_when_app_opens(TODAY_10 - timedelta(hours=3)), TODAY_10).deliver is True


def test_cooldown_is_configurable():
    engine = DeliveryEligibilityEngine(rearm_interval=timedelta(minutes=30))
    assert engine.decide(_when_app_opens(TODAY_10 - timedelta(hours=1)), TODAY_10).deliver is True


def test_negative_cooldown_is_rejected():
    with pytest.raises(ValueError):
        DeliveryEligibilityEngine(rearm_interval=timedelta(minutes=-1))


def test_naive_timestamps_are_read_as_utc(engine):
    naive_now = TODAY_10.replace(tzinfo=None)
    naive_last = naive_now - timedelta(hours=1)
    assert engine.decide(_when_app_opens(naive_last), naive_now).deliver is False


# -------------------------- DAILY_SPECIFIC_TIME --------------------------- #
def test_daily_delivers_after_time_when_last_was_yesterday(engine):
    yesterday_0930 = datetime(2025, 2, 28, 9, 30, tzinfo=UTC)

    decision = engine.decide(_daily(time(9, 0), yesterday_0930), TODAY_10)

    assert decision.deliver is True
    assert decision.new_last_delivered_at == TODAY_10


def test_daily_does_not_repeat_for_the_rest_of_the_day(engine):
    policy = _daily(time(9, 0), TODAY_10)

    for later in (TODAY_10, TODAY_10 + timedelta(minutes=1), TODAY_10 + timedelta(hours=13)):
        assert engine.decide(policy, later).deliver is False


def test_daily_delivers_again_next_day(engine):
    policy = _daily(time(9, 0), TODAY_10)
    assert engine.decide(policy, TODAY_10 + timedelta(days=1)).deliver is True


def test_daily_before_scheduled_time_does_not_deliver(engine):
    decision = engine.decide(_daily(time(11, 0), None), TODAY_10)
    assert decision.deliver is False
    assert decision.reason == "before_schedule"


def test_daily_first_delivery_at_exact_time(engine):
    assert engine.decide(_daily(time(10, 0), None), TODAY_10).deliver is True


def test_daily_without_time_fails_closed(engine):
    decision = engine.decide(_daily(None, None), TODAY_10)
    assert decision.deliver is False
    assert decision.reason == "policy_malformed"


def test_daily_day_boundary_follows_engine_timezone():
    seoul = DeliveryEligibilityEngine(tz=ZoneInfo("Asia/Seoul"))
    # 2025-03-01 00:30 UTC is 09:30 in Seoul
    now = datetime(2025, 3, 1, 0, 30, tzinfo=UTC)
    delivered_yesterday_seoul = datetime(2025, 2, 28, 0, 10, tzinfo=UTC)

    assert seoul.scheduled_instant(_daily(time(9, 0)), now) == datetime(
        2025, 3, 1, 0, 0, tzinfo=UTC
    )
    assert seoul.decide(_daily(time(9, 0), delivered_yesterday_seoul), now).deliver is True
    # the same instant is still "before 09:00" in UTC
    utc_engine = DeliveryEligibilityEngine()
    assert utc_engine.decide(_daily(time(9, 0), delivered_yesterday_seoul), now).deliver is False


def test_decide_is_pure(engine):
    policy = _when_app_opens(None)
    first = engine.decide(policy, TODAY_10)
    second = engine.decide(policy, TODAY_10)
    assert first == second
    assert policy.last_delivered_at is None
