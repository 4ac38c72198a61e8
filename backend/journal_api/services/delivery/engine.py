"""
Delivery eligibility engine.

A pure decision function over a :class:`NotificationPolicy` and "now". The
engine performs no I/O: callers load the policy, ask :meth:`decide`, and on a
positive answer select content and persist ``new_last_delivered_at``.

Rules are evaluated in order and the first match wins:

1. in-app delivery disabled: no
2. ``NONE``: no
3. ``WHEN_APP_OPENS``: yes when never delivered or the re-arm interval passed
4. ``DAILY_SPECIFIC_TIME``: yes once per day, at or after the configured time
5. anything else: no
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta, tzinfo

from journal_api.services._shared.clock import as_utc
from journal_api.services._shared.errors import PolicyMalformedError
from journal_api.services.delivery.policy import Decision, IntervalMode, NotificationPolicy

log = logging.getLogger(__name__)

DEFAULT_REARM_INTERVAL = timedelta(hours=3)


class DeliveryEligibilityEngine:
    """
    Decide whether a scheduled message is due.

    :param rearm_interval: Minimum gap between two ``WHEN_APP_OPENS`` deliveries.
    :param tz: Timezone in which "today" is evaluated for daily policies.
    """

    def __init__(
        self,
        *,
        rearm_interval: timedelta = DEFAULT_REARM_INTERVAL,
        tz: tzinfo = UTC,
    ) -> None:
        if rearm_interval < timedelta(0):
            raise ValueError("rearm_interval must not be negative.")
        self.rearm_interval = rearm_interval
        self.tz = tz

    def decide(self, policy: NotificationPolicy, now: datetime) -> Decision:
        """
        Evaluate ``policy`` at ``now``.

        Never raises for bad policy data; malformed policies yield ``deliver=False``.

        :param policy: Current user policy.
        :param now: Evaluation instant (naive values are read as UTC).
        :returns: The decision; ``new_last_delivered_at`` is ``now`` on delivery.
        """
        now = as_utc(now)

        if not policy.in_app_enabled:
            return Decision.no("in_app_disabled")

        mode = policy.interval_mode
        if not isinstance(mode, IntervalMode):
            mode = IntervalMode(mode)

        if mode is IntervalMode.NONE:
            return Decision.no("mode_none")
        if mode is IntervalMode.WHEN_APP_OPENS:
            return self._when_app_opens(policy, now)
        if mode is IntervalMode.DAILY_SPECIFIC_TIME:
            try:
                return self._daily(policy, now)
            except PolicyMalformedError as exc:
                log.warning("delivery.policy_malformed: %s", exc, extra={"mode": mode.value})
                return Decision.no("policy_malformed")

        return Decision.no("mode_unknown")

    def _when_app_opens(self, policy: NotificationPolicy, now: datetime) -> Decision:
        last = policy.last_delivered_at
        if last is None:
            return Decision.yes(now, "first_delivery")
        if now - as_utc(last) >= self.rearm_interval:
            return Decision.yes(now, "rearmed")
        return Decision.no("cooldown")

    def _daily(self, policy: NotificationPolicy, now: datetime) -> Decision:
        scheduled = self.scheduled_instant(policy, now)
        if now < scheduled:
            return Decision.no("before_schedule")
        last = policy.last_delivered_at
        if last is not None and as_utc(last) >= scheduled:
            return Decision.no("already_delivered_today")
        return Decision.yes(now, "scheduled_time_reached")

    def scheduled_instant(self, policy: NotificationPolicy, now: datetime) -> datetime:
        """
        Return today's scheduled instant (in the engine timezone) as UTC.

        :raises PolicyMalformedError: When the policy carries no time.
        """
        at = policy.required_time().replace(tzinfo=None)
        today = as_utc(now).astimezone(self.tz).date()
        return datetime.combine(today, at, tzinfo=self.tz).astimezone(UTC)
