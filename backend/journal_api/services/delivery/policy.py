"""
Notification policy value types.

``IntervalMode`` is an enum with an explicit ``UNKNOWN`` member: any raw value
read from storage that is not one of the known modes maps to it, so unknown
modes are a case the engine handles (by refusing delivery) instead of a string
that falls through comparisons.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, time
from enum import Enum

from journal_api.services._shared.clock import as_utc
from journal_api.services._shared.errors import PolicyMalformedError


class IntervalMode(str, Enum):
    NONE = "NONE"
    WHEN_APP_OPENS = "WHEN_APP_OPENS"
    DAILY_SPECIFIC_TIME = "DAILY_SPECIFIC_TIME"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value: object) -> IntervalMode:
        if isinstance(value, str):
            normalized = value.strip().upper()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.UNKNOWN

    @classmethod
    def selectable(cls) -> tuple[IntervalMode, ...]:
        """Modes a user may choose (everything but ``UNKNOWN``)."""
        return (cls.NONE, cls.WHEN_APP_OPENS, cls.DAILY_SPECIFIC_TIME)


@dataclass(frozen=True, slots=True)
class NotificationPolicy:
    """
    Per-user delivery policy.

    :ivar interval_mode: How often scheduled messages may be delivered.
    :ivar specific_time: Time of day for ``DAILY_SPECIFIC_TIME``.
    :ivar in_app_enabled: Master switch for in-app delivery.
    :ivar last_delivered_at: Last successful delivery, if any.
    :ivar push_enabled: Push notification preference (stored, not evaluated).
    """

    interval_mode: IntervalMode = IntervalMode.NONE
    specific_time: time | None = None
    in_app_enabled: bool = True
    last_delivered_at: datetime | None = None
    push_enabled: bool = True

    @classmethod
    def default(cls) -> NotificationPolicy:
        """Policy given to new users: prompt when the app opens, everything on."""
        return cls(interval_mode=IntervalMode.WHEN_APP_OPENS, in_app_enabled=True, push_enabled=True)

    def required_time(self) -> time:
        """
        Return ``specific_time`` for a daily policy.

        :raises PolicyMalformedError: When the daily policy has no time.
        """
        if self.specific_time is None:
            raise PolicyMalformedError("DAILY_SPECIFIC_TIME policy without a specific time")
        return self.specific_time

    def delivered_at(self, instant: datetime) -> NotificationPolicy:
        """Return a copy with ``last_delivered_at`` advanced to ``instant`` (never moved back)."""
        if self.last_delivered_at is not None and as_utc(instant) < as_utc(self.last_delivered_at):
            return self
        return replace(self, last_delivered_at=instant)


@dataclass(frozen=True, slots=True)
class Decision:
    """
    Result of one eligibility evaluation.

    :ivar deliver: Whether a message should be delivered now.
    :ivar new_last_delivered_at: Timestamp to persist when ``deliver`` is true.
    :ivar reason: Diagnostic label for logs.
    """

    deliver: bool
    new_last_delivered_at: datetime | None = None
    reason: str = ""

    @classmethod
    def no(cls, reason: str) -> Decision:
        return cls(deliver=False, reason=reason)

    @classmethod
    def yes(cls, now: datetime, reason: str) -> Decision:
        return cls(deliver=True, new_last_delivered_at=now, reason=reason)
