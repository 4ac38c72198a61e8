"""Time helpers shared by services (injectable clocks, UTC normalisation)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return a timezone-aware UTC "now"."""
    return datetime.now(UTC)


def as_utc(dt: datetime) -> datetime:
    """
    Return ``dt`` as an aware UTC datetime.

    Naive values are labelled as UTC without conversion (SQLite and some
    drivers drop the offset on read).
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def whole_seconds(dt: datetime) -> datetime:
    """Return ``dt`` in UTC truncated to the second, the resolution of JWT ``iat``/``exp``."""
    return as_utc(dt).replace(microsecond=0)
