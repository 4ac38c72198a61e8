from __future__ import annotations

import threading
from datetime import datetime
from typing import Protocol

from journal_api.services._shared.clock import as_utc
from journal_api.services._shared.errors import UserNotFoundError
from journal_api.services.delivery.policy import NotificationPolicy


class UserSettingsStore(Protocol):
    """Port for the per-user notification policy."""

    def load(self, user_id: str) -> NotificationPolicy:
        """
        Return the policy of ``user_id``.

        :raises UserNotFoundError: If the user does not exist.
        """

    def save(self, user_id: str, policy: NotificationPolicy) -> None:
        """
        Persist ``policy`` for ``user_id``.

        :raises UserNotFoundError: If the user does not exist.
        """

    def record_delivery(self, user_id: str, at: datetime) -> bool:
        """
        Move ``last_delivered_at`` to ``at`` and touch nothing else.

        The write only happens when the stored value is absent or older than
        ``at``; settings changed since :meth:`load` are preserved.

        :returns: ``True`` when the timestamp advanced.
        """


class InMemoryUserSettingsStore(UserSettingsStore):
    """Dict-backed settings store; users must be registered with :meth:`add_user`."""

    def __init__(self) -> None:
        self._policies: dict[str, NotificationPolicy] = {}
        self._lock = threading.Lock()

    def add_user(self, user_id: str, policy: NotificationPolicy | None = None) -> None:
        self._policies[user_id] = policy or NotificationPolicy.default()

    def load(self, user_id: str) -> NotificationPolicy:
        try:
            return self._policies[user_id]
        except KeyError:
            raise UserNotFoundError(user_id) from None

    def save(self, user_id: str, policy: NotificationPolicy) -> None:
        if user_id not in self._policies:
            raise UserNotFoundError(user_id)
        self._policies[user_id] = policy

    def record_delivery(self, user_id: str, at: datetime) -> bool:
        with self._lock:
            current = self.load(user_id)
            last = current.last_delivered_at
            if last is not None and as_utc(last) >= as_utc(at):
                return False
            self._policies[user_id] = current.delivered_at(at)
            return True
