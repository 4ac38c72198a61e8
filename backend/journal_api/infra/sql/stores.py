"""
SQLAlchemy adapters for the service ports.

Each operation runs in its own Unit of Work, so a write is committed as soon
as the call returns. This matters for the refresh flow: an expired record is
deleted and committed before the service raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from journal_api.models.refresh_token import RefreshToken
from journal_api.models.user_setting import UserSetting
from journal_api.services._shared.clock import as_utc
from journal_api.services._shared.errors import UserNotFoundError
from journal_api.services._shared.ports import (
    Content,
    ContentSelector,
    CredentialVerifier,
    RefreshTokenRecord,
    RefreshTokenStore,
    UserSettingsStore,
)
from journal_api.services.delivery.policy import IntervalMode, NotificationPolicy
from journal_api.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

UowFactory = Callable[[], SQLAlchemyUnitOfWork]
ReadOnlyUowFactory = Callable[[], SQLAlchemyReadOnlyUnitOfWork]


def _to_record(row: RefreshToken) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        id=row.id,
        user_id=row.user_id,
        token=row.token,
        expires_at=as_utc(row.expires_at),
    )


class SqlRefreshTokenStore(RefreshTokenStore):
    """Refresh token store over the ``refresh_tokens`` table."""

    def __init__(
        self,
        uow_factory: UowFactory = SQLAlchemyUnitOfWork,
        ro_uow_factory: ReadOnlyUowFactory = SQLAlchemyReadOnlyUnitOfWork,
    ) -> None:
        self._uow = uow_factory
        self._ro_uow = ro_uow_factory

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        with self._ro_uow() as uow:
            row = uow.refresh_tokens.get_by_token(token)
            return _to_record(row) if row is not None else None

    def find_by_user(self, user_id: str) -> RefreshTokenRecord | None:
        with self._ro_uow() as uow:
            row = uow.refresh_tokens.get_by_user(user_id)
            return _to_record(row) if row is not None else None

    def upsert_for_user(self, user_id: str, token: str, expires_at: datetime) -> RefreshTokenRecord:
        """
        Update the user's row in place or insert it.

        Two concurrent first logins race on the unique ``user_id``; the loser
        gets an ``IntegrityError`` and is retried once, which then finds the
        winner's row and updates it.
        """
        for attempt in (1, 2):
            try:
                with self._uow() as uow:
                    row = uow.refresh_tokens.upsert_for_user(user_id, token, as_utc(expires_at))
                    record = _to_record(row)
                return record
            except IntegrityError:
                if attempt == 2:
                    raise
                log.info("refresh_token.upsert_retry", extra={"user_id": user_id})
        raise AssertionError("unreachable")  # pragma: no cover

    def delete_by_user(self, user_id: str) -> None:
        with self._uow() as uow:
            uow.refresh_tokens.delete_by_user(user_id)

    def delete(self, record: RefreshTokenRecord) -> None:
        with self._uow() as uow:
            uow.refresh_tokens.delete_by_token(record.token)


class SqlCredentialVerifier(CredentialVerifier):
    """Check passwords against ``users.password_hash``."""

    def __init__(self, ro_uow_factory: ReadOnlyUowFactory = SQLAlchemyReadOnlyUnitOfWork) -> None:
        self._ro_uow = ro_uow_factory

    def verify(self, user_id: str, raw_password: str) -> bool:
        with self._ro_uow() as uow:
            return uow.users.authenticate(user_id, raw_password) is not None


def policy_from_row(row: UserSetting) -> NotificationPolicy:
    """Map a settings row to a :class:`NotificationPolicy` (unknown modes become ``UNKNOWN``)."""
    return NotificationPolicy(
        interval_mode=IntervalMode(row.notification_interval),
        specific_time=row.notification_time,
        in_app_enabled=bool(row.in_app_enabled),
        last_delivered_at=as_utc(row.last_delivered_at) if row.last_delivered_at else None,
        push_enabled=bool(row.push_enabled),
    )


class SqlUserSettingsStore(UserSettingsStore):
    """Notification policy store over ``user_settings``."""

    def __init__(self, uow_factory: UowFactory = SQLAlchemyUnitOfWork) -> None:
        self._uow = uow_factory

    def load(self, user_id: str) -> NotificationPolicy:
        """Return the user's policy, creating the default settings row when missing."""
        with self._uow() as uow:
            row = uow.user_settings.get_by_user(user_id)
            if row is None:
                if not uow.users.exists_by_login_id(user_id):
                    raise UserNotFoundError(user_id)
                row = uow.user_settings.create_default(user_id)
            return policy_from_row(row)

    def save(self, user_id: str, policy: NotificationPolicy) -> None:
        """
        Persist ``policy``.

        ``last_delivered_at`` is only ever moved forward; an older value than
        the stored one is ignored.
        """
        with self._uow() as uow:
            repo = uow.user_settings
            row = repo.get_by_user(user_id)
            if row is None:
                if not uow.users.exists_by_login_id(user_id):
                    raise UserNotFoundError(user_id)
                row = repo.create_default(user_id)

            updates: dict[str, object] = {
                "in_app_enabled": policy.in_app_enabled,
                "push_enabled": policy.push_enabled,
                "notification_time": policy.specific_time,
            }
            # never overwrite a stored raw value with the UNKNOWN placeholder
            if policy.interval_mode is not IntervalMode.UNKNOWN:
                updates["notification_interval"] = policy.interval_mode.value

            stored = as_utc(row.last_delivered_at) if row.last_delivered_at else None
            incoming = as_utc(policy.last_delivered_at) if policy.last_delivered_at else None
            if incoming is not None and (stored is None or incoming > stored):
                updates["last_delivered_at"] = incoming

            repo.assign_updates(row, updates)

    def record_delivery(self, user_id: str, at: datetime) -> bool:
        """Advance ``last_delivered_at`` with one conditional ``UPDATE``."""
        with self._uow() as uow:
            advanced = uow.user_settings.advance_last_delivered(user_id, as_utc(at))
        if not advanced:
            log.info("delivery.record_skipped", extra={"user_id": user_id})
        return advanced


class SqlContentSelector(ContentSelector):
    """Pick a random active question from the ``questions`` table."""

    def __init__(self, ro_uow_factory: ReadOnlyUowFactory = SQLAlchemyReadOnlyUnitOfWork) -> None:
        self._ro_uow = ro_uow_factory

    def pick_active(self, category: str) -> Content | None:
        with self._ro_uow() as uow:
            row = uow.questions.random_active(category)
            if row is None:
                return None
            return Content(id=row.id, text=row.text, category=row.category)
