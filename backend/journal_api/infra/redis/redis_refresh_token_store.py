# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import redis  # type: ignore[import-untyped]

from journal_api.services._shared.clock import as_utc
from journal_api.services._shared.ports import RefreshTokenRecord, RefreshTokenStore


@dataclass(slots=True)
class RedisRefreshTokenStore(RefreshTokenStore):
    """
    Redis-backed refresh token store, one record per user.

    Layout
    ------
    ``rt:u:<user_id>``  hash ``{id, token, expires_at}`` (the record)
    ``rt:t:<token>``    string ``<user_id>`` (reverse index)
    ``rt:seq``          counter handing out record ids

    Keys outlive ``expires_at`` by ``retention`` so an expired token is still
    found (and then deleted) when presented, instead of silently vanishing.

    :param r: A Redis client (already connected).
    :param retention: Extra lifetime of the keys past ``expires_at``.
    """

    r: redis.Redis
    retention: timedelta = timedelta(days=1)

    # -------------------- helpers --------------------

    @staticmethod
    def _ku(user_id: str) -> str:
        return f"rt:u:{user_id}"

    @staticmethod
    def _kt(token: str) -> str:
        return f"rt:t:{token}"

    @staticmethod
    def _to_ts(dt: datetime) -> int:
        return int(as_utc(dt).timestamp())

    @staticmethod
    def _s(value: bytes | str | None, default: str = "") -> str:
        if value is None:
            return default
        return value.decode() if isinstance(value, bytes | bytearray) else str(value)

    @classmethod
    def _decode_hash(cls, h: dict) -> dict[str, str]:
        return {cls._s(k): cls._s(v) for k, v in (h or {}).items()}

    def _record(self, user_id: str, raw: dict) -> RefreshTokenRecord | None:
        h = self._decode_hash(raw)
        if not h:
            return None
        raw_id = h.get("id", "")
        return RefreshTokenRecord(
            id=int(raw_id) if raw_id.isdigit() else raw_id,
            user_id=user_id,
            token=h.get("token", ""),
            expires_at=datetime.fromtimestamp(int(h.get("expires_at", "0")), tz=UTC),
        )

    # -------------------- API ------------------------

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        uid = self.r.get(self._kt(token))
        if not uid:
            return None
        record = self.find_by_user(self._s(uid))
        # the reverse index may briefly point at a replaced record
        if record is None or record.token != token:
            return None
        return record

    def find_by_user(self, user_id: str) -> RefreshTokenRecord | None:
        return self._record(user_id, self.r.hgetall(self._ku(user_id)))

    def upsert_for_user(self, user_id: str, token: str, expires_at: datetime) -> RefreshTokenRecord:
        """
        Create or replace the record of ``user_id`` atomically.

        Uses WATCH/MULTI/EXEC on the user key; a concurrent writer makes the
        transaction fail with ``WatchError`` and the loop retries on fresh state.
        """
        exp_ts = self._to_ts(expires_at)
        keep_until = exp_ts + int(self.retention.total_seconds())
        k_user = self._ku(user_id)

        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(k_user)
                    current = self._decode_hash(p.hgetall(k_user))
                    old_token = current.get("token", "")
                    record_id = current.get("id", "")
                    if not record_id:
                        record_id = str(self.r.incr("rt:seq"))

                    p.multi()
                    if old_token and old_token != token:
                        p.delete(self._kt(old_token))
                    p.hset(
                        k_user,
                        mapping={"id": record_id, "token": token, "expires_at": str(exp_ts)},
                    )
                    p.expireat(k_user, keep_until)
                    p.set(self._kt(token), user_id)
                    p.expireat(self._kt(token), keep_until)
                    p.execute()
            except redis.WatchError:
                # Concurrent modification detected; retry loop
                continue

            return RefreshTokenRecord(
                id=int(record_id),
                user_id=user_id,
                token=token,
                expires_at=datetime.fromtimestamp(exp_ts, tz=UTC),
            )

    def delete_by_user(self, user_id: str) -> None:
        k_user = self._ku(user_id)
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(k_user)
                    token = p.hget(k_user, "token")
                    p.multi()
                    if token:
                        p.delete(self._kt(self._s(token)))
                    p.delete(k_user)
                    p.execute()
                    return
            except redis.WatchError:
                continue

    def delete(self, record: RefreshTokenRecord) -> None:
        k_user = self._ku(record.user_id)
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(k_user)
                    current = self._s(p.hget(k_user, "token"))
                    p.multi()
                    p.delete(self._kt(record.token))
                    # only drop the user record if it still holds this token
                    if current == record.token:
                        p.delete(k_user)
                    p.execute()
                    return
            except redis.WatchError:
                continue
