from __future__ import annotations

from typing import Protocol

from werkzeug.security import check_password_hash, generate_password_hash


class CredentialVerifier(Protocol):
    """Port answering "does this password belong to this user"."""

    def verify(self, user_id: str, raw_password: str) -> bool:
        """
        Return ``True`` only when ``raw_password`` matches ``user_id``.

        Unknown users MUST return ``False`` (never raise) so callers cannot
        tell them apart from a wrong password.
        """


class InMemoryCredentialVerifier(CredentialVerifier):
    """Credential verifier over a dict of password hashes (tests, demos)."""

    def __init__(self, passwords: dict[str, str] | None = None) -> None:
        self._hashes: dict[str, str] = {}
        for user_id, raw in (passwords or {}).items():
            self.add(user_id, raw)

    def add(self, user_id: str, raw_password: str) -> None:
        self._hashes[user_id] = generate_password_hash(raw_password)

    def verify(self, user_id: str, raw_password: str) -> bool:
        hashed = self._hashes.get(user_id)
        if hashed is None or not raw_password:
            return False
        return check_password_hash(hashed, raw_password)
