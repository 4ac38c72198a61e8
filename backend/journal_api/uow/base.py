"""
Unit of Work contract shared by the services and the SQL adapters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from journal_api.repositories import (
        QuestionRepository,
        RefreshTokenRepository,
        UserRepository,
        UserSettingRepository,
    )


class UnitOfWork(ABC):
    """
    Transaction boundary around one use case.

    The four repositories share the boundary's session: a refresh token
    upsert and a settings write in the same block commit or roll back
    together.
    """

    users: UserRepository
    refresh_tokens: RefreshTokenRepository
    user_settings: UserSettingRepository
    questions: QuestionRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
