"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from journal_api.repositories.base import BaseRepository
from journal_api.repositories.question import QuestionRepository
from journal_api.repositories.refresh_token import RefreshTokenRepository
from journal_api.repositories.user import UserRepository
from journal_api.repositories.user_setting import UserSettingRepository

__all__ = [
    "BaseRepository",
    "QuestionRepository",
    "RefreshTokenRepository",
    "UserRepository",
    "UserSettingRepository",
]
