"""Tests for :class:`RefreshTokenRepository`."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from journal_api.repositories.refresh_token import RefreshTokenRepository
from tests.factories.refresh_token import RefreshTokenFactory
from tests.factories.user import UserFactory

EXPIRES = datetime(2025, 4, 1, tzinfo=UTC)


@pytest.fixture()
def repo(session) -> RefreshTokenRepository:
    return RefreshTokenRepository(session=session)


def test_upsert_inserts_then_updates_in_place(repo):
    user = UserFactory()

    inserted = repo.upsert_for_user(user.login_id, "t-1", EXPIRES)
    updated = repo.upsert_for_user(user.login_id, "t-2", EXPIRES + timedelta(days=1))

    assert updated.id == inserted.id
    assert repo.get_by_token("t-1") is None
    assert repo.get_by_token("t-2") is updated
    assert repo.get_by_user(user.login_id) is updated


def test_delete_by_user_and_by_token(repo):
    a = RefreshTokenFactory()
    b = RefreshTokenFactory()

    assert repo.delete_by_user(a.user_id) == 1
    assert repo.delete_by_user(a.user_id) == 0
    assert repo.delete_by_token(b.token) == 1
    assert repo.delete_by_token(b.token) == 0
