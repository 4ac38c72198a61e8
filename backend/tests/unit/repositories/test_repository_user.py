"""Tests for :class:`UserRepository` and the shared repository helpers."""

from __future__ import annotations

import pytest
from journal_api.repositories.user import UserRepository
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> UserRepository:
    return UserRepository(session=session)


def test_lookups_by_natural_keys(repo):
    user = UserFactory(login_id="alice", email="alice@example.com")

    assert repo.get_by_login_id("alice") is user
    assert repo.get_by_email("ALICE@example.com ") is user
    assert repo.exists_by_login_id("alice") is True
    assert repo.exists_by_email("alice@example.com") is True
    assert repo.exists_by_login_id("bob") is False


def test_authenticate(repo):
    UserFactory(login_id="alice", password="correct-horse")

    assert repo.authenticate("alice", "correct-horse") is not None
    assert repo.authenticate("alice", "battery-staple") is None
    assert repo.authenticate("nobody", "correct-horse") is None


def test_generic_get_find_exists_delete(repo):
    user = UserFactory(login_id="carol")

    assert repo.get(user.id) is user
    assert repo.find_one(login_id="carol") is user
    assert repo.exists(login_id="carol") is True

    repo.delete(user)

    assert repo.exists(login_id="carol") is False


def test_filters_outside_the_whitelist_are_ignored(repo):
    user = UserFactory(login_id="dave")
    # ``password_hash`` is not filterable, so only ``login_id`` applies
    assert repo.find_one(login_id="dave", password_hash="x") is user


def test_assign_updates_rejects_unknown_fields(repo):
    user = UserFactory()
    with pytest.raises(ValueError):
        repo.assign_updates(user, {"password_hash": "plain"})


def test_lookups_normalise_input(repo):
    user = UserFactory(login_id="erin", email="erin@example.com")

    assert repo.get_by_login_id("  erin ") is user
    assert repo.get_by_email(" ERIN@example.com") is user
    assert repo.exists_by_login_id("erin") is True
    assert repo.exists_by_email("nobody@example.com") is False
