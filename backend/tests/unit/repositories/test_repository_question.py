"""Tests for :class:`QuestionRepository`."""

from __future__ import annotations

import pytest
from journal_api.repositories.question import QuestionRepository
from tests.factories.question import QuestionFactory


@pytest.fixture()
def repo(session) -> QuestionRepository:
    return QuestionRepository(session=session)


def test_random_active_only_returns_active_rows_of_the_category(repo):
    active = QuestionFactory.create_batch(3, category="SCHEDULED_MESSAGE")
    QuestionFactory(category="SCHEDULED_MESSAGE", is_active=False)
    QuestionFactory(category="DAILY_MOOD")

    for _ in range(10):
        assert repo.random_active("SCHEDULED_MESSAGE") in active


def test_random_active_without_rows(repo):
    assert repo.random_active("SCHEDULED_MESSAGE") is None

