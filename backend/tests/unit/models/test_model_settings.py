"""Model-level tests for settings, questions and refresh tokens."""

from __future__ import annotations

import pytest
from journal_api.models import Question, UserSetting
from sqlalchemy.exc import IntegrityError
from tests.factories.question import QuestionFactory
from tests.factories.refresh_token import RefreshTokenFactory
from tests.factories.user_setting import UserSettingFactory


def test_server_defaults_apply(session):
    QuestionFactory(text="Plain question")
    session.expire_all()

    question = session.query(Question).filter_by(text="Plain question").one()
    assert question.is_active is True
    assert question.created_at is not None


def test_one_settings_row_per_user(session):
    row = UserSettingFactory()
    session.add(UserSetting(user_id=row.user_id, notification_interval="NONE"))
    with pytest.raises(IntegrityError):
        session.flush()
    session.rollback()


def test_one_refresh_token_per_user(session):
    token = RefreshTokenFactory()
    with pytest.raises(IntegrityError):
        RefreshTokenFactory(user_id=token.user_id, token="another-token")
    session.rollback()


def test_refresh_token_repr_hides_token_value(session):
    token = RefreshTokenFactory(token="very-secret-refresh-token")
    assert "very-secret-refresh-token" not in repr(token)
