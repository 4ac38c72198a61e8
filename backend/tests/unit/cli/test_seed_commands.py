"""Tests for the ``flask seed`` command group and the seed helpers."""

from __future__ import annotations

import pytest
from journal_api.core.extensions import db as _db
from journal_api.models.question import Question
from journal_api.models.user import User
from journal_api.models.user_setting import UserSetting
from journal_api.seeds import seed_data
from sqlalchemy import func, select


def _count(session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


def test_run_all_is_idempotent(session):
    first = seed_data.run_all(_db)
    assert first["users"] == {"created": 1, "existing": 0}
    assert first["user_settings"] == {"created": 1, "existing": 0}
    assert first["questions"]["created"] == len(seed_data.QUESTION_FIXTURES)

    second = seed_data.run_all(_db)
    assert second["users"] == {"created": 0, "existing": 1}
    assert second["questions"] == {"created": 0, "existing": len(seed_data.QUESTION_FIXTURES)}

    assert _count(session, User) == 1
    assert _count(session, Question) == len(seed_data.QUESTION_FIXTURES)


def test_seeded_user_can_authenticate(session):
    seed_data.seed_users(_db)

    user = session.execute(select(User).filter_by(login_id="testuser")).scalar_one()
    assert user.verify_password("password123")
    setting = session.execute(select(UserSetting).filter_by(user_id="testuser")).scalar_one()
    assert setting.notification_interval == "WHEN_APP_OPENS"
    assert setting.last_delivered_at is None


def test_cli_run_prints_summary(app, session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed", "run"])

    assert result.exit_code == 0, result.output
    assert "Seed summary:" in result.output
    assert "questions" in result.output
    assert _count(session, Question) == len(seed_data.QUESTION_FIXTURES)


def test_cli_run_only_questions(app, session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed", "run", "--only", "questions"])

    assert result.exit_code == 0, result.output
    assert "users" not in result.output
    assert _count(session, User) == 0


@pytest.mark.parametrize("only", ["settings", "everything"])
def test_cli_run_rejects_unknown_group(app, session, only):
    result = app.test_cli_runner().invoke(args=["seed", "run", "--only", only])

    assert result.exit_code != 0
    assert "Invalid value" in result.output


def test_cli_fresh_requires_confirmation(app, session):
    result = app.test_cli_runner().invoke(args=["seed", "fresh"], input="n\n")

    assert result.exit_code != 0
    assert "Aborted" in result.output
