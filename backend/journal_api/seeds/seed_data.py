"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from journal_api.models.question import Question
from journal_api.models.user import User
from journal_api.models.user_setting import UserSetting

LOGGER = logging.getLogger(__name__)

USER_FIXTURES: list[dict[str, str]] = [
    {
        "login_id": "testuser",
        "email": "test@example.com",
        "username": "Test User",
        "password": "password123",
    },
]

QUESTION_FIXTURES: list[dict[str, str]] = [
    {
        "category": "SCHEDULED_MESSAGE",
        "text": "What small moment made you smile today?",
    },
    {
        "category": "SCHEDULED_MESSAGE",
        "text": "Is there a person or thing you feel most grateful for right now?",
    },
    {
        "category": "SCHEDULED_MESSAGE",
        "text": "What has been putting your mind most at ease lately?",
    },
    {
        "category": "SCHEDULED_MESSAGE",
        "text": "Is there something new you would like to try? What is it, and why?",
    },
    {
        "category": "SCHEDULED_MESSAGE",
        "text": "What kind of comfort did you need most today?",
    },
    {
        "category": "DAILY_MOOD",
        "text": "When was the most peaceful moment of your day?",
    },
    {
        "category": "DAILY_MOOD",
        "text": "If your mood right now were a colour, which would it be?",
    },
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo users and their default settings."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        for fixture in USER_FIXTURES:
            login_id = fixture["login_id"]
            user = session.execute(select(User).filter_by(login_id=login_id)).scalar_one_or_none()
            created = user is None
            if user is None:
                user = User(login_id=login_id, email=fixture["email"], username=fixture["username"])
                user.password = fixture["password"]
                session.add(user)
                session.flush()
            _touch(summary, "users", created)

            setting = session.execute(
                select(UserSetting).filter_by(user_id=login_id)
            ).scalar_one_or_none()
            if setting is None:
                session.add(
                    UserSetting(
                        user_id=login_id,
                        notification_interval="WHEN_APP_OPENS",
                        in_app_enabled=True,
                        push_enabled=True,
                    )
                )
            _touch(summary, "user_settings", setting is None)

    return summary


def seed_questions(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Insert the default question pool; existing texts are left untouched."""
    if verbose:
        LOGGER.info("Seeding questions...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        for fixture in QUESTION_FIXTURES:
            existing = session.execute(
                select(Question).filter_by(text=fixture["text"], category=fixture["category"])
            ).scalar_one_or_none()
            if existing is None:
                session.add(Question(text=fixture["text"], category=fixture["category"], is_active=True))
            _touch(summary, "questions", existing is None)

    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_users, seed_questions):
        result = func(database, verbose=verbose)
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["seed_questions", "seed_users", "run_all"]
