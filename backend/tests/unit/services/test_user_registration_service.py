"""Tests for :class:`UserRegistrationService`."""

from __future__ import annotations

import pytest
from journal_api.models import User, UserSetting
from journal_api.services._shared.errors import ConflictError
from journal_api.services.registration.dto import UserRegistrationIn
from journal_api.services.registration.service import UserRegistrationService
from sqlalchemy import select
from tests.factories.user import UserFactory


def _payload(**overrides) -> UserRegistrationIn:
    data = {
        "login_id": "newbie",
        "email": "Newbie@Example.com ",
        "username": "Newbie",
        "password": "password123",
    }
    data.update(overrides)
    return UserRegistrationIn(**data)


def test_register_creates_user_and_default_settings(session):
    out = UserRegistrationService().register(_payload())

    assert out.login_id == "newbie"
    assert out.email == "newbie@example.com"

    user = session.execute(select(User).filter_by(login_id="newbie")).scalar_one()
    assert user.verify_password("password123")
    setting = session.execute(select(UserSetting).filter_by(user_id="newbie")).scalar_one()
    assert setting.notification_interval == "WHEN_APP_OPENS"


def test_register_duplicate_login_id(session):
    UserFactory(login_id="taken")
    with pytest.raises(ConflictError):
        UserRegistrationService().register(_payload(login_id="taken"))


def test_register_duplicate_email(session, faker):
    email = faker.unique.email()
    UserFactory(email=email)
    with pytest.raises(ConflictError):
        UserRegistrationService().register(_payload(email=email.upper()))
