"""Integration tests for ``GET /questions/for-me``."""

from __future__ import annotations

from datetime import timedelta

from freezegun import freeze_time

from tests.factories.question import QuestionFactory
from tests.factories.user import UserFactory
from tests.factories.user_setting import UserSettingFactory
from tests.helpers.http import API, assert_unauthorized, json_headers, login

URL = f"{API}/questions/for-me"


def _user(session, **settings):
    UserSettingFactory(user=UserFactory(login_id="alice"), **settings)


def test_first_check_delivers_a_question(client, session):
    _user(session)
    question = QuestionFactory(text="What made you smile today?")
    session.commit()
    headers = json_headers(login(client, "alice")["access_token"])

    resp = client.get(URL, headers=headers)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["has_new_message"] is True
    assert body["new_message"] == {
        "question_id": question.id,
        "question_text": "What made you smile today?",
        "question_type": "SCHEDULED_MESSAGE",
    }


def test_second_check_within_cooldown_is_empty(client, session):
    _user(session)
    QuestionFactory()
    session.commit()
    headers = json_headers(login(client, "alice")["access_token"])

    assert client.get(URL, headers=headers).get_json()["has_new_message"] is True
    body = client.get(URL, headers=headers).get_json()

    assert body == {"has_new_message": False, "new_message": None}


def test_delivery_rearms_after_cooldown(client, session):
    _user(session)
    QuestionFactory()
    session.commit()

    with freeze_time("2026-03-02 08:00:00") as frozen:
        headers = json_headers(login(client, "alice")["access_token"])
        assert client.get(URL, headers=headers).get_json()["has_new_message"] is True

        frozen.tick(timedelta(hours=3))
        headers = json_headers(login(client, "alice")["access_token"])
        assert client.get(URL, headers=headers).get_json()["has_new_message"] is True


def test_no_active_questions_means_nothing_new(client, session):
    _user(session)
    QuestionFactory(is_active=False)
    session.commit()
    headers = json_headers(login(client, "alice")["access_token"])

    body = client.get(URL, headers=headers).get_json()

    assert body == {"has_new_message": False, "new_message": None}
    settings = client.get(f"{API}/users/me/settings", headers=headers).get_json()["data"]
    assert settings["last_delivered_at"] is None


def test_disabled_notifications_never_deliver(client, session):
    _user(session, notification_interval="NONE")
    QuestionFactory()
    session.commit()
    headers = json_headers(login(client, "alice")["access_token"])

    assert client.get(URL, headers=headers).get_json()["has_new_message"] is False


def test_daily_time_waits_for_the_configured_minute(client, session):
    from datetime import time

    _user(session, notification_interval="DAILY_SPECIFIC_TIME", notification_time=time(20, 0))
    QuestionFactory()
    session.commit()

    with freeze_time("2026-03-02 19:59:00") as frozen:
        headers = json_headers(login(client, "alice")["access_token"])
        assert client.get(URL, headers=headers).get_json()["has_new_message"] is False

        frozen.tick(timedelta(minutes=1))
        assert client.get(URL, headers=headers).get_json()["has_new_message"] is True
        assert client.get(URL, headers=headers).get_json()["has_new_message"] is False


def test_for_me_requires_authentication(client, session):
    assert_unauthorized(client.get(URL))
