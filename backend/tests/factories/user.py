"""Factory Boy definition for :class:`journal_api.models.user.User`."""

from __future__ import annotations

from journal_api.models.user import User

import factory
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "password123"


class UserFactory(BaseFactory):
    """Build persisted :class:`journal_api.models.user.User` instances."""

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    login_id = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Faker("first_name")
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        obj.password = extracted or DEFAULT_PASSWORD
