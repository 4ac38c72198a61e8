"""Factory Boy helpers wired to the transactional test session."""

from __future__ import annotations

import factory.alchemy


class SQLAlchemySession:
    """Hold the session installed by the ``session`` fixture."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        """Return the registered session.

        :raises RuntimeError: If factories run without the ``session`` fixture.
        """
        if cls._session is None:
            raise RuntimeError("Factories session not set. Did you pass the 'session' fixture?")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Flush-only factories; the fixture rolls everything back after each test."""

    class Meta:
        abstract = True
        # resolved lazily so each test gets its own scoped session
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "flush"
