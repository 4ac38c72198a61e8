"""User repository for persistence and credential lookups."""

from __future__ import annotations

from journal_api.models.user import User
from journal_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens; it only answers identity questions.
    """

    model = User

    def _filterable_fields(self):
        """Whitelist fields safe for equality filters."""
        return {
            "login_id": User.login_id,
            "email": User.email,
        }

    def _updatable_fields(self):
        return {"email", "username"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_login_id(self, login_id: str) -> User | None:
        """Fetch a user by login id.

        :param login_id: Identifier the user signs in with.
        :type login_id: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        return self.find_one(login_id=login_id.strip())

    def get_by_email(self, email: str) -> User | None:
        return self.find_one(email=email.lower().strip())

    def exists_by_login_id(self, login_id: str) -> bool:
        return self.exists(login_id=login_id.strip())

    def exists_by_email(self, email: str) -> bool:
        return self.exists(email=email.lower().strip())

    # ---------------------------- Password ops ----------------------------

    def authenticate(self, login_id: str, password: str) -> User | None:
        """Return the user when ``password`` matches, else ``None``.

        Unknown users and wrong passwords are indistinguishable to callers.
        """
        user = self.get_by_login_id(login_id)
        if user is None or not user.verify_password(password):
            return None
        return user
