"""
UserRegistrationService
=======================

Registers a new identity:

- Creates ``User`` and its default ``UserSetting`` in a single transaction.
- Rejects duplicates on the natural keys (login id, email) with a conflict.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from journal_api.models.user import User
from journal_api.repositories.user import UserRepository
from journal_api.services._shared.base import BaseService
from journal_api.services._shared.errors import ConflictError
from journal_api.services.registration.dto import UserPublicOut, UserRegistrationIn

log = logging.getLogger(__name__)


class UserRegistrationService(BaseService):
    """Orchestrates user sign-up."""

    def register(self, dto: UserRegistrationIn) -> UserPublicOut:
        """
        Create the user and its default settings.

        :param dto: Registration input.
        :type dto: :class:`UserRegistrationIn`
        :returns: Public user payload.
        :rtype: :class:`UserPublicOut`
        :raises ConflictError: When the login id or email is already taken.
        """
        login_id = dto.login_id.strip()
        email = dto.email.lower().strip()
        try:
            with self.rw_uow() as uow:
                users: UserRepository = uow.users
                if users.exists_by_login_id(login_id):
                    raise ConflictError("User", "login id already in use")
                if users.exists_by_email(email):
                    raise ConflictError("User", "email already in use")

                user = User(login_id=login_id, email=email, username=dto.username)
                user.password = dto.password  # model setter hashes
                users.add(user)
                uow.user_settings.create_default(user.login_id)

                out = self._to_user_public(user)
        except IntegrityError as exc:
            # lost a race against a concurrent sign-up on a unique key
            raise ConflictError("User", "login id or email already in use") from exc

        log.info("registration.created", extra={"user_id": out.login_id})
        return out

    @staticmethod
    def _to_user_public(user: User) -> UserPublicOut:
        return UserPublicOut(
            id=user.id,
            login_id=user.login_id,
            email=user.email,
            username=user.username,
        )
