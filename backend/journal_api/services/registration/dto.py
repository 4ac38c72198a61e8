"""
DTOs for UserRegistrationService.

Contracts for the self-registration flow that creates a ``User`` together
with its default notification settings.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegistrationIn:
    """
    Input payload for the registration process.

    :param login_id: Identifier used to sign in (unique).
    :type login_id: str
    :param email: Contact email (normalized to lowercase+trim, unique).
    :type email: str
    :param username: Display name.
    :type username: str
    :param password: Raw password (the model setter hashes it).
    :type password: str
    """

    login_id: str
    email: str
    username: str
    password: str


# --------------------------------------------------------------------------- #
# Output
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user payload.

    :param id: Surrogate key.
    :param login_id: Sign-in identifier.
    :param email: Contact email.
    :param username: Display name.
    """

    id: int
    login_id: str
    email: str
    username: str
