"""
DTOs for AccountService.

Data Transfer Objects isolate the service layer from ORM models: nothing
returned from here carries the password hash or the refresh token.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from tubehub.services.tokens.dto import TokenPairOut

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param email: Login email (normalized to lowercase by the model).
    :type email: str
    :param full_name: Display name.
    :type full_name: str
    :param username: Login-name / channel handle.
    :type username: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    """

    email: str
    full_name: str
    username: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for credential login. At least one identifier is required.

    :param password: Raw password.
    :type password: str
    :param email: Login email.
    :type email: str | None
    :param username: Login-name.
    :type username: str | None
    """

    password: str
    email: str | None = None
    username: str | None = None


@dataclass(frozen=True, slots=True)
class PasswordChangeIn:
    """
    Input DTO for changing the password of the current account.

    :param account_id: Authenticated account.
    :type account_id: int
    :param old_password: Current raw password.
    :type old_password: str
    :param new_password: Replacement raw password.
    :type new_password: str
    """

    account_id: int
    old_password: str
    new_password: str


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """Both fields are required."""

    full_name: str
    email: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Public-safe account representation.

    :param watch_history: Video ids in watch order.
    :type watch_history: tuple[int, ...]
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    watch_history: tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class LoginOut:
    """Logged-in account plus its freshly issued token pair."""

    account: AccountOut
    tokens: TokenPairOut
