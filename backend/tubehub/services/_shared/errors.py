"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between
repositories, adapters, and application services.

The translation to the HTTP envelope is handled in one place,
``tubehub/core/errors.py`` (see ``translate_service_error``).
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.

    Notes
    -----
    PostgreSQL reports the constraint name; SQLite reports the offending
    ``table.column`` pair, so the column suffix of the name is checked too.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    # uq_users_email -> users.email
    parts = name.split("_", 2)
    return len(parts) == 3 and f"{parts[1]}.{parts[2]}" in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Raised as-is for invalid input (translated to ``400 Bad Request``).
    - Subclasses narrow the meaning (auth, missing, conflict, internal).
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    The lookup key is kept for logs only; the client message never includes it.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int | None
    """

    entity: str
    key: str | int | None = None

    def __str__(self) -> str:
        return f"{self.entity} does not exist"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail


class UnauthorizedError(ServiceError):
    """
    Raised when a credential or token is missing, invalid, expired or reused.

    Messages stay generic on purpose; callers must not learn which check failed.
    """

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message)


class InternalFaultError(ServiceError):
    """
    Raised when a downstream dependency (persistence, signing) fails.

    The message is client-safe; the original cause travels as ``__cause__``.
    """

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message)
