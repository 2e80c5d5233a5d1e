from __future__ import annotations

import threading
from enum import Enum, auto
from typing import Protocol


class RotationResult(Enum):
    """Outcome of an atomic refresh rotation attempt."""

    OK = auto()
    NOT_FOUND = auto()  # no such account
    REVOKED = auto()  # stored token cleared (logout)
    REUSED = auto()  # presented token already superseded


class RefreshTokenStore(Protocol):
    """
    Holds the single current refresh token of every account.

    ``rotate`` MUST be a compare-and-set: of two concurrent rotations that
    present the same token, exactly one may observe ``OK``.
    """

    def register(self, account_id: int, token: str) -> None:
        """
        Overwrite the account's current token with ``token``.

        :raises LookupError: If the account does not exist.
        """

    def rotate(self, account_id: int, old: str, new: str) -> RotationResult:
        """Replace ``old`` by ``new`` only if ``old`` is still current."""

    def mark_revoked(self, account_id: int) -> bool:
        """Clear the current token. Idempotent. :returns: True if the account exists."""

    def get(self, account_id: int) -> str | None:
        """Return the current token, or ``None`` when cleared or unknown."""


_MISSING = object()


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    Dictionary-backed store; a lock makes ``rotate`` atomic across threads.

    Accounts become known on first ``register`` (or via ``known_accounts``).
    """

    def __init__(self, known_accounts: set[int] | None = None) -> None:
        self._tokens: dict[int, str | None] = {int(a): None for a in known_accounts or ()}
        self._lock = threading.Lock()

    def register(self, account_id: int, token: str) -> None:
        with self._lock:
            self._tokens[int(account_id)] = token

    def rotate(self, account_id: int, old: str, new: str) -> RotationResult:
        with self._lock:
            current = self._tokens.get(int(account_id), _MISSING)
            if current is _MISSING:
                return RotationResult.NOT_FOUND
            if current is None:
                return RotationResult.REVOKED
            if current != old:
                return RotationResult.REUSED
            self._tokens[int(account_id)] = new
            return RotationResult.OK

    def mark_revoked(self, account_id: int) -> bool:
        with self._lock:
            if int(account_id) not in self._tokens:
                return False
            self._tokens[int(account_id)] = None
            return True

    def get(self, account_id: int) -> str | None:
        return self._tokens.get(int(account_id))
