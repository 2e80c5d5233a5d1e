# tubehub/services/tokens/service.py
from __future__ import annotations

import logging
from typing import Any

from tubehub.services._shared.base import BaseService
from tubehub.services._shared.errors import InternalFaultError, UnauthorizedError
from tubehub.services._shared.ports import (
    REFRESH_TOKEN_TYPE,
    InvalidTokenError,
    RefreshTokenStore,
    RotationResult,
    TokenProvider,
)
from tubehub.services.tokens.dto import TokenPairOut

log = logging.getLogger(__name__)

ISSUE_FAILED = "Something went wrong while generating refresh and access token"
INVALID_REFRESH = "Invalid refresh token"
REFRESH_SPENT = "Refresh token is expired or used"


class TokenService(BaseService):
    """
    Session-token lifecycle: issue, rotate, invalidate.

    Each account has at most one live refresh token, the value held by the
    :class:`RefreshTokenStore`. Rotation swaps it with a compare-and-set, so a
    refresh token is good for exactly one successful ``rotate``. A rotated,
    expired or invalidated token never comes back, and callers cannot tell
    these states apart.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        refresh_store: RefreshTokenStore,
    ) -> None:
        """
        :param token_provider: Adapter minting/decoding signed tokens.
        :param refresh_store: Holder of each account's current refresh token.
        """
        super().__init__()
        self.tokens = token_provider
        self.refresh_store = refresh_store

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue(self, account_id: int) -> TokenPairOut:
        """
        Mint a fresh pair and make its refresh token the account's current one.

        Any earlier refresh token of the account stops working.

        :raises InternalFaultError: If loading the account, signing or
            persisting fails. The cause is logged, never returned.
        """
        try:
            claims = self._load_claims(account_id)
            if claims is None:
                raise LookupError(f"User {account_id} not found.")
            pair = self._mint(account_id, claims, fresh=True)
            self.refresh_store.register(account_id, pair.refresh_token)
        except Exception as exc:
            log.error(
                "Token issuance failed",
                extra={"event": "token.issue_failed", "account_id": account_id},
                exc_info=True,
            )
            raise InternalFaultError(ISSUE_FAILED) from exc
        log.info("Issued token pair", extra={"event": "token.issued", "account_id": account_id})
        return pair

    # ------------------------------------------------------------------ #
    # Rotate
    # ------------------------------------------------------------------ #

    def rotate(self, presented: str | None) -> TokenPairOut:
        """
        Exchange a current refresh token for a new pair.

        :param presented: Refresh token sent by the client (cookie or body).
        :raises UnauthorizedError: Missing, malformed, expired, wrong-kind,
            unknown-account, superseded or invalidated tokens.
        """
        if not presented or not presented.strip():
            raise UnauthorizedError("Unauthorized request")

        try:
            payload = self.tokens.decode(presented, expected_type=REFRESH_TOKEN_TYPE)
            account_id = self._coerce_account_id(payload.get("sub"))
        except InvalidTokenError as exc:
            log.warning("Rejected refresh token", extra={"event": "token.rotate_invalid"})
            raise UnauthorizedError(INVALID_REFRESH) from exc

        claims = self._load_claims(account_id)
        if claims is None:
            # Same answer as a bad token: no account enumeration
            raise UnauthorizedError(INVALID_REFRESH)

        try:
            pair = self._mint(account_id, claims, fresh=False)
        except Exception as exc:
            log.error(
                "Token minting failed during rotation",
                extra={"event": "token.issue_failed", "account_id": account_id},
                exc_info=True,
            )
            raise InternalFaultError(ISSUE_FAILED) from exc

        result = self.refresh_store.rotate(account_id, presented, pair.refresh_token)
        if result is not RotationResult.OK:
            log.warning(
                "Refresh rotation refused: %s",
                result.name,
                extra={"event": "token.rotate_refused", "account_id": account_id},
            )
            raise UnauthorizedError(REFRESH_SPENT)

        log.info("Rotated refresh token", extra={"event": "token.rotated", "account_id": account_id})
        return pair

    # ------------------------------------------------------------------ #
    # Invalidate
    # ------------------------------------------------------------------ #

    def invalidate(self, account_id: int) -> None:
        """Clear the account's current refresh token. Idempotent."""
        self.refresh_store.mark_revoked(account_id)
        log.info(
            "Invalidated refresh session",
            extra={"event": "token.invalidated", "account_id": account_id},
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _load_claims(self, account_id: int) -> dict[str, Any] | None:
        """Identity claims embedded in access tokens; ``None`` if the account is gone."""
        with self.ro_uow() as uow:
            user = uow.users.get(account_id)
            if user is None:
                return None
            return {
                "email": user.email,
                "userName": user.username,
                "fullName": user.full_name,
            }

    def _mint(self, account_id: int, claims: dict[str, Any], *, fresh: bool) -> TokenPairOut:
        access = self.tokens.create_access_token(
            identity=account_id, additional_claims=claims, fresh=fresh
        )
        refresh = self.tokens.create_refresh_token(identity=account_id)
        return TokenPairOut(
            access_token=access,
            refresh_token=refresh,
            access_expires=self.tokens.access_expires,
            refresh_expires=self.tokens.refresh_expires,
        )

    @staticmethod
    def _coerce_account_id(subject: Any) -> int:
        """Ensure the JWT subject can be treated as an integer account id."""
        if isinstance(subject, int):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        raise InvalidTokenError("invalid subject")
