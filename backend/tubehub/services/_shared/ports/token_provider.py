from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol
from uuid import uuid4

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered with, expired or of the wrong kind."""


class TokenProvider(Protocol):
    """Port for minting and decoding signed access/refresh tokens.

    Each token kind has its own signing secret and lifetime.
    """

    access_expires: timedelta
    refresh_expires: timedelta

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
        fresh: bool = False,
    ) -> str: ...

    def create_refresh_token(self, *, identity: int | str) -> str: ...

    def decode(self, token: str, *, expected_type: str) -> dict[str, Any]:
        """Verify ``token`` and return its claims.

        :raises InvalidTokenError: On any verification failure.
        """
        ...


class StubTokenProvider(TokenProvider):
    """Deterministic, unsigned token provider used in unit tests.

    Expiry is checked against the wall clock, so ``freezegun`` can move
    tokens past their lifetime.
    """

    def __init__(
        self,
        *,
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=10),
    ) -> None:
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def _mk(
        self,
        *,
        identity: int | str,
        ttype: str,
        exp_delta: timedelta,
        additional_claims: dict[str, Any] | None = None,
        fresh: bool | None = None,
    ) -> str:
        self._seq += 1
        jti = uuid4().hex
        token = f"{ttype}.{identity}.{self._seq}"
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(identity),
            "type": ttype,
            "jti": jti,
            "iat": int(now.timestamp()),
            "exp": int((now + exp_delta).timestamp()),
        }
        if additional_claims:
            payload.update(additional_claims)
        if fresh is not None:
            payload["fresh"] = bool(fresh)
        self._issued[token] = payload
        return token

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
        fresh: bool = False,
    ) -> str:
        return self._mk(
            identity=identity,
            ttype=ACCESS_TOKEN_TYPE,
            exp_delta=self.access_expires,
            additional_claims=additional_claims,
            fresh=fresh,
        )

    def create_refresh_token(self, *, identity: int | str) -> str:
        return self._mk(identity=identity, ttype=REFRESH_TOKEN_TYPE, exp_delta=self.refresh_expires)

    def decode(self, token: str, *, expected_type: str) -> dict[str, Any]:
        payload = self._issued.get(token)
        if payload is None:
            raise InvalidTokenError("unknown token")
        if payload["type"] != expected_type:
            raise InvalidTokenError("wrong token type")
        if payload["exp"] <= int(datetime.now(UTC).timestamp()):
            raise InvalidTokenError("token expired")
        return dict(payload)
