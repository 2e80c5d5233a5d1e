# tubehub/infra/jwt/jwt_token_provider.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from tubehub.services._shared.ports import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    InvalidTokenError,
    TokenProvider,
)

# Claims every token must carry to be accepted by ``decode``
_REQUIRED_CLAIMS = ["sub", "type", "jti", "iat", "exp"]


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    HS256 JWTs signed with PyJWT, one secret and lifetime per token kind.

    Access tokens use the same claim layout as flask-jwt-extended
    (``sub``, ``type``, ``jti``, ``fresh``, ``iat``, ``nbf``, ``exp``) so that
    protected routes can verify them with ``verify_jwt_in_request`` when
    ``JWT_SECRET_KEY`` equals ``access_secret``.
    """

    access_secret: str
    refresh_secret: str
    access_expires: timedelta
    refresh_expires: timedelta
    algorithm: str = "HS256"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> JWTTokenProvider:
        return cls(
            access_secret=config["ACCESS_TOKEN_SECRET"],
            refresh_secret=config["REFRESH_TOKEN_SECRET"],
            access_expires=config["ACCESS_TOKEN_EXPIRY"],
            refresh_expires=config["REFRESH_TOKEN_EXPIRY"],
        )

    def _secret_for(self, token_type: str) -> str:
        if token_type == ACCESS_TOKEN_TYPE:
            return self.access_secret
        if token_type == REFRESH_TOKEN_TYPE:
            return self.refresh_secret
        raise ValueError(f"Unknown token type: {token_type!r}")

    def _encode(
        self,
        *,
        identity: int | str,
        token_type: str,
        expires: timedelta,
        additional_claims: dict[str, Any] | None = None,
        fresh: bool = False,
    ) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = dict(additional_claims or {})
        # Reserved claims always win over caller-provided ones
        payload.update(
            {
                "sub": str(identity),
                "type": token_type,
                "jti": uuid4().hex,
                "fresh": fresh,
                "iat": now,
                "nbf": now,
                "exp": now + expires,
            }
        )
        return jwt.encode(payload, self._secret_for(token_type), algorithm=self.algorithm)

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
        fresh: bool = False,
    ) -> str:
        return self._encode(
            identity=identity,
            token_type=ACCESS_TOKEN_TYPE,
            expires=self.access_expires,
            additional_claims=additional_claims,
            fresh=fresh,
        )

    def create_refresh_token(self, *, identity: int | str) -> str:
        return self._encode(
            identity=identity,
            token_type=REFRESH_TOKEN_TYPE,
            expires=self.refresh_expires,
        )

    def decode(self, token: str, *, expected_type: str) -> dict[str, Any]:
        """
        Verify signature, expiry and kind of ``token``.

        :raises InvalidTokenError: Wrapping any PyJWT failure; the library
            message is kept as the cause only.
        """
        if not token:
            raise InvalidTokenError("empty token")
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                self._secret_for(expected_type),
                algorithms=[self.algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("token verification failed") from exc
        if claims.get("type") != expected_type:
            raise InvalidTokenError("wrong token type")
        return claims
