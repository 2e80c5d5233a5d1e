"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from tubehub.core.errors import Unauthorized, as_envelope
from tubehub.core.extensions import (
    MEDIA_STORE_KEY,
    REFRESH_STORE_KEY,
    TOKEN_PROVIDER_KEY,
    get_adapter,
)
from tubehub.services._shared.ports import UploadedFile
from tubehub.services.accounts.service import AccountService
from tubehub.services.channels.service import ChannelService
from tubehub.services.tokens.dto import TokenPairOut
from tubehub.services.tokens.service import TokenService

F = TypeVar("F", bound=Callable[..., Any])

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


# --------------------------------------------------------------------------- #
# Service builders
# --------------------------------------------------------------------------- #


def build_token_service() -> TokenService:
    return TokenService(
        token_provider=get_adapter(TOKEN_PROVIDER_KEY),
        refresh_store=get_adapter(REFRESH_STORE_KEY),
    )


def build_account_service() -> AccountService:
    return AccountService(
        token_service=build_token_service(),
        media_store=get_adapter(MEDIA_STORE_KEY),
        cleanup_on_replace=bool(current_app.config.get("MEDIA_CLEANUP_ON_REPLACE", True)),
    )


def build_channel_service() -> ChannelService:
    return ChannelService()


# --------------------------------------------------------------------------- #
# Authentication
# --------------------------------------------------------------------------- #


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token (cookie or bearer header)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _identity_as_int(identity: Any) -> int:
    try:
        return int(identity)
    except (TypeError, ValueError) as exc:
        raise Unauthorized("Invalid access token") from exc


def current_account_id() -> int:
    """Return the account id of the verified access token."""

    return _identity_as_int(get_jwt_identity())


def optional_account_id() -> int | None:
    """Return the viewer's account id, or ``None`` when anonymous.

    An expired or malformed token is treated as no token at all.
    """

    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError):
        return None
    identity = get_jwt_identity()
    if identity is None:
        return None
    try:
        return int(identity)
    except (TypeError, ValueError):
        return None


# --------------------------------------------------------------------------- #
# Responses & cookies
# --------------------------------------------------------------------------- #


def api_response(data: Any = None, *, status: int = 200, message: str = "Success") -> Response:
    """Return a success envelope as JSON."""

    response = jsonify(as_envelope(status=status, message=message, data=data))
    response.status_code = status
    return response


def _cookie_options() -> dict[str, Any]:
    return {
        "httponly": True,
        "secure": bool(current_app.config.get("AUTH_COOKIE_SECURE", True)),
        "samesite": current_app.config.get("AUTH_COOKIE_SAMESITE", "Strict"),
        "path": "/",
    }


def set_auth_cookies(response: Response, tokens: TokenPairOut) -> Response:
    """Attach both session cookies with ``Max-Age`` equal to each token lifetime."""

    options = _cookie_options()
    response.set_cookie(
        ACCESS_COOKIE,
        tokens.access_token,
        max_age=int(tokens.access_expires.total_seconds()),
        **options,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        tokens.refresh_token,
        max_age=int(tokens.refresh_expires.total_seconds()),
        **options,
    )
    return response


def clear_auth_cookies(response: Response) -> Response:
    options = _cookie_options()
    response.delete_cookie(ACCESS_COOKIE, **options)
    response.delete_cookie(REFRESH_COOKIE, **options)
    return response


# --------------------------------------------------------------------------- #
# Uploads
# --------------------------------------------------------------------------- #


def uploaded_file(field: str) -> UploadedFile | None:
    """Return the single file sent in ``field``; an empty part counts as absent."""

    storage = request.files.get(field)
    if storage is None or not storage.filename:
        return None
    return UploadedFile(
        filename=storage.filename,
        stream=storage.stream,
        content_type=storage.mimetype or None,
    )


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
