"""
tubehub.services._shared.ports
==============================

*Ports* (hexagonal interfaces) between the service layer and infrastructure.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`, minting and verifying signed access/refresh tokens.

- :mod:`refresh_token_store`:
    :class:`~.RefreshTokenStore` and :class:`~.RotationResult`, the single
    current refresh token per account with compare-and-set rotation.

- :mod:`media_store`:
    :class:`~.MediaStore`, upload and delete of avatar/cover assets.

Concrete adapters live under ``tubehub.infra``; the in-memory doubles here
back unit tests and local development.
"""

from __future__ import annotations

from .media_store import (
    InMemoryMediaStore,
    MediaAsset,
    MediaStore,
    MediaStoreError,
    UploadedFile,
    public_id_from_url,
)
from .refresh_token_store import (
    InMemoryRefreshTokenStore,
    RefreshTokenStore,
    RotationResult,
)
from .token_provider import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    InvalidTokenError,
    StubTokenProvider,
    TokenProvider,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "InMemoryMediaStore",
    "InMemoryRefreshTokenStore",
    "InvalidTokenError",
    "MediaAsset",
    "MediaStore",
    "MediaStoreError",
    "RefreshTokenStore",
    "RotationResult",
    "StubTokenProvider",
    "TokenProvider",
    "UploadedFile",
    "public_id_from_url",
]
