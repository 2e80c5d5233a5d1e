"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`tubehub.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``tubehub.services._shared.base``)
    * :class:`BaseService`

- Token service (from ``tubehub.services.tokens``)
    * :class:`TokenService`
    * DTO: :class:`TokenPairOut`

- Account service (from ``tubehub.services.accounts``)
    * :class:`AccountService`
    * DTOs: :class:`RegisterIn`, :class:`LoginIn`, :class:`PasswordChangeIn`,
      :class:`ProfileUpdateIn`, :class:`AccountOut`, :class:`LoginOut`

- Channel service (from ``tubehub.services.channels``)
    * :class:`ChannelService`
    * DTOs: :class:`ChannelProfileOut`, :class:`WatchedVideoOut`
"""

from __future__ import annotations

# Base primitives
from ._shared.base import BaseService

# Account service + DTOs
from .accounts.dto import (
    AccountOut,
    LoginIn,
    LoginOut,
    PasswordChangeIn,
    ProfileUpdateIn,
    RegisterIn,
)
from .accounts.service import AccountService

# Channel service + DTOs
from .channels.dto import ChannelProfileOut, WatchedVideoOut
from .channels.service import ChannelService

# Token service + DTO
from .tokens.dto import TokenPairOut
from .tokens.service import TokenService

__all__ = [
    # Base
    "BaseService",
    # Tokens
    "TokenService",
    "TokenPairOut",
    # Accounts
    "AccountService",
    "RegisterIn",
    "LoginIn",
    "PasswordChangeIn",
    "ProfileUpdateIn",
    "AccountOut",
    "LoginOut",
    # Channels
    "ChannelService",
    "ChannelProfileOut",
    "WatchedVideoOut",
]
