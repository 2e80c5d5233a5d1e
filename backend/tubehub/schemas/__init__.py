"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .channel import ChannelProfileSchema
from .user import AccountSchema, PasswordChangeSchema, ProfileUpdateSchema
from .video import OwnerSummarySchema, WatchedVideoSchema

__all__ = [
    "LoginSchema",
    "LoginResponseSchema",
    "RefreshTokenSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "AccountSchema",
    "PasswordChangeSchema",
    "ProfileUpdateSchema",
    "ChannelProfileSchema",
    "OwnerSummarySchema",
    "WatchedVideoSchema",
]
