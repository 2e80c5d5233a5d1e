"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from tubehub.repositories.base import BaseRepository
from tubehub.repositories.subscription import SubscriptionRepository
from tubehub.repositories.user import UserRepository
from tubehub.repositories.video import VideoRepository
from tubehub.repositories.watch_history import WatchHistoryRepository

__all__ = [
    "BaseRepository",
    "SubscriptionRepository",
    "UserRepository",
    "VideoRepository",
    "WatchHistoryRepository",
]
