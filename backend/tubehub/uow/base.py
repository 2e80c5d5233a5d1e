"""
Abstract Unit of Work contract shared by the read-write and read-only variants.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tubehub.repositories import (
        SubscriptionRepository,
        UserRepository,
        VideoRepository,
        WatchHistoryRepository,
    )


class UnitOfWork(ABC):
    """
    Transactional boundary around one account or channel use-case.

    Every repository exposed here is bound to the same session, so reads and
    writes inside one ``with`` block see a single transaction. Leaving the
    block without an exception commits (read-write) or discards (read-only);
    an exception always rolls back.
    """

    users: UserRepository
    videos: VideoRepository
    subscriptions: SubscriptionRepository
    watch_history: WatchHistoryRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
