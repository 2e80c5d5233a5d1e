"""Watch-history repository: ordered append and listing."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from tubehub.models.video import Video
from tubehub.models.watch_history import WatchHistoryEntry
from tubehub.repositories.base import BaseRepository


class WatchHistoryRepository(BaseRepository[WatchHistoryEntry]):
    """Append-only history of watched videos per account."""

    model = WatchHistoryEntry

    def list_for_user(self, user_id: int) -> list[WatchHistoryEntry]:
        """Return the user's entries in ``position`` order, videos and owners loaded."""
        stmt = (
            select(WatchHistoryEntry)
            .where(WatchHistoryEntry.user_id == user_id)
            .options(joinedload(WatchHistoryEntry.video).joinedload(Video.owner))
            .order_by(WatchHistoryEntry.position.asc(), WatchHistoryEntry.id.asc())
        )
        return list(self.session.execute(stmt).unique().scalars().all())

    def next_position(self, user_id: int) -> int:
        stmt = select(func.max(WatchHistoryEntry.position)).where(
            WatchHistoryEntry.user_id == user_id
        )
        current = self.session.execute(stmt).scalar()
        return 0 if current is None else int(current) + 1

    def append(self, user_id: int, video_id: int) -> WatchHistoryEntry:
        """Add ``video_id`` at the end of the user's history."""
        entry = WatchHistoryEntry(
            user_id=user_id, video_id=video_id, position=self.next_position(user_id)
        )
        return self.add(entry)
