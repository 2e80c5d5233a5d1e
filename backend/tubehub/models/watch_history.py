"""Watch-history entries: an ordered, append-only list of videos per account."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from tubehub.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .video import Video


class WatchHistoryEntry(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    One watched video at a given ``position`` in an account's history.

    The same video may appear more than once; ``position`` is unique per user.
    """

    __tablename__ = "watch_history"
    __repr_attrs__ = ("user_id", "video_id", "position")

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "position", name="uq_watch_history_user_position"),
        Index("ix_watch_history_user_id", "user_id"),
    )

    user: Mapped[User] = relationship("User", back_populates="watch_history")
    video: Mapped[Video] = relationship("Video", lazy="joined")

    @validates("position")
    def _validate_position(self, key: str, value: int) -> int:
        if value is None or value < 0:
            raise ValueError("position must be >= 0.")
        return value
