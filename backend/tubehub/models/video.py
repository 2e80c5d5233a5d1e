"""Video model; the content referenced by watch history."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from tubehub.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Video(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Published video owned by a channel (an account).

    Fields
    ------
    owner_id : int
        Owning account.
    title : str
        Non-empty title.
    duration : float
        Length in seconds, never negative.
    views : int
        View counter, never negative.
    """

    __tablename__ = "videos"
    __repr_attrs__ = ("title",)

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    video_url: Mapped[str] = mapped_column(String(512), nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(String(512), nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, server_default="0")
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="1"
    )

    __table_args__ = (Index("ix_videos_owner_id", "owner_id"),)

    owner: Mapped[User] = relationship("User", back_populates="videos", lazy="joined")

    @validates("title")
    def _validate_title(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Title is required.")
        return value.strip()

    @validates("duration", "views")
    def _validate_non_negative(self, key: str, value: float) -> float:
        if value is None or value < 0:
            raise ValueError(f"{key} must be >= 0.")
        return value
