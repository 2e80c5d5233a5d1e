"""Column and repr mixins shared by the account, video and social models."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class PKMixin:
    """Integer surrogate key ``id``; also the subject of issued tokens for users."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class TimestampMixin:
    """
    ``created_at`` / ``updated_at`` maintained by the database clock.

    Both are timezone-aware. ``updated_at`` also moves on Core ``UPDATE``
    statements issued through the ORM, e.g. refresh-token swaps.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class ReprMixin:
    """
    ``<ClassName id=... attr=...>`` for logs and debugging.

    Subclasses list extra attributes in ``__repr_attrs__``; secrets must never
    be listed there.
    """

    __repr_attrs__: ClassVar[tuple[str, ...]] = ()

    def __repr__(self) -> str:
        parts = [f"id={getattr(self, 'id', None)}"]
        parts.extend(f"{name}={getattr(self, name, None)!r}" for name in self.__repr_attrs__)
        return f"<{self.__class__.__name__} {' '.join(parts)}>"
