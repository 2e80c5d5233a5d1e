"""Video repository."""

from __future__ import annotations

from sqlalchemy.orm import joinedload

from tubehub.models.video import Video
from tubehub.repositories.base import BaseRepository


class VideoRepository(BaseRepository[Video]):
    """Persistence-only repository for :class:`Video`."""

    model = Video

    def _default_eagerload(self, stmt):
        return stmt.options(joinedload(Video.owner))
