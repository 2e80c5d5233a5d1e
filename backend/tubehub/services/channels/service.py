"""
ChannelService
==============

Read-side use-cases over channels (accounts seen by others) and the
current account's watch history.
"""

from __future__ import annotations

import logging

from tubehub.models.video import Video
from tubehub.services._shared.base import BaseService
from tubehub.services._shared.errors import NotFoundError, ServiceError, UnauthorizedError
from tubehub.services.channels.dto import ChannelProfileOut, OwnerSummaryOut, WatchedVideoOut

log = logging.getLogger(__name__)


def _to_watched(video: Video) -> WatchedVideoOut:
    owner = video.owner
    return WatchedVideoOut(
        id=video.id,
        title=video.title,
        description=video.description,
        video_url=video.video_url,
        thumbnail_url=video.thumbnail_url,
        duration=video.duration,
        views=video.views,
        owner=OwnerSummaryOut(
            full_name=owner.full_name,
            username=owner.username,
            avatar_url=owner.avatar_url,
        ),
    )


class ChannelService(BaseService):
    """Channel profiles and watch history."""

    def get_channel_profile(self, viewer_id: int | None, username: str | None) -> ChannelProfileOut:
        """
        Build the public profile of the channel named ``username``.

        :param viewer_id: Authenticated viewer, ``None`` when anonymous.
        :param username: Channel login-name, matched trimmed and case-insensitively.
        :raises ServiceError: When ``username`` is blank.
        :raises NotFoundError: When no such channel exists.
        """
        if username is None or not username.strip():
            raise ServiceError("username is missing")

        with self.ro_uow() as uow:
            channel = uow.users.get_by_username(username)
            if channel is None:
                raise NotFoundError("channel", username)

            subscriptions = uow.subscriptions
            is_subscribed = (
                viewer_id is not None and subscriptions.is_subscribed(viewer_id, channel.id)
            )
            return ChannelProfileOut(
                id=channel.id,
                username=channel.username,
                full_name=channel.full_name,
                email=channel.email,
                avatar_url=channel.avatar_url,
                cover_image_url=channel.cover_image_url or "",
                subscriber_count=subscriptions.count_subscribers(channel.id),
                subscribed_to_count=subscriptions.count_subscribed_to(channel.id),
                is_subscribed=is_subscribed,
            )

    def get_watch_history(self, account_id: int) -> list[WatchedVideoOut]:
        """
        Return the account's watched videos in watch order, duplicates kept.

        :raises UnauthorizedError: When the token names a vanished account.
        """
        with self.ro_uow() as uow:
            if not uow.users.user_exists(account_id):
                raise UnauthorizedError("Invalid access token")
            entries = uow.watch_history.list_for_user(account_id)
            return [_to_watched(entry.video) for entry in entries]

    def record_watch(self, account_id: int, video_id: int) -> None:
        """
        Append ``video_id`` to the end of the account's watch history.

        :raises NotFoundError: When the video does not exist.
        """
        with self.rw_uow() as uow:
            if not uow.users.user_exists(account_id):
                raise UnauthorizedError("Invalid access token")
            if uow.videos.get(video_id) is None:
                raise NotFoundError("Video", video_id)
            uow.watch_history.append(account_id, video_id)

        log.info(
            "Recorded watch of video %s",
            video_id,
            extra={"event": "history.recorded", "account_id": account_id},
        )
