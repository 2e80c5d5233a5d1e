# tubehub/services/channels/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Public channel page for one account.

    :param subscriber_count: Accounts subscribed to this channel.
    :type subscriber_count: int
    :param subscribed_to_count: Channels this account is subscribed to.
    :type subscribed_to_count: int
    :param is_subscribed: Whether the viewer follows this channel; ``False``
        for anonymous viewers.
    :type is_subscribed: bool
    """

    id: int
    username: str
    full_name: str
    email: str
    avatar_url: str
    cover_image_url: str
    subscriber_count: int
    subscribed_to_count: int
    is_subscribed: bool


@dataclass(frozen=True, slots=True)
class OwnerSummaryOut:
    full_name: str
    username: str
    avatar_url: str


@dataclass(frozen=True, slots=True)
class WatchedVideoOut:
    """One watch-history entry with its video and the video's owner."""

    id: int
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    duration: float
    views: int
    owner: OwnerSummaryOut
