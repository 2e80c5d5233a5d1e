# tests/unit/services/test_channel_service.py
from __future__ import annotations

import pytest

from tests.factories.subscription import SubscriptionFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory
from tubehub.services._shared.errors import NotFoundError, ServiceError, UnauthorizedError
from tubehub.services.channels.dto import ChannelProfileOut
from tubehub.services.channels.service import ChannelService


@pytest.fixture()
def service() -> ChannelService:
    return ChannelService()


# ---------------------------- Channel profile ----------------------------- #
def test_profile_counts_and_viewer_membership(service, session):
    channel = UserFactory(username="ann01")
    viewer = UserFactory()
    for subscriber_id in (viewer.id, UserFactory().id, UserFactory().id):
        SubscriptionFactory(subscriber_id=subscriber_id, channel_id=channel.id)
    # ann01 follows one other channel
    SubscriptionFactory(subscriber_id=channel.id, channel_id=UserFactory().id)
    session.commit()

    profile = service.get_channel_profile(viewer.id, "ann01")

    assert isinstance(profile, ChannelProfileOut)
    assert profile.id == channel.id
    assert profile.subscriber_count == 3
    assert profile.subscribed_to_count == 1
    assert profile.is_subscribed is True


def test_profile_lookup_is_case_insensitive(service, session):
    UserFactory(username="ann01")
    session.commit()

    assert service.get_channel_profile(None, "  ANN01 ").username == "ann01"


def test_profile_for_non_subscriber(service, session):
    channel = UserFactory()
    viewer = UserFactory()
    SubscriptionFactory(channel_id=channel.id)
    session.commit()

    profile = service.get_channel_profile(viewer.id, channel.username)
    assert profile.subscriber_count == 1
    assert profile.is_subscribed is False


def test_profile_for_anonymous_viewer(service, session):
    channel = UserFactory()
    SubscriptionFactory(channel_id=channel.id)
    session.commit()

    profile = service.get_channel_profile(None, channel.username)
    assert profile.is_subscribed is False


def test_profile_exposes_no_secrets(service, session):
    channel = UserFactory()
    session.commit()

    profile = service.get_channel_profile(None, channel.username)
    assert not hasattr(profile, "password_hash")
    assert not hasattr(profile, "refresh_token")
    assert profile.email == channel.email
    assert profile.avatar_url == channel.avatar_url


@pytest.mark.parametrize("username", [None, "", "   "])
def test_profile_requires_username(service, username):
    with pytest.raises(ServiceError, match="username is missing"):
        service.get_channel_profile(None, username)


def test_profile_unknown_channel(service):
    with pytest.raises(NotFoundError) as exc_info:
        service.get_channel_profile(None, "ghost")
    assert str(exc_info.value) == "channel does not exist"


# ----------------------------- Watch history ------------------------------ #
def test_watch_history_in_order_with_owner_summary(service, session):
    user = UserFactory()
    first = VideoFactory()
    second = VideoFactory()
    session.commit()

    service.record_watch(user.id, second.id)
    service.record_watch(user.id, first.id)
    service.record_watch(user.id, second.id)

    history = service.get_watch_history(user.id)

    assert [v.id for v in history] == [second.id, first.id, second.id]
    owner = history[1].owner
    assert owner.username == first.owner.username
    assert owner.full_name == first.owner.full_name
    assert owner.avatar_url == first.owner.avatar_url


def test_watch_history_empty(service, session):
    user = UserFactory()
    session.commit()
    assert service.get_watch_history(user.id) == []


def test_watch_history_for_vanished_account(service):
    with pytest.raises(UnauthorizedError):
        service.get_watch_history(999_999)


def test_record_watch_unknown_video(service, session):
    user = UserFactory()
    session.commit()
    with pytest.raises(NotFoundError):
        service.record_watch(user.id, 999_999)
