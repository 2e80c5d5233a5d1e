"""HTTP tests for public channel profiles and the health probe."""

from __future__ import annotations

from tests.factories.subscription import SubscriptionFactory
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.utils import login


def test_profile_for_subscribed_viewer(client, session):
    channel = UserFactory(username="ann01")
    viewer = UserFactory(username="viewer")
    for subscriber_id in (viewer.id, UserFactory().id, UserFactory().id):
        SubscriptionFactory(subscriber_id=subscriber_id, channel_id=channel.id)
    session.commit()
    login(client, "viewer", DEFAULT_PASSWORD)

    response = client.get("/api/v1/channels/ann01")

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "User channel fetched successfully"
    data = body["data"]
    assert data["userName"] == "ann01"
    assert data["subscribersCount"] == 3
    assert data["channelsSubscribedToCount"] == 0
    assert data["isSubscribed"] is True
    assert "refreshToken" not in data
    assert "password" not in data


def test_profile_for_anonymous_viewer(client, session):
    channel = UserFactory(username="ann01")
    SubscriptionFactory(channel_id=channel.id)
    session.commit()

    data = client.get("/api/v1/channels/ANN01").get_json()["data"]
    assert data["subscribersCount"] == 1
    assert data["isSubscribed"] is False


def test_profile_with_invalid_token_is_anonymous(client, session):
    UserFactory(username="ann01")
    session.commit()

    response = client.get(
        "/api/v1/channels/ann01", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 200
    assert response.get_json()["data"]["isSubscribed"] is False


def test_unknown_channel(client):
    response = client.get("/api/v1/channels/ghost")

    assert response.status_code == 404
    body = response.get_json()
    assert body["success"] is False
    assert body["message"] == "channel does not exist"


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["db"] == "ok"
    assert data["refreshTokenStore"] == "database"
    assert data["mediaBackend"] == "memory"


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/v1/nope")

    assert response.status_code == 404
    body = response.get_json()
    assert body["code"] == "not_found"
    assert body["message"] == "Route '/api/v1/nope' not found"
