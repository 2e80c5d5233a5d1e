"""HTTP tests for the current-account endpoints."""

from __future__ import annotations

import io

import pytest

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.factories.video import VideoFactory
from tests.helpers.utils import login
from tubehub.models.user import User

BASE = "/api/v1/users/me"


@pytest.fixture()
def account(client, session):
    """A persisted account whose session cookies live in ``client``."""
    user = UserFactory(
        username="ann01",
        email="ann@x.com",
        avatar_url="https://media.test/avatars/abc123.jpg",
        avatar_public_id=None,
    )
    session.commit()
    login(client, "ann01", DEFAULT_PASSWORD)
    return user


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("post", "/password"),
        ("patch", ""),
        ("patch", "/avatar"),
        ("patch", "/cover-image"),
        ("get", "/history"),
        ("post", "/history/1"),
    ],
)
def test_endpoints_require_authentication(client, method, path):
    response = getattr(client, method)(f"{BASE}{path}")
    assert response.status_code == 401
    assert response.get_json()["code"] == "unauthorized"


# -------------------------------- Password -------------------------------- #
def test_change_password(client, account):
    response = client.post(
        f"{BASE}/password", json={"oldPassword": DEFAULT_PASSWORD, "newPassword": "n3w-secret"}
    )

    assert response.status_code == 200
    assert response.get_json()["data"] == {}
    login(client, "ann01", "n3w-secret")


def test_change_password_wrong_old(client, account):
    response = client.post(f"{BASE}/password", json={"oldPassword": "nope", "newPassword": "x"})
    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid old password"


# -------------------------------- Profile --------------------------------- #
def test_update_profile(client, account):
    response = client.patch(BASE, json={"fullName": "Ann Smith", "email": "ann.smith@x.com"})

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["fullName"] == "ann smith"
    assert data["email"] == "ann.smith@x.com"


def test_update_profile_missing_field(client, account):
    response = client.patch(BASE, json={"fullName": "Ann"})
    assert response.status_code == 400
    assert response.get_json()["message"] == "All fields are required"


def test_update_profile_email_taken(client, account, session):
    UserFactory(email="taken@x.com")
    session.commit()

    response = client.patch(BASE, json={"fullName": "Ann", "email": "taken@x.com"})
    assert response.status_code == 409


# --------------------------------- Media ---------------------------------- #
def test_replace_avatar_cleans_up_previous(client, account, session, media_store):
    response = client.patch(
        f"{BASE}/avatar",
        data={"avatar": (io.BytesIO(b"new-avatar"), "new.png")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Avatar image updated successfully"
    assert body["data"]["avatar"].startswith("https://media.test/avatars/")
    assert media_store.deleted == ["abc123"]
    session.expire_all()
    assert session.get(User, account.id).avatar_url == body["data"]["avatar"]


def test_replace_avatar_without_file(client, account):
    response = client.patch(f"{BASE}/avatar", data={}, content_type="multipart/form-data")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Avatar file is missing"


def test_replace_cover_image(client, account, media_store):
    response = client.patch(
        f"{BASE}/cover-image",
        data={"coverImage": (io.BytesIO(b"cover"), "cover.jpg")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    assert response.get_json()["data"]["coverImage"].startswith("https://media.test/cover-images/")
    assert media_store.deleted == []


def test_replace_cover_image_upload_failure(client, account, media_store):
    media_store.fail_uploads = True
    response = client.patch(
        f"{BASE}/cover-image",
        data={"coverImage": (io.BytesIO(b"cover"), "cover.jpg")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "Error while uploading cover image"


# ----------------------------- Watch history ------------------------------ #
def test_watch_history_round_trip(client, account, session):
    first = VideoFactory()
    second = VideoFactory()
    session.commit()

    assert client.post(f"{BASE}/history/{first.id}").status_code == 201
    assert client.post(f"{BASE}/history/{second.id}").status_code == 201

    response = client.get(f"{BASE}/history")

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert [v["id"] for v in data] == [first.id, second.id]
    assert set(data[0]["owner"]) == {"fullName", "userName", "avatar"}
    assert data[0]["videoFile"] == first.video_url


def test_record_watch_unknown_video(client, account):
    response = client.post(f"{BASE}/history/999999")
    assert response.status_code == 404
