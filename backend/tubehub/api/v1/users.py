"""Current-account endpoints: password, profile, media and watch history."""

from __future__ import annotations

from flask import Blueprint, request

from tubehub.api.deps import (
    api_response,
    build_account_service,
    build_channel_service,
    current_account_id,
    require_auth,
    timing,
    uploaded_file,
)
from tubehub.schemas import (
    AccountSchema,
    PasswordChangeSchema,
    ProfileUpdateSchema,
    WatchedVideoSchema,
)
from tubehub.services.accounts.dto import PasswordChangeIn, ProfileUpdateIn

bp = Blueprint("users", __name__, url_prefix="/users")

account_schema = AccountSchema()
password_schema = PasswordChangeSchema()
profile_schema = ProfileUpdateSchema()
history_schema = WatchedVideoSchema(many=True)


@bp.post("/me/password")
@require_auth
@timing
def change_password():
    data = password_schema.load(request.get_json(silent=True) or {})
    build_account_service().change_password(
        PasswordChangeIn(
            account_id=current_account_id(),
            old_password=data["old_password"],
            new_password=data["new_password"],
        )
    )
    return api_response({}, message="Password changed successfully")


@bp.patch("/me")
@require_auth
@timing
def update_profile():
    """Replace display name and email of the current account."""

    data = profile_schema.load(request.get_json(silent=True) or {})
    account = build_account_service().update_profile(
        current_account_id(),
        ProfileUpdateIn(full_name=data["full_name"], email=data["email"]),
    )
    return api_response(
        account_schema.dump(account), message="Account details updated successfully"
    )


@bp.patch("/me/avatar")
@require_auth
@timing
def replace_avatar():
    account = build_account_service().replace_avatar(
        current_account_id(), uploaded_file("avatar")
    )
    return api_response(account_schema.dump(account), message="Avatar image updated successfully")


@bp.patch("/me/cover-image")
@require_auth
@timing
def replace_cover_image():
    account = build_account_service().replace_cover_image(
        current_account_id(), uploaded_file("coverImage")
    )
    return api_response(account_schema.dump(account), message="Cover image updated successfully")


@bp.get("/me/history")
@require_auth
@timing
def watch_history():
    """Return watched videos in watch order with owner summaries."""

    videos = build_channel_service().get_watch_history(current_account_id())
    return api_response(history_schema.dump(videos), message="Watch history fetched successfully")


@bp.post("/me/history/<int:video_id>")
@require_auth
@timing
def record_watch(video_id: int):
    build_channel_service().record_watch(current_account_id(), video_id)
    return api_response({}, status=201, message="Watch history updated")
