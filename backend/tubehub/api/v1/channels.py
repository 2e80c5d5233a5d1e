"""Public channel profile endpoint."""

from __future__ import annotations

from flask import Blueprint

from tubehub.api.deps import api_response, build_channel_service, optional_account_id, timing
from tubehub.schemas import ChannelProfileSchema

bp = Blueprint("channels", __name__, url_prefix="/channels")

profile_schema = ChannelProfileSchema()


@bp.get("/<username>")
@timing
def channel_profile(username: str):
    """Return the channel's profile; ``isSubscribed`` is relative to the viewer, if any."""

    profile = build_channel_service().get_channel_profile(optional_account_id(), username)
    return api_response(profile_schema.dump(profile), message="User channel fetched successfully")
