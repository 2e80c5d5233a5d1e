"""Channel profile schema."""

from __future__ import annotations

from marshmallow import Schema, fields


class ChannelProfileSchema(Schema):
    id = fields.Integer(required=True)
    full_name = fields.String(data_key="fullName", required=True)
    username = fields.String(data_key="userName", required=True)
    subscriber_count = fields.Integer(data_key="subscribersCount", required=True)
    subscribed_to_count = fields.Integer(data_key="channelsSubscribedToCount", required=True)
    is_subscribed = fields.Boolean(data_key="isSubscribed", required=True)
    avatar_url = fields.String(data_key="avatar", required=True)
    cover_image_url = fields.String(data_key="coverImage")
    email = fields.String(required=True)
