"""Video schemas used by the watch-history endpoint."""

from __future__ import annotations

from marshmallow import Schema, fields


class OwnerSummarySchema(Schema):
    """Owner projection embedded in each watched video."""

    full_name = fields.String(data_key="fullName", required=True)
    username = fields.String(data_key="userName", required=True)
    avatar_url = fields.String(data_key="avatar", required=True)


class WatchedVideoSchema(Schema):
    id = fields.Integer(required=True)
    title = fields.String(required=True)
    description = fields.String()
    video_url = fields.String(data_key="videoFile", required=True)
    thumbnail_url = fields.String(data_key="thumbnail", required=True)
    duration = fields.Float()
    views = fields.Integer()
    owner = fields.Nested(OwnerSummarySchema, required=True)
