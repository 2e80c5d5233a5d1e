"""Account resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class AccountSchema(Schema):
    """Public representation of an account; never carries secrets."""

    id = fields.Integer(required=True)
    username = fields.String(data_key="userName", required=True)
    email = fields.String(required=True)
    full_name = fields.String(data_key="fullName", required=True)
    avatar_url = fields.String(data_key="avatar", required=True)
    cover_image_url = fields.String(data_key="coverImage")
    watch_history = fields.List(fields.Integer(), data_key="watchHistory")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)


class PasswordChangeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    old_password = fields.String(data_key="oldPassword", load_default="")
    new_password = fields.String(data_key="newPassword", load_default="")


class ProfileUpdateSchema(Schema):
    """Both keys are required by the service; blanks reach it as ``None``."""

    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(data_key="fullName", load_default=None)
    email = fields.String(load_default=None)
