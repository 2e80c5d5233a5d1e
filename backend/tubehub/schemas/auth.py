"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields

from .user import AccountSchema


class RegisterSchema(Schema):
    """Form fields of the multipart registration request.

    Fields default to ``None`` so that blank or missing values reach the
    service, which answers with a single "All fields are required" error.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default=None)
    full_name = fields.String(data_key="fullName", load_default=None)
    username = fields.String(data_key="userName", load_default=None)
    password = fields.String(load_default=None)


class LoginSchema(Schema):
    """Input payload for authenticating with email or login-name."""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default=None)
    username = fields.String(data_key="userName", load_default=None)
    password = fields.String(load_default="")


class RefreshTokenSchema(Schema):
    """Optional JSON body for the refresh endpoint (cookie wins when present)."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(data_key="refreshToken", load_default=None)


class TokenPairSchema(Schema):
    """Response payload carrying both session tokens."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)


class LoginResponseSchema(TokenPairSchema):
    """Logged-in account plus its tokens."""

    user = fields.Nested(AccountSchema, required=True)
