"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from wellbite.services.auth.dto import REFRESH_TOKEN_MAX_LENGTH

from .user import UserSchema


class RefreshRequestSchema(Schema):
    """Input payload for exchanging a refresh token."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(
        required=True,
        data_key="refreshToken",
        validate=validate.Length(min=1, max=REFRESH_TOKEN_MAX_LENGTH),
    )


class LogoutRequestSchema(RefreshRequestSchema):
    """Refresh token to revoke; accepted from the query string or the JSON body."""


class LoginResponseSchema(Schema):
    """Response payload of a successful login."""

    user = fields.Nested(UserSchema, required=True)
    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")
    expires_at = fields.AwareDateTime(required=True, data_key="expiresAt", format="iso")


class RefreshResponseSchema(Schema):
    """Response payload containing a new access token."""

    access_token = fields.String(required=True, data_key="accessToken")
    expires_at = fields.AwareDateTime(required=True, data_key="expiresAt", format="iso")
