"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from wellbite.models.user import Role


class UserCreateSchema(Schema):
    """Payload for provisioning a new user behind the API key."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    first_name = fields.String(
        required=True, data_key="firstName", validate=validate.Length(min=1, max=100)
    )
    last_name = fields.String(
        required=True, data_key="lastName", validate=validate.Length(min=1, max=100)
    )
    role = fields.String(
        load_default=Role.NONE.value,
        validate=validate.OneOf([r.value for r in Role]),
    )


class UserSchema(Schema):
    """Public representation of a user: ``{id, email, fullName, role}``."""

    id = fields.UUID(required=True)
    email = fields.Email(required=True)
    full_name = fields.String(required=True, data_key="fullName")
    role = fields.String(required=True)
