"""
Request schemas for the auth service endpoints.
"""

from .fields import Group, Leaf, Schema

USER_ID = "UserID"
PASSWORD = "Password"
EMAIL = "Email"

CREDENTIALS_FIELDS = (Leaf(USER_ID), Leaf(PASSWORD))

# POST /auth
AUTHENTICATE_SCHEMA = Schema("authenticate", CREDENTIALS_FIELDS)

# POST /user/{user}/create embeds the authenticate fields
CREATE_SUBJECT_SCHEMA = Schema(
    "create_subject",
    [
        Group("credentials", CREDENTIALS_FIELDS),
        Leaf(EMAIL),
    ],
)
