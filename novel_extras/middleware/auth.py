import secrets
import string
from functools import wraps

from flask import g

from novel_extras.api.common import json_payload, require_field, forbidden
from novel_extras.extensions import db
from novel_extras.models.user import User

TOKEN_LENGTH = 32
_TOKEN_ALPHABET = string.ascii_letters + string.digits


def is_token(token) -> bool:
    """Shape check only: exactly 32 ASCII alphanumerics."""
    return (
        isinstance(token, str)
        and len(token) == TOKEN_LENGTH
        and all(ch in _TOKEN_ALPHABET for ch in token)
    )


def generate_token() -> str:
    return ''.join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def get_user(token):
    """Look up a user by bearer token. Shape-invalid tokens never hit the database."""
    if not is_token(token):
        return None
    return db.session.execute(
        db.select(User).filter_by(token=token)
    ).scalar_one_or_none()


def require_user(f):
    """Resolve the ``token`` field of the JSON body into ``g.user``.

    Answers 403 when the token is malformed or does not belong to anyone.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        data = json_payload()
        token = require_field(data, 'token')
        if not is_token(token):
            return forbidden()

        user = get_user(token)
        if user is None:
            return forbidden()

        g.user = user
        g.payload = data
        return f(*args, **kwargs)
    return decorated
