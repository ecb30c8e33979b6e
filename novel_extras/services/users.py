"""User directory: registration, profile updates and session init."""
import logging
import re

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from novel_extras.api import common
from novel_extras.api.common import APIResult, ErrorCode
from novel_extras.extensions import db
from novel_extras.middleware.auth import generate_token, get_user
from novel_extras.models.comment import Comment
from novel_extras.models.mention import Mention
from novel_extras.models.user import User

logger = logging.getLogger(__name__)

MAX_DISPLAY_NAME_BYTES = 64
MIN_DISPLAY_NAME_BYTES = 3
MAX_EMAIL_BYTES = 128

# Basic shape check only, deliberately loose.
EMAIL_PATTERN = re.compile(r'[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+.[a-zA-Z0-9-.]+')


def validate_display_name(display_name):
    length = common.byte_length(display_name)
    if length > MAX_DISPLAY_NAME_BYTES:
        return ErrorCode.NAME_TOO_LONG
    if length < MIN_DISPLAY_NAME_BYTES:
        return ErrorCode.NAME_TOO_SHORT
    return None


def validate_email(email):
    if common.byte_length(email) > MAX_EMAIL_BYTES:
        return ErrorCode.EMAIL_TOO_LONG
    if not EMAIL_PATTERN.fullmatch(email):
        return ErrorCode.EMAIL_INVALID
    return None


def validate_profile(display_name, email):
    code = validate_display_name(display_name)
    if code is None and email is not None:
        code = validate_email(email)
    return code


def derive_user_name(display_name):
    return display_name.replace(' ', '_').lower()


def _exists(*criteria):
    return db.session.execute(
        db.select(db.exists().where(*criteria))
    ).scalar()


def _name_taken(display_name, user_name):
    names = [display_name, user_name]
    return _exists(or_(User.display_name.in_(names), User.user_name.in_(names)))


def _email_taken(email, exclude_user_id=None):
    criteria = [User.email == email]
    if exclude_user_id is not None:
        criteria.append(User.id != exclude_user_id)
    return _exists(*criteria)


def register(display_name, email=None):
    """Create a user and hand back its bearer token.

    Name and email uniqueness are checked before the insert; a unique
    violation at commit (a concurrent registration) maps to the same codes.
    """
    code = validate_profile(display_name, email)
    if code is not None:
        return APIResult.error(code)

    user_name = derive_user_name(display_name)
    token = generate_token()

    def check():
        if _name_taken(display_name, user_name):
            return ErrorCode.NAME_DUPLICATED
        if email is not None and _email_taken(email):
            return ErrorCode.EMAIL_DUPLICATED
        return None

    code = check()
    if code is not None:
        return APIResult.error(code)

    user = User(
        token=token,
        email=email,
        user_name=user_name,
        display_name=display_name,
        last_checked_mentions_timestamp=common.current_timestamp(),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        code = check()
        if code is None:
            raise
        return APIResult.error(code)

    logger.info('Registered user %s', user_name)
    return APIResult.success(token=token, user_name=user_name)


def update_profile(token, display_name, email=None):
    """Change display name and email. The caller's own row never counts as a clash."""
    code = validate_profile(display_name, email)
    if code is not None:
        return APIResult.error(code)

    user = get_user(token)
    if user is None:
        return APIResult.forbidden()

    def check():
        if _exists(User.id != user.id, User.display_name == display_name):
            return ErrorCode.NAME_DUPLICATED
        if email is not None and _email_taken(email, exclude_user_id=user.id):
            return ErrorCode.EMAIL_DUPLICATED
        return None

    code = check()
    if code is not None:
        return APIResult.error(code)

    user.display_name = display_name
    user.email = email
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        code = check()
        if code is None:
            raise
        return APIResult.error(code)
    return APIResult.success()


def count_unseen_mentions(user, since):
    """Mentions of ``user`` on live comments made at or after ``since``."""
    return db.session.execute(
        db.select(func.count(Mention.id))
        .select_from(Mention)
        .join(Comment, Mention.from_comment_id == Comment.id)
        .where(
            Mention.mentioned_user_id == user.id,
            Mention.timestamp >= since,
            Comment.deleted.is_(False),
        )
    ).scalar()


def init_session(token):
    """Profile summary for the client, or None for an unknown token.

    Marks mentions as seen: the stored checkpoint moves to now.
    """
    user = get_user(token)
    if user is None:
        return None

    mentions = count_unseen_mentions(user, user.last_checked_mentions_timestamp)
    user.last_checked_mentions_timestamp = common.current_timestamp()
    db.session.commit()

    return {
        'user_name': user.user_name,
        'display_name': user.display_name,
        'email': user.email,
        'mentions': mentions,
    }
