"""Comment store: posting with @-mentions, feeds and soft deletion."""
import logging

from novel_extras.api import common
from novel_extras.extensions import db
from novel_extras.middleware.auth import get_user
from novel_extras.models.chapter import Chapter
from novel_extras.models.comment import Comment
from novel_extras.models.mention import Mention
from novel_extras.models.user import User
from novel_extras.services.avatar import avatar_url
from novel_extras.services.chapters import get_or_create_chapter
from novel_extras.services.mentions import extract_mentions

logger = logging.getLogger(__name__)

MAX_COMMENT_BYTES = 4096
MIN_COMMENT_BYTES = 1
RECENT_COMMENTS_AMOUNT = 50


def validate_content(content):
    length = common.byte_length(content)
    if length > MAX_COMMENT_BYTES:
        return common.ErrorCode.COMMENT_TOO_LONG
    if length < MIN_COMMENT_BYTES:
        return common.ErrorCode.COMMENT_TOO_SHORT
    return None


def serialize_comment(relative_path, comment, user):
    return {
        'body': comment.content,
        'create_timestamp': comment.create_timestamp,
        'update_timestamp': comment.update_timestamp,
        'relative_path': relative_path,
        'id': comment.id,
        'user': {
            'avatar_url': avatar_url(user),
            'user_name': user.user_name,
            'display_name': user.display_name,
        },
    }


def _comment_query():
    return (
        db.select(Chapter.relative_path, Comment, User)
        .select_from(Comment)
        .join(Chapter, Comment.chapter_id == Chapter.id)
        .join(User, Comment.user_id == User.id)
        .where(Comment.deleted.is_(False))
        .order_by(Comment.id.desc())
    )


def _load(statement):
    return [
        serialize_comment(path, comment, user)
        for path, comment, user in db.session.execute(statement).all()
    ]


def post_comment(token, relative_path, content):
    """Store a comment and its mentions atomically.

    Returns False when the token does not resolve to a user. Mentioned
    names that match no user are skipped.
    """
    user = get_user(token)
    if user is None:
        return False

    now = common.current_timestamp()
    mentioned = extract_mentions(content)
    try:
        chapter = get_or_create_chapter(relative_path)
        comment = Comment(
            chapter_id=chapter.id,
            user_id=user.id,
            content=content,
            deleted=False,
            create_timestamp=now,
            update_timestamp=now,
        )
        db.session.add(comment)
        db.session.flush()

        if mentioned:
            user_ids = db.session.execute(
                db.select(User.id).where(
                    User.user_name.in_([name.lower() for name in mentioned])
                )
            ).scalars().all()
            db.session.add_all(
                Mention(from_comment_id=comment.id, mentioned_user_id=user_id, timestamp=now)
                for user_id in user_ids
            )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return True


def chapter_comments(relative_path):
    return _load(_comment_query().where(Chapter.relative_path == relative_path))


def recent_comments():
    return _load(_comment_query().limit(RECENT_COMMENTS_AMOUNT))


def recent_mentioned(token):
    """Latest live comments mentioning the token's owner.

    Reading the feed marks mentions as seen. Unknown tokens get an empty list.
    """
    user = get_user(token)
    if user is None:
        return []

    user.last_checked_mentions_timestamp = common.current_timestamp()
    db.session.commit()

    statement = (
        _comment_query()
        .join(Mention, Mention.from_comment_id == Comment.id)
        .where(Mention.mentioned_user_id == user.id)
        .limit(RECENT_COMMENTS_AMOUNT)
    )
    return _load(statement)


def delete_comment(user, comment_id):
    """Soft-delete a live comment owned by ``user``. True if one row changed."""
    result = db.session.execute(
        db.update(Comment)
        .where(
            Comment.id == comment_id,
            Comment.deleted.is_(False),
            Comment.user_id == user.id,
        )
        .values(deleted=True)
        .execution_options(synchronize_session=False)
    )
    db.session.commit()
    deleted = result.rowcount == 1
    if deleted:
        logger.info('User %s deleted comment %s', user.user_name, comment_id)
    return deleted
