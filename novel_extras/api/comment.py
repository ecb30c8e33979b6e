from flask import Blueprint, request, jsonify, g

from novel_extras.api.common import (
    json_payload, require_field, is_page_name, forbidden,
    simple_success, error_response_with_code,
)
from novel_extras.middleware.auth import is_token, require_user
from novel_extras.services import comments

bp = Blueprint('comment', __name__, url_prefix='/comment')


@bp.route('/send', methods=['POST'])
def send():
    data = json_payload()
    token = require_field(data, 'token')
    relative_path = require_field(data, 'relative_path')
    content = require_field(data, 'content')

    code = comments.validate_content(content)
    if code is not None:
        return error_response_with_code(code)
    if not is_token(token) or not is_page_name(relative_path):
        return forbidden()

    if not comments.post_comment(token, relative_path, content):
        return forbidden()
    return simple_success()


@bp.route('/getChapter', methods=['GET'])
def get_chapter():
    """Live comments on one chapter, newest first."""
    relative_path = request.args.get('relative_path', '')
    if not is_page_name(relative_path):
        return forbidden()
    return jsonify(comments.chapter_comments(relative_path))


@bp.route('/getRecent', methods=['GET'])
def get_recent():
    return jsonify(comments.recent_comments())


@bp.route('/getRecentMentioned', methods=['POST'])
def get_recent_mentioned():
    token = require_field(json_payload(), 'token')
    if not is_token(token):
        return forbidden()
    return jsonify(comments.recent_mentioned(token))


@bp.route('/delete', methods=['POST'])
@require_user
def delete():
    comment_id = require_field(g.payload, 'comment_id', int)
    if not comments.delete_comment(g.user, comment_id):
        return forbidden()
    return simple_success()
