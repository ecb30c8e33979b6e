from flask import Blueprint, request, jsonify

from novel_extras.api.common import (
    json_payload, require_field, optional_field, error_response,
)
from novel_extras.services import users

bp = Blueprint('user', __name__, url_prefix='/user')


@bp.route('/init', methods=['GET', 'POST'])
def init():
    """Profile summary plus the number of unseen mentions."""
    if request.method == 'GET':
        token = request.args.get('token', '')
    else:
        token = require_field(json_payload(), 'token')
    summary = users.init_session(token)
    if summary is None:
        return error_response()
    return jsonify({'success': True, **summary})


@bp.route('/register', methods=['POST'])
def register():
    data = json_payload()
    result = users.register(
        require_field(data, 'display_name'),
        optional_field(data, 'email'),
    )
    return result.to_response()


@bp.route('/updateProfile', methods=['POST'])
def update_profile():
    data = json_payload()
    result = users.update_profile(
        require_field(data, 'token'),
        require_field(data, 'display_name'),
        optional_field(data, 'email'),
    )
    return result.to_response()
