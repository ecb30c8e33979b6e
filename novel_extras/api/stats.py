from flask import Blueprint, request, jsonify

from novel_extras.api.common import MAX_PAGE_NAME_BYTES, BadRequest, forbidden
from novel_extras.services import chapters

bp = Blueprint('stats', __name__, url_prefix='/stats')


def _page():
    page = request.args.get('page', type=int)
    if page is None:
        raise BadRequest('page is required')
    return page


@bp.route('/count', methods=['POST'])
def count():
    """Record one visit. The raw body is the chapter path."""
    # Never buffer more than one byte past the limit.
    raw = request.stream.read(MAX_PAGE_NAME_BYTES + 1)
    try:
        relative_path = raw.decode('utf-8')
    except UnicodeDecodeError:
        return forbidden()

    if not chapters.record_visit(relative_path):
        return forbidden()
    return '<3', 200


@bp.route('/chapters/all', methods=['GET'])
def chapters_all():
    return jsonify(chapters.list_chapters(_page()))


@bp.route('/chapters/allRaw', methods=['GET'])
def chapters_all_raw():
    return jsonify(chapters.list_all_chapters())


@bp.route('/chapters/recent', methods=['GET'])
def chapters_recent():
    page = _page()
    try:
        time_frame = chapters.TimeFrame[request.args.get('time_frame', '')]
    except KeyError:
        raise BadRequest('time_frame must be one of HOUR, DAY, WEEK, MONTH, YEAR') from None
    return jsonify(chapters.list_recent_chapters(page, time_frame))
