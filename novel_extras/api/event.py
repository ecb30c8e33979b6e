from flask import Blueprint, current_app, jsonify

from novel_extras.api import common
from novel_extras.api.common import json_payload, require_field, forbidden, simple_success
from novel_extras.middleware.auth import is_token, get_user
from novel_extras.services import votes

bp = Blueprint('event', __name__, url_prefix='/event')


def _active_event():
    key = current_app.config['ACTIVE_VOTE_EVENT']
    return current_app.config['VOTE_EVENTS'][key]


@bp.route('/voteWtcup', methods=['POST'])
def vote():
    """Rate a cup candidate 1-5, or clear the rating with 0."""
    data = json_payload()
    token = require_field(data, 'token')
    candidate_id = require_field(data, 'chapter_vote_id', int)
    rating = require_field(data, 'rating', int)

    event = _active_event()
    if (
        not event.is_open(common.current_timestamp())
        or not is_token(token)
        or not event.accepts(candidate_id)
        or not votes.is_rating(rating)
    ):
        return forbidden()

    user = get_user(token)
    if user is None or not votes.vote(event, user, candidate_id, rating):
        return forbidden()
    return simple_success()


@bp.route('/getWtcupVotes', methods=['POST'])
def get_votes():
    token = require_field(json_payload(), 'token')
    event = _active_event()
    if event.is_closed(common.current_timestamp()) or not is_token(token):
        return forbidden()

    user = get_user(token)
    if user is None:
        return jsonify([])
    return jsonify(votes.get_votes(event, user))
