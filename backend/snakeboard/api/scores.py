from flask import Blueprint, current_app, jsonify, request, url_for
from werkzeug.exceptions import MethodNotAllowed as HTTPMethodNotAllowed

from snakeboard.services.leaderboard import (
    InvalidPayload,
    LeaderboardError,
    MethodNotAllowed,
    get_leaderboard,
    submit_score,
)
from snakeboard.socketio_events import broadcast_leaderboard

scores = Blueprint('scores', __name__)

ALLOWED_METHODS = ('GET', 'POST')


def _store():
    return current_app.extensions.get('score_store')


@scores.errorhandler(LeaderboardError)
def handle_leaderboard_error(exc):
    if exc.status_code >= 500:
        current_app.logger.error(f"[scores] {request.method} failed: {exc.reason}")
    response = jsonify({'error': exc.message})
    response.status_code = exc.status_code
    if isinstance(exc, MethodNotAllowed):
        response.headers['Allow'] = ', '.join(ALLOWED_METHODS)
    return response


@scores.app_errorhandler(HTTPMethodNotAllowed)
def handle_unrouted_method(exc):
    # Routing rejects the method before the view runs
    if request.path == url_for('scores.scores_endpoint'):
        return handle_leaderboard_error(MethodNotAllowed(request.method))
    return exc


@scores.route('/scores', methods=list(ALLOWED_METHODS))
def scores_endpoint():
    if request.method in ('GET', 'HEAD'):
        entries = get_leaderboard(_store())
        return jsonify({'scores': [e.to_dict() for e in entries]})

    if request.method == 'POST':
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InvalidPayload('body is not a JSON object')
        entries = submit_score(_store(), data.get('name'), data.get('score'))
        payload = [e.to_dict() for e in entries]
        current_app.logger.info(f"[score-submit] leaderboard now holds {len(payload)} visible entries")
        broadcast_leaderboard(payload)
        return jsonify({'ok': True, 'scores': payload})
