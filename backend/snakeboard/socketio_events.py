from flask import current_app
from flask_socketio import emit, join_room, leave_room

from snakeboard import socketio
from snakeboard.services.leaderboard import LeaderboardError, get_leaderboard

LEADERBOARD_ROOM = 'leaderboard'
NAMESPACE = '/ws'


def broadcast_leaderboard(scores) -> None:
    """Push an already serialized leaderboard view to every subscriber."""
    socketio.emit('leaderboard_update', {'scores': scores}, to=LEADERBOARD_ROOM, namespace=NAMESPACE)


def handle_connect():
    emit('connected', {'message': f'Connected to {NAMESPACE}'})


def handle_join_leaderboard(data=None):
    join_room(LEADERBOARD_ROOM)
    emit('joined', {'room': LEADERBOARD_ROOM})
    try:
        entries = get_leaderboard(current_app.extensions.get('score_store'))
    except LeaderboardError as exc:
        current_app.logger.warning(f"[ws-join] leaderboard unavailable: {exc.reason}")
        emit('error', {'message': exc.message})
        return
    emit('leaderboard_update', {'scores': [e.to_dict() for e in entries]})


def handle_leave_leaderboard(data=None):
    leave_room(LEADERBOARD_ROOM)
    emit('left', {'room': LEADERBOARD_ROOM})


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on the '/ws' namespace."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('join_leaderboard', handle_join_leaderboard, namespace=NAMESPACE)
    socketio.on_event('leave_leaderboard', handle_leave_leaderboard, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)
