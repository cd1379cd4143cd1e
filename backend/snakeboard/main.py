from flask import Blueprint, jsonify

from snakeboard.game import GRID_SIZE, TICK_MS
from snakeboard.services.leaderboard import MAX_RESULTS

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({
        'message': 'Welcome to the Snake leaderboard server!',
        'grid_size': GRID_SIZE,
        'tick_ms': TICK_MS,
        'max_results': MAX_RESULTS,
    })
