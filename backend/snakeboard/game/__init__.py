"""
Snake game engine and the client-side session that drives it.

The engine is independent of Flask and storage; the session adds input
handling and leaderboard access on top of it.
"""

from .engine import (
    GRID_SIZE,
    TICK_MS,
    Direction,
    GameState,
    Position,
    create_initial_state,
    place_food,
    set_direction,
    status_text,
    step,
    toggle_pause,
)
from .client import LeaderboardClient, LeaderboardUnavailable, SubmissionRejected
from .session import GameSession

__all__ = [
    'GRID_SIZE', 'TICK_MS',
    'Direction', 'Position', 'GameState',
    'create_initial_state', 'place_food', 'set_direction', 'status_text', 'step', 'toggle_pause',
    'LeaderboardClient', 'LeaderboardUnavailable', 'SubmissionRejected',
    'GameSession',
]
