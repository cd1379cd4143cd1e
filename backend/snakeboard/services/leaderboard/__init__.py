"""Leaderboard domain services: validation, ranking and storage.

HTTP routes and socket handlers import from here; nothing in this package
knows about request objects or response formatting.
"""

from .entries import MAX_NAME_LENGTH, MAX_RESULTS, MAX_STORED_SCORES, ScoreEntry, ranked
from .errors import (
    InvalidPayload,
    LeaderboardError,
    MethodNotAllowed,
    NameRequired,
    StorageUnavailable,
    StoreNotConfigured,
)
from .store import JsonFileScoreStore, ScoreStore, SqlScoreStore, create_score_store
from .submission import clamp_score, get_leaderboard, normalize_name, submit_score
