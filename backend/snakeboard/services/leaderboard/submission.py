import logging
import math
import numbers
import re
from datetime import datetime, timezone
from typing import List, Optional

from .entries import MAX_NAME_LENGTH, MAX_RESULTS, ScoreEntry
from .errors import InvalidPayload, NameRequired, StoreNotConfigured
from .store import ScoreStore

logger = logging.getLogger(__name__)

# Largest value the SQL integer column can hold
MAX_SCORE = 2 ** 31 - 1

_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')


def normalize_name(raw_name: str) -> str:
    """Control characters become spaces, then trim and cut to MAX_NAME_LENGTH."""
    return _CONTROL_CHARS.sub(' ', raw_name).strip()[:MAX_NAME_LENGTH]


def clamp_score(raw_score) -> int:
    return min(MAX_SCORE, max(0, math.floor(raw_score)))


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    # Integers are always finite and may be too large to convert to float
    return isinstance(value, int) or math.isfinite(value)


def _require(store: Optional[ScoreStore]) -> ScoreStore:
    if store is None:
        raise StoreNotConfigured('no leaderboard store configured')
    return store


def submit_score(store: Optional[ScoreStore], raw_name, raw_score, now: Optional[datetime] = None) -> List[ScoreEntry]:
    """Validate and record a submission, returning the ranked top view."""
    if not isinstance(raw_name, str) or not _is_number(raw_score):
        raise InvalidPayload(f"name={type(raw_name).__name__} score={type(raw_score).__name__}")

    name = normalize_name(raw_name)
    if not name:
        raise NameRequired()

    entry = ScoreEntry(
        name=name,
        score=clamp_score(raw_score),
        created_at=now or datetime.now(timezone.utc),
    )
    top = _require(store).append(entry)
    logger.info(f"Recorded score {entry.score} for {entry.name!r}")
    return top


def get_leaderboard(store: Optional[ScoreStore]) -> List[ScoreEntry]:
    return _require(store).list(MAX_RESULTS)
