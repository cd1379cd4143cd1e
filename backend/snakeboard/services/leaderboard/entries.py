from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

MAX_NAME_LENGTH = 24
MAX_RESULTS = 50
MAX_STORED_SCORES = 200


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything we write is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2025-01-02T03:04:05.678Z."""
    return as_utc(value).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"Expected an ISO-8601 string, got {value!r}")
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return as_utc(datetime.fromisoformat(value))


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    score: int
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'score': self.score,
            'createdAt': format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScoreEntry':
        """Rebuild an entry from its JSON form; raises KeyError/TypeError/ValueError when malformed."""
        name = data['name']
        score = data['score']
        if not isinstance(name, str) or isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise TypeError(f"Malformed score entry: {data!r}")
        return cls(name=name, score=score, created_at=parse_timestamp(data['createdAt']))


def rank_key(entry: ScoreEntry):
    return (-entry.score, as_utc(entry.created_at))


def ranked(entries: Iterable[ScoreEntry]) -> List[ScoreEntry]:
    """Sort by score descending, then oldest first; the sort is stable for exact ties."""
    return sorted(entries, key=rank_key)


def cap_limit(limit: int) -> int:
    return max(0, min(int(limit), MAX_RESULTS))
