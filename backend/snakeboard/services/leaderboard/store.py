"""Leaderboard persistence.

Two interchangeable backends share the :class:`ScoreStore` contract: a JSON
file holding the retained entries, and a single SQL table. Neither isolates
concurrent writers; the last write wins.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from .entries import MAX_RESULTS, MAX_STORED_SCORES, ScoreEntry, cap_limit, ranked
from .errors import StorageUnavailable, StoreNotConfigured

logger = logging.getLogger(__name__)


class ScoreStore(ABC):
    def __init__(self, max_entries: int = MAX_STORED_SCORES):
        self.max_entries = max_entries

    @abstractmethod
    def list(self, limit: int = MAX_RESULTS) -> List[ScoreEntry]:
        """Best entries first, at most ``min(limit, MAX_RESULTS)`` of them."""

    @abstractmethod
    def append(self, entry: ScoreEntry) -> List[ScoreEntry]:
        """Insert, keep the best ``max_entries`` and return the top MAX_RESULTS."""

    @abstractmethod
    def reset(self) -> None:
        """Drop every stored entry."""


class JsonFileScoreStore(ScoreStore):
    def __init__(self, path: str, max_entries: int = MAX_STORED_SCORES):
        super().__init__(max_entries)
        self.path = path

    def _read(self) -> List[ScoreEntry]:
        try:
            with open(self.path, encoding='utf-8') as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return []
        except ValueError as e:
            logger.warning(f"Ignoring unreadable scores file {self.path}: {e}")
            return []
        except OSError as e:
            raise StorageUnavailable(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, list):
            logger.warning(f"Ignoring scores file {self.path}: expected a JSON array")
            return []

        entries = []
        for item in data:
            try:
                entries.append(ScoreEntry.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Skipping malformed score entry in {self.path}: {item!r}")
        return entries

    def _write(self, entries: List[ScoreEntry]) -> None:
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as fh:
                json.dump([e.to_dict() for e in entries], fh, indent=2)
        except OSError as e:
            raise StorageUnavailable(f"Cannot write {self.path}: {e}") from e

    def list(self, limit: int = MAX_RESULTS) -> List[ScoreEntry]:
        return ranked(self._read())[:cap_limit(limit)]

    def append(self, entry: ScoreEntry) -> List[ScoreEntry]:
        entries = self._read()
        entries.append(entry)
        retained = ranked(entries)[:self.max_entries]
        self._write(retained)
        return retained[:MAX_RESULTS]

    def reset(self) -> None:
        self._write([])


class SqlScoreStore(ScoreStore):
    """Scores in the ``scores`` table; needs an active Flask app context."""

    def __init__(self, database, max_entries: int = MAX_STORED_SCORES):
        super().__init__(max_entries)
        from snakeboard.models import Score
        self.db = database
        self.model = Score
        self._schema_ready = False

    def ensure_schema(self) -> None:
        if self._schema_ready:
            return
        try:
            self.model.__table__.create(bind=self.db.engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"Cannot create scores table: {e}") from e
        self._schema_ready = True

    def list(self, limit: int = MAX_RESULTS) -> List[ScoreEntry]:
        self.ensure_schema()
        try:
            rows = self.model.ranked().limit(cap_limit(limit)).all()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StorageUnavailable(f"Cannot read scores: {e}") from e
        return [row.to_entry() for row in rows]

    def append(self, entry: ScoreEntry) -> List[ScoreEntry]:
        self.ensure_schema()
        Score = self.model
        try:
            self.db.session.add(Score.from_entry(entry))
            self.db.session.commit()

            stale_ids = [row.id for row in Score.ranked().with_entities(Score.id).offset(self.max_entries).all()]
            if stale_ids:
                Score.query.filter(Score.id.in_(stale_ids)).delete(synchronize_session=False)
                self.db.session.commit()
                logger.info(f"Trimmed {len(stale_ids)} scores beyond the top {self.max_entries}")
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StorageUnavailable(f"Cannot write score: {e}") from e
        return self.list(MAX_RESULTS)

    def reset(self) -> None:
        self.ensure_schema()
        try:
            self.model.query.delete()
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StorageUnavailable(f"Cannot clear scores: {e}") from e


def create_score_store(config, database) -> ScoreStore:
    """Build the store selected by ``SCORES_BACKEND`` ('file' or 'sql')."""
    backend = (config.get('SCORES_BACKEND') or 'file').lower()
    if backend == 'file':
        return JsonFileScoreStore(config['SCORES_FILE'])
    if backend == 'sql':
        if not config.get('DATABASE_URL'):
            raise StoreNotConfigured('DATABASE_URL is not set')
        return SqlScoreStore(database)
    raise StoreNotConfigured(f"Unknown SCORES_BACKEND {backend!r}")
