"""HTTP client for the leaderboard API."""

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://127.0.0.1:5000'


class LeaderboardUnavailable(Exception):
    """The leaderboard could not be reached or answered with a server error."""


class SubmissionRejected(Exception):
    """The server refused a submission (HTTP 400)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LeaderboardClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 5, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def scores_url(self) -> str:
        return f"{self.base_url}/api/scores"

    def fetch_scores(self) -> List[Dict[str, Any]]:
        return self._request('GET')

    def submit_score(self, name: str, score: int) -> List[Dict[str, Any]]:
        return self._request('POST', json={'name': name, 'score': score})

    def _request(self, method: str, **kwargs) -> List[Dict[str, Any]]:
        try:
            response = self.session.request(method, self.scores_url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning(f"Leaderboard request failed: {method} {self.scores_url}: {e}")
            raise LeaderboardUnavailable(str(e)) from e

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            payload = {}

        if response.status_code == 400:
            raise SubmissionRejected(payload.get('error') or 'Invalid payload')
        if not response.ok:
            raise LeaderboardUnavailable(payload.get('error') or f"HTTP {response.status_code}")

        scores = payload.get('scores')
        if not isinstance(scores, list):
            raise LeaderboardUnavailable('Malformed leaderboard response')
        return scores
