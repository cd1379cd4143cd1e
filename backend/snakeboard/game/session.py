"""Stateful controller a host (browser bridge, terminal, test) drives.

The session owns the current :class:`GameState`, maps raw key names onto the
engine's input operations and talks to the leaderboard. Leaderboard failures
only ever change ``message``; they never interrupt the game.
"""

import time
from typing import Any, Callable, Dict, List, Optional

from .client import LeaderboardClient, LeaderboardUnavailable, SubmissionRejected
from .engine import (
    GRID_SIZE,
    TICK_MS,
    Direction,
    GameState,
    create_initial_state,
    set_direction,
    status_text,
    step,
    toggle_pause,
)

KEY_BINDINGS = {
    'arrowup': Direction.UP,
    'w': Direction.UP,
    'arrowdown': Direction.DOWN,
    's': Direction.DOWN,
    'arrowleft': Direction.LEFT,
    'a': Direction.LEFT,
    'arrowright': Direction.RIGHT,
    'd': Direction.RIGHT,
}
PAUSE_KEY = ' '


class GameSession:
    def __init__(self, client: Optional[LeaderboardClient] = None, rng=None, grid_size: int = GRID_SIZE):
        self.client = client
        self.rng = rng
        self.grid_size = grid_size
        self.state: GameState = create_initial_state(rng, grid_size)
        self.scores: List[Dict[str, Any]] = []
        self.message = ''
        self.last_submitted_score: Optional[int] = None

    @property
    def status(self) -> str:
        return status_text(self.state)

    def start(self) -> GameState:
        self.state = create_initial_state(self.rng, self.grid_size)
        self.message = ''
        return self.state

    def tick(self) -> GameState:
        self.state = step(self.state, self.rng)
        return self.state

    def toggle_pause(self) -> GameState:
        self.state = toggle_pause(self.state)
        return self.state

    def steer(self, direction: Optional[Direction]) -> GameState:
        self.state = set_direction(self.state, direction)
        return self.state

    def press(self, name: str) -> GameState:
        """On-screen direction button ('up', 'down', 'left', 'right')."""
        return self.steer(Direction.from_name(name))

    def handle_key(self, key: str) -> bool:
        """Apply a keyboard key; returns True when the key was consumed."""
        key = key.lower()
        if key == PAUSE_KEY:
            self.toggle_pause()
            return True
        direction = KEY_BINDINGS.get(key)
        if direction is None:
            return False
        self.steer(direction)
        return True

    def refresh(self) -> bool:
        if self.client is None:
            self.message = 'Leaderboard unavailable'
            return False
        try:
            self.scores = self.client.fetch_scores()
        except LeaderboardUnavailable:
            self.message = 'Leaderboard unavailable'
            return False
        return True

    def submit(self, name: str) -> bool:
        score = self.state.score
        if score and score == self.last_submitted_score:
            self.message = 'Score already submitted'
            return False
        if self.client is None:
            self.message = 'Submit failed'
            return False
        try:
            self.scores = self.client.submit_score(name, score)
        except SubmissionRejected as e:
            self.message = e.message
            return False
        except LeaderboardUnavailable:
            self.message = 'Submit failed'
            return False
        self.last_submitted_score = score
        self.message = 'Score submitted'
        return True

    def run(
        self,
        on_tick: Optional[Callable[[GameState], None]] = None,
        max_ticks: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> GameState:
        """Tick every TICK_MS until the snake dies or ``max_ticks`` is reached."""
        ticks = 0
        while self.state.alive and (max_ticks is None or ticks < max_ticks):
            sleep(TICK_MS / 1000.0)
            self.tick()
            ticks += 1
            if on_tick is not None:
                on_tick(self.state)
        return self.state
