"""Grid simulation for single-player snake.

Every function here is pure: a :class:`GameState` is never mutated, each
operation returns a new snapshot. Randomness only enters through the ``rng``
argument, so a game can be replayed from a seeded :class:`random.Random`.
"""

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import NamedTuple, Optional, Sequence, Tuple

GRID_SIZE = 20
TICK_MS = 120


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def is_opposite(self, other: 'Direction') -> bool:
        return self.dx + other.dx == 0 and self.dy + other.dy == 0

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional['Direction']:
        """Look up a direction by name ('up', 'Left', ...); None if unknown."""
        if not name:
            return None
        try:
            return cls[name.upper()]
        except KeyError:
            return None


class Position(NamedTuple):
    x: int
    y: int

    def moved(self, direction: Direction) -> 'Position':
        return Position(self.x + direction.dx, self.y + direction.dy)

    def within(self, grid_size: int) -> bool:
        return 0 <= self.x < grid_size and 0 <= self.y < grid_size


@dataclass(frozen=True)
class GameState:
    """
    A snapshot of one game.

    Attributes:
        snake: positions from head (index 0) to tail
        direction: direction applied on the last step
        pending_direction: direction the next step will apply
        food: food position, or None once the board is full
        score: food eaten so far
        alive: False once the snake hits a wall or itself
        paused: steps are no-ops while set
        death_reason: 'wall' or 'self' once dead
        grid_size: edge length of the square board
    """

    snake: Tuple[Position, ...]
    direction: Direction
    pending_direction: Direction
    food: Optional[Position]
    score: int = 0
    alive: bool = True
    paused: bool = False
    death_reason: Optional[str] = None
    grid_size: int = GRID_SIZE

    @property
    def head(self) -> Position:
        return self.snake[0]


def place_food(snake: Sequence[Position], rng=None, grid_size: int = GRID_SIZE) -> Optional[Position]:
    """Pick a uniformly random free cell, or None when the snake fills the board.

    ``rng`` only needs a ``randrange`` method; defaults to the ``random`` module.
    """
    rng = rng if rng is not None else random
    occupied = set(snake)
    free = [
        Position(x, y)
        for y in range(grid_size)
        for x in range(grid_size)
        if (x, y) not in occupied
    ]
    if not free:
        return None
    return free[rng.randrange(len(free))]


def create_initial_state(rng=None, grid_size: int = GRID_SIZE) -> GameState:
    if grid_size < 3:
        raise ValueError(f"grid_size must be at least 3, got {grid_size}")
    head_x = max(2, grid_size // 2 - 2)
    y = grid_size // 2
    snake = (Position(head_x, y), Position(head_x - 1, y), Position(head_x - 2, y))
    return GameState(
        snake=snake,
        direction=Direction.RIGHT,
        pending_direction=Direction.RIGHT,
        food=place_food(snake, rng, grid_size),
        grid_size=grid_size,
    )


def step(state: GameState, rng=None) -> GameState:
    """Advance the game by one tick."""
    if not state.alive or state.paused:
        return state

    direction = state.pending_direction
    next_head = state.head.moved(direction)
    ate = state.food is not None and next_head == state.food

    if not next_head.within(state.grid_size):
        return replace(state, alive=False, direction=direction, death_reason='wall')

    # The tail moves out of the way this tick unless the snake grows
    body = state.snake if ate else state.snake[:-1]
    if next_head in body:
        return replace(state, alive=False, direction=direction, death_reason='self')

    snake = (next_head,) + body
    food = place_food(snake, rng, state.grid_size) if ate else state.food
    return replace(
        state,
        snake=snake,
        direction=direction,
        food=food,
        score=state.score + 1 if ate else state.score,
    )


def set_direction(state: GameState, requested: Optional[Direction]) -> GameState:
    if requested is None or requested.is_opposite(state.direction):
        return state
    return replace(state, pending_direction=requested)


def toggle_pause(state: GameState) -> GameState:
    return replace(state, paused=not state.paused)


def status_text(state: GameState) -> str:
    if not state.alive:
        return 'Game Over'
    if state.paused:
        return 'Paused'
    return ''
