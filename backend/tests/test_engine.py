"""
Tests for the grid simulation: stepping, steering, pausing and food placement.
"""

import random
from dataclasses import replace
from unittest.mock import Mock

import pytest

from snakeboard.game import (
    GRID_SIZE,
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


def make_state(snake, direction=Direction.RIGHT, food=None, pending_direction=None, **kwargs):
    return GameState(
        snake=tuple(Position(*p) for p in snake),
        direction=direction,
        pending_direction=pending_direction or direction,
        food=Position(*food) if food else None,
        **kwargs,
    )


class TestInitialState:

    def test_default_layout(self):
        state = create_initial_state(random.Random(1))
        assert state.snake == (Position(8, 10), Position(7, 10), Position(6, 10))
        assert state.direction is Direction.RIGHT
        assert state.pending_direction is Direction.RIGHT
        assert state.score == 0
        assert state.alive is True
        assert state.paused is False
        assert state.grid_size == GRID_SIZE

    def test_food_is_off_the_snake(self):
        state = create_initial_state(random.Random(7))
        assert state.food is not None
        assert state.food not in state.snake

    def test_same_seed_same_food(self):
        assert create_initial_state(random.Random(3)).food == create_initial_state(random.Random(3)).food

    def test_small_board_fits(self):
        state = create_initial_state(random.Random(0), grid_size=3)
        assert all(p.within(3) for p in state.snake)

    def test_rejects_tiny_board(self):
        with pytest.raises(ValueError):
            create_initial_state(grid_size=2)


class TestStep:

    def test_moves_one_cell_without_growing(self):
        state = make_state([(5, 5), (4, 5), (3, 5)], food=(0, 0))
        nxt = step(state)
        assert nxt.snake == (Position(6, 5), Position(5, 5), Position(4, 5))
        assert nxt.score == 0
        assert nxt.food == Position(0, 0)
        assert nxt.alive is True

    def test_applies_pending_direction(self):
        state = make_state([(5, 5), (4, 5)], pending_direction=Direction.UP)
        nxt = step(state)
        assert nxt.head == Position(5, 4)
        assert nxt.direction is Direction.UP

    def test_eating_grows_and_scores(self):
        rng = Mock()
        rng.randrange.return_value = 0
        state = make_state([(5, 5), (4, 5), (3, 5)], food=(6, 5))
        nxt = step(state, rng)
        assert nxt.snake == (Position(6, 5), Position(5, 5), Position(4, 5), Position(3, 5))
        assert nxt.score == 1
        # First free cell in row-major order
        assert nxt.food == Position(0, 0)
        assert nxt.food not in nxt.snake

    def test_wall_collision_top_left_corner(self):
        state = make_state([(0, 0), (1, 0), (2, 0)], direction=Direction.LEFT, food=(5, 5), score=3)
        state = replace(state, pending_direction=Direction.UP)
        nxt = step(state)
        assert nxt.alive is False
        assert nxt.death_reason == 'wall'
        assert nxt.snake == state.snake
        assert nxt.food == state.food
        assert nxt.score == 3
        assert nxt.direction is Direction.UP

    @pytest.mark.parametrize('head,direction', [
        ((19, 5), Direction.RIGHT),
        ((5, 19), Direction.DOWN),
        ((0, 5), Direction.LEFT),
    ])
    def test_every_wall_kills(self, head, direction):
        state = make_state([head], direction=direction)
        assert step(state).alive is False

    def test_self_collision(self):
        # Head turns down into its own body
        snake = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
        state = make_state(snake, direction=Direction.LEFT, pending_direction=Direction.DOWN)
        nxt = step(state)
        assert nxt.alive is False
        assert nxt.death_reason == 'self'
        assert nxt.snake == state.snake

    def test_moving_into_vacated_tail_is_legal(self):
        # A 2x2 loop: the head enters the cell the tail leaves this tick
        snake = [(5, 5), (6, 5), (6, 6), (5, 6)]
        state = make_state(snake, direction=Direction.LEFT, pending_direction=Direction.DOWN)
        nxt = step(state)
        assert nxt.alive is True
        assert nxt.snake == (Position(5, 6), Position(5, 5), Position(6, 5), Position(6, 6))

    def test_tail_cell_is_blocked_when_eating(self):
        snake = [(5, 5), (6, 5), (6, 6), (5, 6)]
        state = make_state(snake, direction=Direction.LEFT, pending_direction=Direction.DOWN, food=(5, 6))
        nxt = step(state)
        assert nxt.alive is False
        assert nxt.death_reason == 'self'

    def test_paused_state_is_returned_unchanged(self):
        state = make_state([(5, 5), (4, 5)], paused=True)
        assert step(state) is state

    def test_dead_state_is_returned_unchanged(self):
        state = make_state([(5, 5), (4, 5)], alive=False)
        assert step(state) is state

    def test_filling_the_board_removes_food(self):
        # 3x3 board: the snake covers every cell except the food at (2, 2)
        snake = [(2, 1), (2, 0), (1, 0), (0, 0), (0, 1), (1, 1), (1, 2), (0, 2)]
        state = make_state(snake, direction=Direction.DOWN, food=(2, 2), grid_size=3)
        nxt = step(state)
        assert nxt.alive is True
        assert len(nxt.snake) == 9
        assert nxt.food is None
        assert nxt.score == 1

    def test_random_play_never_self_intersects(self):
        rng = random.Random(42)
        state = create_initial_state(rng)
        directions = list(Direction)
        for _ in range(2000):
            if not state.alive:
                state = create_initial_state(rng)
            state = set_direction(state, rng.choice(directions))
            state = step(state, rng)
            if state.alive:
                assert len(set(state.snake)) == len(state.snake)
                if state.food is not None:
                    assert state.food not in state.snake


class TestSetDirection:

    def test_accepts_turn(self):
        state = make_state([(5, 5), (4, 5)])
        assert set_direction(state, Direction.UP).pending_direction is Direction.UP

    def test_rejects_reverse(self):
        state = make_state([(5, 5), (4, 5)])
        assert set_direction(state, Direction.LEFT) is state

    def test_rejects_reverse_of_applied_direction_not_pending(self):
        state = make_state([(5, 5), (4, 5)], pending_direction=Direction.UP)
        assert set_direction(state, Direction.LEFT) is state
        assert set_direction(state, Direction.DOWN).pending_direction is Direction.DOWN

    def test_ignores_missing_direction(self):
        state = make_state([(5, 5)])
        assert set_direction(state, None) is state

    def test_applies_while_paused(self):
        state = make_state([(5, 5), (4, 5)], paused=True)
        assert set_direction(state, Direction.DOWN).pending_direction is Direction.DOWN

    def test_direction_lookup_by_name(self):
        assert Direction.from_name('up') is Direction.UP
        assert Direction.from_name('Right') is Direction.RIGHT
        assert Direction.from_name('sideways') is None
        assert Direction.from_name(None) is None


class TestPauseAndStatus:

    def test_toggle_pause(self):
        state = make_state([(5, 5)])
        paused = toggle_pause(state)
        assert paused.paused is True
        assert toggle_pause(paused).paused is False

    def test_status_text(self):
        state = make_state([(5, 5)])
        assert status_text(state) == ''
        assert status_text(replace(state, paused=True)) == 'Paused'
        assert status_text(replace(state, alive=False, paused=True)) == 'Game Over'


class TestPlaceFood:

    def test_never_on_snake(self):
        rng = random.Random(5)
        snake = [Position(x, 0) for x in range(GRID_SIZE)]
        for _ in range(200):
            assert place_food(snake, rng) not in snake

    def test_none_when_board_full(self):
        snake = [Position(x, y) for y in range(3) for x in range(3)]
        assert place_food(snake, random.Random(0), grid_size=3) is None

    def test_only_free_cell_is_chosen(self):
        snake = [Position(x, y) for y in range(3) for x in range(3) if (x, y) != (1, 2)]
        assert place_food(snake, random.Random(0), grid_size=3) == Position(1, 2)

    def test_uses_supplied_random_source(self):
        rng = Mock()
        rng.randrange.return_value = 2
        assert place_food([Position(0, 0)], rng, grid_size=2) == Position(1, 1)
        rng.randrange.assert_called_once_with(3)
