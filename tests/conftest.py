import random

import pytest

from chainreaction_board import EMPTY_CELL, GRID_SIZE, Cell, get_valid_moves
from chainreaction_engine import apply_move, new_game


def make_grid(cells):
    """Build a grid from {(row, col): (owner, count)}; everything else empty."""
    return tuple(
        tuple(Cell(*cells[(r, c)]) if (r, c) in cells else EMPTY_CELL for c in range(GRID_SIZE))
        for r in range(GRID_SIZE)
    )


def random_playout(seed, max_moves=200):
    """Yield (before, after) state pairs from a game of random legal moves."""
    rng = random.Random(seed)
    state = new_game()
    while not state.game_over and state.move_count < max_moves:
        player = state.current_player
        row, col = rng.choice(get_valid_moves(state.grid, player))
        next_state = apply_move(state, row, col, player)
        yield state, next_state
        state = next_state


@pytest.fixture
def grid_factory():
    return make_grid


@pytest.fixture
def playout():
    return random_playout
