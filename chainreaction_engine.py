"""
Move application for Chain Reaction.

A GameState is an immutable snapshot. apply_move is the only way to advance a
game: it validates the placement, resolves chain reactions, rescores the board,
checks for a winner and hands the turn over, returning a brand new state. The
input state is never touched, so a rejected move leaves nothing to undo.
"""
import logging
from collections import namedtuple

from chainreaction_board import (
    PLAYER_A,
    Cell,
    check_bounds,
    check_player,
    empty_grid,
    is_valid_target,
    other_player,
    with_cell,
)
from chainreaction_explosions import process_splits
from chainreaction_scoring import Scores, check_win_condition, count_atoms

logger = logging.getLogger(__name__)

# Rejection reasons
REJECT_GAME_OVER = 'game_over'
REJECT_OUT_OF_TURN = 'out_of_turn'
REJECT_OCCUPIED = 'occupied_by_opponent'

GameState = namedtuple(
    'GameState',
    ['grid', 'current_player', 'move_count', 'game_over', 'winner', 'scores']
)


def new_game():
    """Return the state of a fresh game: empty board, Red to move."""
    return GameState(
        grid=empty_grid(),
        current_player=PLAYER_A,
        move_count=0,
        game_over=False,
        winner=None,
        scores=Scores(0, 0)
    )


def rejection_reason(state, row, col, player):
    """Return why the move would be rejected, or None if it is legal."""
    check_bounds(row, col)
    check_player(player)
    if state.game_over:
        return REJECT_GAME_OVER
    if player != state.current_player:
        return REJECT_OUT_OF_TURN
    if not is_valid_target(state.grid[row][col], player):
        return REJECT_OCCUPIED
    return None


def apply_move(state, row, col, player):
    """
    Place an atom for `player` at (row, col) and return the resulting state.

    Returns None when the move is rejected (game over, out of turn, or the
    cell belongs to the opponent); the caller should simply ignore the input.
    """
    reason = rejection_reason(state, row, col, player)
    if reason is not None:
        logger.debug("Rejected move (%d, %d) by player %s: %s", row, col, player, reason)
        return None

    cell = state.grid[row][col]
    grid = with_cell(state.grid, row, col, Cell(player, cell.count + 1))
    move_count = state.move_count + 1
    # Once both sides have moved, a wiped-out opponent ends the game even if
    # the board can no longer settle.
    grid = process_splits(grid, player, stop_on_elimination=move_count >= 2)

    scores = count_atoms(grid)
    winner = check_win_condition(grid, move_count)
    if winner is not None:
        logger.info("Player %s wins after %d moves (%d-%d)", winner, move_count, scores.total_a, scores.total_b)
        return state._replace(
            grid=grid,
            move_count=move_count,
            game_over=True,
            winner=winner,
            scores=scores
        )

    return state._replace(
        grid=grid,
        current_player=other_player(player),
        move_count=move_count,
        scores=scores
    )
