"""Session glue: modes, turn gating and the two-step computer move."""

import pytest

from chainreaction_board import GRID_SIZE, PLAYER_A, PLAYER_B
from chainreaction_env_headless import PVC, PVP, ChainReactionHeadless
from chainreaction_scoring import Scores


def test_pvp_alternates_human_moves():
    env = ChainReactionHeadless(mode=PVP)
    assert env.handle_click(0, 0)
    assert env.state.current_player == PLAYER_B
    # Blue may not play on Red's cell
    assert not env.handle_click(0, 0)
    assert env.handle_click(4, 4)
    assert env.scores() == Scores(1, 1)


def test_pvp_has_no_computer_moves():
    env = ChainReactionHeadless(mode=PVP)
    with pytest.raises(ValueError):
        env.request_computer_move()


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        ChainReactionHeadless(mode='online')


def test_pvc_blocks_clicks_on_computer_turn():
    env = ChainReactionHeadless(mode=PVC)
    assert env.request_computer_move() is None
    assert env.handle_click(2, 2)
    assert not env.handle_click(1, 1)
    assert env.is_computer_turn()


def test_computer_move_is_applied_on_commit():
    env = ChainReactionHeadless(mode=PVC)
    env.handle_click(2, 2)
    pending = env.request_computer_move()
    assert pending is not None
    assert env.state.move_count == 1
    assert env.commit_computer_move(pending)
    assert env.state.move_count == 2
    assert env.state.current_player == PLAYER_A
    row, col = pending.move
    assert env.state.grid[row][col].owner == PLAYER_B


def test_stale_computer_move_is_discarded_after_reset():
    env = ChainReactionHeadless(mode=PVC)
    env.handle_click(2, 2)
    pending = env.request_computer_move()
    env.start_new_game()
    assert not env.commit_computer_move(pending)
    assert env.state.move_count == 0
    assert env.scores() == Scores(0, 0)


def test_computer_move_cannot_be_committed_twice():
    env = ChainReactionHeadless(mode=PVC)
    env.handle_click(2, 2)
    pending = env.request_computer_move()
    assert env.commit_computer_move(pending)
    assert not env.commit_computer_move(pending)


def test_observation_and_mask_follow_player_to_move():
    env = ChainReactionHeadless(mode=PVP)
    env.handle_click(0, 0)
    obs = env.get_state()
    assert obs.shape == (2, GRID_SIZE, GRID_SIZE)
    assert obs[1, 0, 0] == 1
    mask = env.valid_moves_mask()
    assert not mask[0]
    assert mask.sum() == GRID_SIZE * GRID_SIZE - 1


def test_finished_game_reports_winner():
    env = ChainReactionHeadless(mode=PVP)
    for row, col in ((0, 0), (0, 1), (0, 0)):
        env.handle_click(row, col)
    assert env.is_done()
    assert env.get_winner() == PLAYER_A
    assert not env.handle_click(2, 2)
    env.start_new_game(PVC)
    assert not env.is_done()
    assert env.mode == PVC
