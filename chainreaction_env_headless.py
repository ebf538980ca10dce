import logging
from collections import namedtuple

from chainreaction_board import PLAYER_A, PLAYER_B, grid_to_array, valid_moves_mask
from chainreaction_engine import apply_move, new_game
from policy_opponents import HeuristicPolicy

logger = logging.getLogger(__name__)

# Game modes
PVP = 'pvp'  # player vs player
PVC = 'pvc'  # player vs computer
GAME_MODES = (PVP, PVC)

HUMAN_PLAYER = PLAYER_A
COMPUTER_PLAYER = PLAYER_B

# A computer move chosen for a specific game and position. It is only applied
# if the session is still at that exact point when the caller commits it.
PendingMove = namedtuple('PendingMove', ['game_id', 'move_count', 'move'])


class ChainReactionHeadless:
    """
    Headless Chain Reaction session.

    Holds the one authoritative GameState of the running game and routes both
    human clicks and computer moves through apply_move. Computer turns are a
    two-step protocol: request_computer_move() picks a move, the caller waits
    however long it likes, then commit_computer_move() applies it. A reset or
    any other move in between makes the pending move stale and it is dropped.
    """

    def __init__(self, mode=PVC, policy=None):
        self.policy = policy or HeuristicPolicy()
        self.mode = None
        self.state = None
        self.game_id = 0
        self.start_new_game(mode)

    def start_new_game(self, mode=None):
        """
        Start a new game.
        Args:
            mode: PVP or PVC (default: None to reuse the current mode)
        """
        if mode is not None:
            if mode not in GAME_MODES:
                raise ValueError(f"Unknown game mode: {mode}")
            self.mode = mode
        self.state = new_game()
        self.game_id += 1
        return self.state

    def is_computer_turn(self):
        return (
            self.mode == PVC
            and not self.state.game_over
            and self.state.current_player == COMPUTER_PLAYER
        )

    def handle_click(self, row, col):
        """Apply a human placement. Returns True if the board changed."""
        if self.mode == PVC and self.state.current_player != HUMAN_PLAYER:
            return False
        next_state = apply_move(self.state, row, col, self.state.current_player)
        if next_state is None:
            return False
        self.state = next_state
        return True

    def request_computer_move(self):
        """Choose the computer's move without applying it."""
        if self.mode != PVC:
            raise ValueError("Computer moves are only available in player vs computer mode")
        if not self.is_computer_turn():
            return None
        move = self.policy.get_move(self.state.grid, COMPUTER_PLAYER)
        return PendingMove(self.game_id, self.state.move_count, move)

    def commit_computer_move(self, pending):
        """Apply a previously requested move. Returns True if it was applied."""
        if pending.game_id != self.game_id or pending.move_count != self.state.move_count:
            logger.info("Discarding stale computer move %s", pending.move)
            return False
        if pending.move is None or not self.is_computer_turn():
            return False
        row, col = pending.move
        next_state = apply_move(self.state, row, col, COMPUTER_PLAYER)
        if next_state is None:
            return False
        self.state = next_state
        return True

    def scores(self):
        return self.state.scores

    def get_state(self):
        """Return observation for the player to move (channel 0 is theirs)."""
        return grid_to_array(self.state.grid, self.state.current_player)

    def valid_moves_mask(self):
        """Return a boolean mask for valid moves."""
        return valid_moves_mask(self.state.grid, self.state.current_player)

    def is_done(self):
        """Check if game is finished."""
        return self.state.game_over

    def get_winner(self):
        """Get winner of the game (None if ongoing)."""
        return self.state.winner
