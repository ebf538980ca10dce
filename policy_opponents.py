import random

from chainreaction_board import (
    check_player,
    distance_from_center,
    get_adjacent,
    get_max_capacity,
    get_valid_moves,
    other_player,
)

_default_rng = random.Random()  # For any default random operations

# Heuristic weights
EXPLOSION_BONUS = 100  # placing here makes the cell split
CAPTURE_BONUS = 20     # per opponent cell next to a splitting cell
PRIMED_PENALTY = 30    # cell left one atom short of splitting
CENTER_WEIGHT = 5      # per step closer to the center
REINFORCE_BONUS = 15   # cell already ours
DEFENSIVE_BONUS = 25   # next to an opponent cell that is about to split
TOP_CHOICES = 3        # pick uniformly among this many best moves


class PolicyOpponent:
    """Base class for policy-based opponents in Chain Reaction."""
    def __init__(self, rng=None):
        self.rng = rng or _default_rng  # Use default RNG unless overridden

    def get_move(self, grid, player):
        """
        Get the next move based on the policy.
        Args:
            grid: The current game grid of Cell(owner, count) rows. Read only.
            player: The player for whom to make the move
        Returns:
            tuple: (row, col) coordinates for the next move, or None when
            the player has no legal move
        """
        raise NotImplementedError("Subclasses must implement get_move")


class HeuristicPolicy(PolicyOpponent):
    """
    Scores every legal move and plays one of the best few:
    1. Moves that make the cell split score high, more so next to opponent cells.
    2. Moves that leave the cell one atom short of splitting are penalized.
    3. Cells nearer the center are preferred.
    4. Reinforcing an owned cell earns a bonus.
    5. Cells next to an opponent cell that is about to split earn a bonus.
    The final pick is random among the TOP_CHOICES highest scores so play
    does not become predictable.
    """

    def score_move(self, grid, player, r, c):
        """Return the heuristic score for placing at (r, c)."""
        cell = grid[r][c]
        opponent = other_player(player)
        capacity = get_max_capacity(r, c)
        adjacent = get_adjacent(r, c)
        score = 0

        if cell.count + 1 >= capacity:
            score += EXPLOSION_BONUS
            enemy_cells = sum(1 for nr, nc in adjacent if grid[nr][nc].owner == opponent)
            score += enemy_cells * CAPTURE_BONUS

        if cell.count + 2 >= capacity:
            score -= PRIMED_PENALTY

        score += (4 - distance_from_center(r, c)) * CENTER_WEIGHT

        if cell.owner == player:
            score += REINFORCE_BONUS

        # Only opponent threats count here, not our own primed neighbors
        for nr, nc in adjacent:
            neighbor = grid[nr][nc]
            if neighbor.owner == opponent and neighbor.count + 1 >= get_max_capacity(nr, nc):
                score += DEFENSIVE_BONUS
                break

        return score

    def score_moves(self, grid, player):
        """Return [(score, (r, c))] for every legal move, best first."""
        scored = [(self.score_move(grid, player, r, c), (r, c)) for r, c in get_valid_moves(grid, player)]
        # Stable sort keeps row-major order among equal scores
        scored.sort(key=lambda x: x[0], reverse=True)
        return scored

    def get_move(self, grid, player):
        check_player(player)
        scored = self.score_moves(grid, player)
        if not scored:
            return None
        top_moves = [move for _, move in scored[:TOP_CHOICES]]
        return self.rng.choice(top_moves)


def choose_move(grid, player, rng=None):
    """Pick a move for the automated player, or None if it has no legal move."""
    return HeuristicPolicy(rng=rng).get_move(grid, player)
