from collections import namedtuple

from chainreaction_board import PLAYER_A, PLAYER_B

Scores = namedtuple('Scores', ['total_a', 'total_b'])


def count_atoms(grid):
    """Sum the atoms each player holds on the board."""
    total_a = 0
    total_b = 0
    for row in grid:
        for cell in row:
            if cell.owner == PLAYER_A:
                total_a += cell.count
            elif cell.owner == PLAYER_B:
                total_b += cell.count
    return Scores(total_a, total_b)


def check_win_condition(grid, move_count):
    """
    Return the winning player, or None while the game is still open.

    A player wins by elimination: the opponent holds no atoms while they hold
    some. Nothing is decided before both players have moved at least once,
    since the second player trivially has no atoms after the opening move.
    """
    if move_count < 2:
        return None

    scores = count_atoms(grid)
    if scores.total_a + scores.total_b == 0:
        return None
    if scores.total_a == 0 and scores.total_b > 0:
        return PLAYER_B
    if scores.total_b == 0 and scores.total_a > 0:
        return PLAYER_A
    return None
