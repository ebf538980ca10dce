from collections import namedtuple

import numpy as np

# Board settings
GRID_SIZE = 5
CENTER = (2, 2)

# Owners
EMPTY = 0
PLAYER_A = 1  # Red, always moves first
PLAYER_B = 2  # Blue
PLAYERS = (PLAYER_A, PLAYER_B)
PLAYER_LETTERS = {
    PLAYER_A: 'R',
    PLAYER_B: 'B'
}


class EngineInvariantError(RuntimeError):
    """Raised when the engine detects corrupted game logic."""


Cell = namedtuple('Cell', ['owner', 'count'])
EMPTY_CELL = Cell(EMPTY, 0)


def empty_grid():
    """Return a fresh board with every cell empty."""
    return tuple(tuple(EMPTY_CELL for _ in range(GRID_SIZE)) for _ in range(GRID_SIZE))


def check_bounds(r, c):
    if not (0 <= r < GRID_SIZE and 0 <= c < GRID_SIZE):
        raise EngineInvariantError(f"Cell ({r}, {c}) is outside the {GRID_SIZE}x{GRID_SIZE} board")


def check_player(player):
    if player not in PLAYERS:
        raise EngineInvariantError(f"Unknown player: {player!r}")


def other_player(player):
    return PLAYER_B if player == PLAYER_A else PLAYER_A


def get_max_capacity(r, c):
    """Return the number of atoms at which a cell splits"""
    check_bounds(r, c)
    # One atom per orthogonal neighbor
    if (r in (0, GRID_SIZE-1)) and (c in (0, GRID_SIZE-1)):
        return 2
    if r in (0, GRID_SIZE-1) or c in (0, GRID_SIZE-1):
        return 3
    return 4


def get_adjacent(r, c):
    """Return list of orthogonally adjacent cell coordinates."""
    check_bounds(r, c)
    neighbors = []
    for dr, dc in ((-1,0),(1,0),(0,-1),(0,1)):  # up, down, left, right
        nr, nc = r+dr, c+dc
        if 0 <= nr < GRID_SIZE and 0 <= nc < GRID_SIZE:
            neighbors.append((nr,nc))
    return neighbors


# Most atoms the board can hold with every cell below capacity
MAX_STABLE_ATOMS = sum(
    get_max_capacity(r, c) - 1 for r in range(GRID_SIZE) for c in range(GRID_SIZE)
)
# Orthogonal links between cells. Fewer atoms than this always settle.
GRID_LINKS = sum(len(get_adjacent(r, c)) for r in range(GRID_SIZE) for c in range(GRID_SIZE)) // 2


def distance_from_center(r, c):
    return abs(r - CENTER[0]) + abs(c - CENTER[1])


def with_cell(grid, r, c, cell):
    """Return a copy of the grid with a single cell replaced."""
    check_bounds(r, c)
    row = grid[r][:c] + (cell,) + grid[r][c+1:]
    return grid[:r] + (row,) + grid[r+1:]


def is_valid_target(cell, player):
    # A player may only add to empty cells or cells they already own
    return cell.owner == EMPTY or cell.owner == player


def get_valid_moves(grid, player):
    """Return every (row, col) the player may place into, in row-major order."""
    valid_moves = []
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            if is_valid_target(grid[r][c], player):
                valid_moves.append((r, c))
    return valid_moves


def total_atoms(grid):
    return sum(cell.count for row in grid for cell in row)


def grid_to_array(grid, player):
    """Return observation of shape (2, GRID_SIZE, GRID_SIZE).
    Channel 0 contains the given player's atoms, channel 1 the opponent's."""
    check_player(player)
    obs = np.zeros((2, GRID_SIZE, GRID_SIZE), dtype=np.int32)
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            cell = grid[r][c]
            if cell.owner != EMPTY:
                channel = 0 if cell.owner == player else 1
                obs[channel, r, c] = cell.count
    return obs


def valid_moves_mask(grid, player):
    """Return a flat boolean mask of valid moves for the player."""
    obs = grid_to_array(grid, player)
    my_atoms, opp_atoms = obs[0], obs[1]
    # Valid if the cell is empty or holds my atoms
    return ((my_atoms + opp_atoms == 0) | (my_atoms > 0)).flatten()


def format_grid(grid):
    """Render the board as text, one row per line."""
    lines = []
    for row in grid:
        tokens = []
        for cell in row:
            if cell.owner == EMPTY:
                tokens.append(' .')
            else:
                tokens.append(f"{PLAYER_LETTERS[cell.owner]}{cell.count}")
        lines.append(' '.join(tokens))
    return '\n'.join(lines)
