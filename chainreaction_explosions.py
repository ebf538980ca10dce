import logging

from chainreaction_board import (
    EMPTY,
    GRID_SIZE,
    Cell,
    MAX_STABLE_ATOMS,
    EngineInvariantError,
    check_player,
    get_adjacent,
    get_max_capacity,
    other_player,
    total_atoms,
)

logger = logging.getLogger(__name__)

# Upper bound on explosion rounds for a single move. A board with few atoms
# settles well before this.
MAX_EXPLOSION_ROUNDS = 500


class ExplosionLimitExceeded(EngineInvariantError):
    """Raised when a chain reaction does not settle within the round cap."""


def find_unstable_cells(grid):
    """Return the cells holding at least their capacity, in row-major order."""
    unstable = []
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            if grid[r][c].count >= get_max_capacity(r, c):
                unstable.append((r, c))
    return unstable


def explode_round(grid, unstable, player):
    """
    Split every unstable cell at once and return the next grid.

    Each exploding cell sheds one atom per neighbor (exactly its capacity) and
    keeps any surplus. Every cell that receives an atom is taken over by the
    player who made the move, regardless of who owned it before.
    """
    counts = [[cell.count for cell in row] for row in grid]
    owners = [[cell.owner for cell in row] for row in grid]

    for r, c in unstable:
        counts[r][c] -= get_max_capacity(r, c)
        if counts[r][c] == 0:
            owners[r][c] = EMPTY
    # Incoming atoms are applied after all cells have shed theirs, so the
    # order of the unstable list never changes the result.
    for r, c in unstable:
        for nr, nc in get_adjacent(r, c):
            counts[nr][nc] += 1
            owners[nr][nc] = player

    return tuple(
        tuple(Cell(owners[r][c], counts[r][c]) for c in range(GRID_SIZE))
        for r in range(GRID_SIZE)
    )


def _is_eliminated(grid, player):
    return not any(cell.owner == player for row in grid for cell in row)


def process_splits(grid, player, max_rounds=MAX_EXPLOSION_ROUNDS, stop_on_elimination=False):
    """
    Process chain reactions until no cell holds its capacity.

    Args:
        grid: board right after the placement
        player: the player who placed; every captured cell becomes theirs
        max_rounds: round cap; exceeding it raises ExplosionLimitExceeded
        stop_on_elimination: once the opponent holds no cells the game is
            decided. Keep resolving, but give up quietly instead of raising
            if the board can never settle (more than MAX_STABLE_ATOMS atoms)
            or the round cap is hit.
    Returns:
        The resolved grid.
    """
    check_player(player)
    opponent = other_player(player)
    rounds = 0
    while True:
        unstable = find_unstable_cells(grid)
        if not unstable:
            break
        decided = stop_on_elimination and _is_eliminated(grid, opponent)
        if decided and total_atoms(grid) > MAX_STABLE_ATOMS:
            logger.debug("Board holds %d atoms and cannot settle, stopping cascade", total_atoms(grid))
            break
        if rounds >= max_rounds:
            if decided:
                logger.warning("Opponent %s eliminated, cascade still running after %d rounds", opponent, rounds)
                break
            raise ExplosionLimitExceeded(
                f"Chain reaction still running after {max_rounds} rounds "
                f"({len(unstable)} unstable cells)"
            )
        grid = explode_round(grid, unstable, player)
        rounds += 1

    if rounds:
        logger.debug("Chain reaction by player %s resolved in %d rounds", player, rounds)
    return grid
