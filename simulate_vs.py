import random

from chainreaction_board import PLAYER_A, PLAYER_B
from chainreaction_engine import apply_move, new_game
from policy_opponents import HeuristicPolicy


def play_game(policy_a, policy_b, max_moves=500):
    """
    Play one game between two policies.
    Returns:
        (winner, moves): winner is None if the move cap was reached first
    """
    policies = {PLAYER_A: policy_a, PLAYER_B: policy_b}
    state = new_game()
    while not state.game_over and state.move_count < max_moves:
        player = state.current_player
        move = policies[player].get_move(state.grid, player)
        if move is None:
            break
        next_state = apply_move(state, move[0], move[1], player)
        if next_state is None:
            raise ValueError(f"Policy for player {player} chose illegal move {move}")
        state = next_state
    return state.winner, state.move_count


def run_series(games=100, seed=0, max_moves=500):
    """Play heuristic against heuristic and return win counts."""
    rng = random.Random(seed)
    policy_a = HeuristicPolicy(rng=rng)
    policy_b = HeuristicPolicy(rng=rng)
    results = {PLAYER_A: 0, PLAYER_B: 0, None: 0}
    total_moves = 0
    for _ in range(games):
        winner, moves = play_game(policy_a, policy_b, max_moves=max_moves)
        results[winner] += 1
        total_moves += moves
    return results, total_moves


if __name__ == "__main__":
    games = 500
    results, total_moves = run_series(games=games)
    print(f"Red win rate: {results[PLAYER_A]/games}")
    print(f"Blue win rate: {results[PLAYER_B]/games}")
    print(f"Unfinished: {results[None]}")
    print(f"Average game length: {total_moves/games:.1f} moves")
