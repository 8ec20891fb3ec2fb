from typing import Dict, List, Sequence, Union, Any
import copy
import itertools
import random
import numpy as np
from scipy import stats
from .cards import Menu
from .simulation import make_rng, simulate
from .strategies import BasePlayer


def compute_statistics(data: np.ndarray) -> Dict[str, Union[float, int]]:
    """
    Compute summary statistics for a data array.

    Returns:
        Dictionary with mean, std, CI (95% confidence interval)
    """
    data = np.asarray(data, dtype=float)
    mean = np.mean(data)
    std = np.std(data, ddof=1)
    n = len(data)
    se = std / np.sqrt(n)
    ci_95 = stats.t.interval(0.95, n - 1, loc=mean, scale=se)

    return {
        "mean": mean,
        "std": std,
        "ci_95_lower": ci_95[0],
        "ci_95_upper": ci_95[1],
        "n": n
    }


def compare_players(scores_a: np.ndarray, scores_b: np.ndarray) -> Dict[str, Any]:
    """
    Compare two seats' per-game scores using a two-sample t-test.

    Returns:
        Dictionary with comparison statistics
    """
    test = stats.ttest_ind(scores_a, scores_b)
    stats_a = compute_statistics(scores_a)
    stats_b = compute_statistics(scores_b)
    return {
        "t_statistic": test.statistic,
        "p_value": test.pvalue,
        "a": stats_a,
        "b": stats_b,
        "difference": stats_a["mean"] - stats_b["mean"]
    }


def finishing_positions(scores: Sequence[int]) -> List[int]:
    """
    Dense rank of each seat (0 = best).

    Distinct totals are ranked from highest down; tied seats share a rank.
    """
    ranks = sorted(set(scores), reverse=True)
    rank_of = {points: rank for rank, points in enumerate(ranks)}
    return [rank_of[points] for points in scores]


def run_multiple_simulations(num_games: int, menu: Menu, players: Sequence[BasePlayer],
                             rng: Union[random.Random, int, None] = None,
                             score_desserts_each_round: bool = False) -> Dict[str, Any]:
    """
    Play num_games games with the same seating and aggregate the results.

    The run works on deep copies of the players, so strategy state never
    leaks back to the caller or into another run.

    Args:
        num_games: Number of games
        menu: Active menu
        players: One policy per seat
        rng: Generator or seed shared by all games of this run
        score_desserts_each_round: See simulate()

    Returns:
        Dictionary with per-game scores, mean scores and finishing positions
    """
    if num_games <= 0:
        raise ValueError("num_games must be positive")
    rng = make_rng(rng)
    players_count = len(players)
    scores = np.zeros((num_games, players_count), dtype=int)
    positions = np.zeros((players_count, players_count), dtype=int)

    run_players = [copy.deepcopy(p) for p in players]
    for game in range(num_games):
        points = simulate(menu, run_players, rng, score_desserts_each_round)
        scores[game] = points
        for seat, rank in enumerate(finishing_positions(points)):
            positions[seat][rank] += 1

    return {
        "scores": scores,
        "mean_scores": scores.mean(axis=0),
        "positions": positions,
        "player_names": [p.name for p in players],
        "num_games": num_games
    }


def run_multiple_combinations(num_games: int, menu: Menu, players: Sequence[BasePlayer],
                              rng: Union[random.Random, int, None] = None,
                              score_desserts_each_round: bool = False) -> List[Dict[str, Any]]:
    """
    Run every seating of players[1:] behind a fixed seat 0.

    Returns:
        One run_multiple_simulations result per seating
    """
    rng = make_rng(rng)
    first, rest = players[0], list(players[1:])
    results = []
    for arrangement in itertools.permutations(rest):
        seating = [first] + list(arrangement)
        results.append(run_multiple_simulations(num_games, menu, seating, rng, score_desserts_each_round))
    return results
