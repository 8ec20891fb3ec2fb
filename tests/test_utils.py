"""Tests for sushi_sim.utils module."""

import numpy as np
import pytest
from sushi_sim.cards import MENUS
from sushi_sim.players import RandomPlayer
from sushi_sim.strategies import best_nigiri, nigiri_master, wasabi_best_nigiri
from sushi_sim.utils import (
    compare_players,
    compute_statistics,
    finishing_positions,
    run_multiple_combinations,
    run_multiple_simulations,
)

MENU = MENUS["my_first_meal"]


def make_table():
    return [RandomPlayer(seed=1), best_nigiri(seed=2), wasabi_best_nigiri(seed=3), nigiri_master(seed=4)]


def test_finishing_positions_dense_rank():
    assert finishing_positions([10, 5, 10, 3]) == [0, 1, 0, 2]
    assert finishing_positions([7, 7]) == [0, 0]
    assert finishing_positions([1, 2, 3]) == [2, 1, 0]


def test_compute_statistics():
    data = np.array([1, 2, 3, 4, 5])
    result = compute_statistics(data)
    assert result["mean"] == pytest.approx(3.0)
    assert result["std"] == pytest.approx(np.std(data, ddof=1))
    assert result["n"] == 5
    assert result["ci_95_lower"] < 3.0 < result["ci_95_upper"]


def test_compare_players_identical_samples():
    scores = np.array([30, 42, 35, 28, 40])
    result = compare_players(scores, scores.copy())
    assert result["difference"] == pytest.approx(0.0)
    assert result["p_value"] == pytest.approx(1.0)


def test_run_multiple_simulations_shapes():
    results = run_multiple_simulations(20, MENU, make_table(), rng=2024)
    assert results["scores"].shape == (20, 4)
    assert results["mean_scores"].shape == (4,)
    assert results["positions"].shape == (4, 4)
    assert results["num_games"] == 20
    assert results["player_names"] == ["RANDOM", "BEST_NIGIRI", "WASABI_BEST_NIGIRI", "NIGIRI_MASTER"]
    # every seat gets exactly one finishing position per game
    assert all(row.sum() == 20 for row in results["positions"])


def test_run_multiple_simulations_is_reproducible():
    first = run_multiple_simulations(10, MENU, make_table(), rng=99)
    second = run_multiple_simulations(10, MENU, make_table(), rng=99)
    np.testing.assert_array_equal(first["scores"], second["scores"])


def test_run_multiple_simulations_does_not_touch_caller_players():
    table = make_table()
    run_multiple_simulations(5, MENU, table, rng=1)
    again = run_multiple_simulations(5, MENU, table, rng=1)
    fresh = run_multiple_simulations(5, MENU, make_table(), rng=1)
    np.testing.assert_array_equal(again["scores"], fresh["scores"])


@pytest.mark.parametrize("num_games", [0, -3])
def test_run_multiple_simulations_requires_games(num_games):
    with pytest.raises(ValueError):
        run_multiple_simulations(num_games, MENU, make_table())


def test_run_multiple_combinations_keeps_first_seat():
    table = make_table()
    results = run_multiple_combinations(3, MENU, table, rng=5)
    # 3! seatings of the three other players
    assert len(results) == 6
    assert all(r["player_names"][0] == "RANDOM" for r in results)
    assert len({tuple(r["player_names"]) for r in results}) == 6
