"""Tests for the experiment report helpers."""

import numpy as np
import pytest
from experiments.run_experiment_1 import summarize_by_player
from sushi_sim.cards import MENUS
from sushi_sim.players import build_players, label_players
from sushi_sim.utils import run_multiple_combinations


def make_result(names, scores):
    scores = np.array(scores)
    players = len(names)
    return {
        "player_names": names,
        "scores": scores,
        "positions": np.ones((players, players), dtype=int),
    }


def test_summarize_pools_by_label_across_seatings():
    results = [
        make_result(["A", "B"], [[1, 2], [3, 4]]),
        make_result(["B", "A"], [[5, 6], [7, 8]]),
    ]
    labels, scores, positions = summarize_by_player(results)
    assert labels == ["A", "B"]
    np.testing.assert_array_equal(scores["A"], [1, 3, 6, 8])
    np.testing.assert_array_equal(scores["B"], [2, 4, 5, 7])
    np.testing.assert_array_equal(positions["A"], [2, 2])


def test_summarize_rejects_repeated_labels():
    with pytest.raises(ValueError):
        summarize_by_player([make_result(["RANDOM", "RANDOM"], [[1, 2]])])


def test_repeated_presets_stay_separate_series():
    players = label_players(build_players(["random", "random", "best_nigiri"], seed=3))
    results = run_multiple_combinations(4, MENUS["my_first_meal"], players, rng=3)
    labels, scores, _ = summarize_by_player(results)
    assert sorted(labels) == ["BEST_NIGIRI", "RANDOM_1", "RANDOM_2"]
    # two seatings of four games each
    assert all(len(scores[name]) == 8 for name in labels)
