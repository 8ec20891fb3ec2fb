"""
Experiment 2: Seat-count sweep

One test player plays against (n - 1) copies of an opponent policy for every
configured seat count n. Reports the test player's mean score with a 95%
confidence interval and how often it finishes first.
"""

import os
import sys
import yaml
import numpy as np

# Add project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sushi_sim.cards import get_menu
from sushi_sim.players import build_player
from sushi_sim.plotting import ensure_dir, save_line_plot
from sushi_sim.utils import compute_statistics, run_multiple_simulations


def run_seat_sweep(cfg, menu, seat_counts, num_games, seed=None):
    """
    Returns:
        Dictionary mapping seat count to test player statistics
    """
    exp_cfg = cfg.get("experiment_2", {})
    test_entry = exp_cfg.get("test_player", "wasabi_best_nigiri")
    opponent_entry = exp_cfg.get("opponent", "random")

    sweep = {}
    for n in seat_counts:
        players = [build_player(test_entry, seed=seed)]
        for i in range(1, n):
            players.append(build_player(opponent_entry, seed=None if seed is None else seed + i))
        result = run_multiple_simulations(
            num_games, menu, players, rng=seed,
            score_desserts_each_round=cfg.get("score_desserts_each_round", False))
        stats = compute_statistics(result["scores"][:, 0])
        opponents_mean = float(np.mean(result["scores"][:, 1:]))
        win_rate = result["positions"][0][0] / num_games
        sweep[n] = {**stats, "opponents_mean": opponents_mean, "win_rate": win_rate}
        print(f"Seats {n}: test mean {stats['mean']:.3f} "
              f"(95% CI {stats['ci_95_lower']:.3f} .. {stats['ci_95_upper']:.3f}), "
              f"opponents {opponents_mean:.3f}, first place {win_rate:.4f}")
    return sweep


def main(cfg=None):
    if cfg is None:
        config_path = os.path.join(project_root, "configs", "base.yaml")
        with open(config_path) as f:
            cfg = yaml.safe_load(f)

    exp_cfg = cfg.get("experiment_2")
    if exp_cfg is None:
        raise ValueError("experiment_2 must be specified in config")
    seat_counts = exp_cfg.get("seat_counts")
    if not seat_counts:
        raise ValueError("experiment_2.seat_counts must be specified in config")
    num_games = exp_cfg.get("games", cfg.get("games"))
    if num_games is None:
        raise ValueError("games must be specified in config")

    menu_name = cfg.get("menu", "my_first_meal")
    menu = get_menu(menu_name, cfg.get("extra_cards"))

    print("=" * 60)
    print("Experiment 2: Seat-count sweep")
    print(f"Test player: {exp_cfg.get('test_player')}  Opponent: {exp_cfg.get('opponent')}")
    print(f"Menu: {menu_name}, {num_games} games per seat count")
    print("=" * 60 + "\n")

    sweep = run_seat_sweep(cfg, menu, seat_counts, num_games, seed=cfg.get("seed"))

    plot_dir = os.path.join(project_root, "plots", "experiment_2")
    ensure_dir(plot_dir)
    save_line_plot(
        seat_counts,
        [sweep[n]["mean"] for n in seat_counts],
        "Mean Score by Seat Count",
        "Seats",
        "Points",
        os.path.join(plot_dir, "mean_score_by_seats.png"),
        lower=[sweep[n]["ci_95_lower"] for n in seat_counts],
        upper=[sweep[n]["ci_95_upper"] for n in seat_counts],
        y2=[sweep[n]["opponents_mean"] for n in seat_counts],
        label1="Test player",
        label2="Opponents"
    )

    print(f"\nPlots saved to: {plot_dir}")


if __name__ == "__main__":
    main()
