import os
import sys
import yaml
import numpy as np

# Add project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sushi_sim.cards import get_menu
from sushi_sim.players import build_players, label_players
from sushi_sim.plotting import ensure_dir, save_bar_plot, save_position_plot
from sushi_sim.utils import compare_players, compute_statistics, run_multiple_combinations


def print_arrangement(result):
    """Print average points and finishing positions for one seating."""
    names = result["player_names"]
    print("Average points per game:")
    for seat, name in enumerate(names):
        print(f"{result['mean_scores'][seat]:.3f} {name}")

    print("Positions:")
    header = "\t".join(f"#{rank + 1}" for rank in range(len(names)))
    print(f"{header}\tPLAYER")
    for seat, name in enumerate(names):
        row = "\t".join(str(count) for count in result["positions"][seat])
        print(f"{row}\t{name}")
    print()


def summarize_by_player(results):
    """
    Pool every seating by player label.

    Returns:
        (labels, per-player score arrays, per-player position totals)
    """
    labels = []
    scores = {}
    positions = {}
    for result in results:
        if len(set(result["player_names"])) != len(result["player_names"]):
            raise ValueError(f"Player labels must be unique: {result['player_names']}")
        for seat, name in enumerate(result["player_names"]):
            if name not in scores:
                labels.append(name)
                scores[name] = []
                positions[name] = np.zeros(len(result["player_names"]), dtype=int)
            scores[name].extend(result["scores"][:, seat])
            positions[name] += result["positions"][seat]
    return labels, {k: np.array(v) for k, v in scores.items()}, positions


def main(cfg=None):
    if cfg is None:
        config_path = os.path.join(project_root, "configs", "base.yaml")
        with open(config_path) as f:
            cfg = yaml.safe_load(f)

    num_games = cfg.get("games")
    if num_games is None:
        raise ValueError("games must be specified in config")
    player_entries = cfg.get("players")
    if not player_entries:
        raise ValueError("players must be specified in config")

    menu_name = cfg.get("menu", "my_first_meal")
    menu = get_menu(menu_name, cfg.get("extra_cards"))
    seed = cfg.get("seed")
    players = label_players(build_players(player_entries, seed=seed))

    print("=" * 60)
    print(f"Experiment 1: Strategy Comparison ({len(players)}-player table)")
    print(f"Menu: {menu_name} ({len(menu)} cards)")
    print("=" * 60)
    print(f"\nRunning {num_games} games per seating arrangement\n")

    results = run_multiple_combinations(
        num_games, menu, players, rng=seed,
        score_desserts_each_round=cfg.get("score_desserts_each_round", False))
    for result in results:
        print_arrangement(result)

    labels, scores, positions = summarize_by_player(results)

    print("-" * 60)
    print("POOLED OVER ALL SEATINGS:")
    print("-" * 60)
    summary = {}
    for name in labels:
        summary[name] = compute_statistics(scores[name])
        s = summary[name]
        print(f"{name}: mean {s['mean']:.3f} "
              f"(95% CI {s['ci_95_lower']:.3f} .. {s['ci_95_upper']:.3f}, n={s['n']})")

    reference = labels[0]
    print(f"\nComparison against {reference}:")
    for name in labels[1:]:
        comparison = compare_players(scores[name], scores[reference])
        print(f"  {name}: difference {comparison['difference']:+.3f}, "
              f"t={comparison['t_statistic']:.4f}, p={comparison['p_value']:.6f}")

    print("\n" + "=" * 60)

    plot_dir = os.path.join(project_root, "plots", "experiment_1")
    ensure_dir(plot_dir)

    save_bar_plot(
        labels,
        [summary[name]["mean"] for name in labels],
        "Average Points per Game",
        os.path.join(plot_dir, "mean_scores.png"),
        ylabel="Points",
        errors=[summary[name]["ci_95_upper"] - summary[name]["mean"] for name in labels]
    )
    save_position_plot(
        labels,
        [positions[name] for name in labels],
        "Finishing Positions",
        os.path.join(plot_dir, "positions.png")
    )

    print(f"\nPlots saved to: {plot_dir}")


if __name__ == "__main__":
    main()
