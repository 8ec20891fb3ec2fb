import sys
import os
import argparse
import contextlib
import yaml
from sushi_sim.cards import get_menu
from sushi_sim.players import build_players
from sushi_sim.simulation import simulate_game


def run_experiment_1(cfg):
    """Run Experiment 1: Strategy Comparison"""
    import experiments.run_experiment_1 as exp1
    exp1.main(cfg)


def run_experiment_2(cfg):
    """Run Experiment 2: Seat-count sweep"""
    import experiments.run_experiment_2_seats as exp2
    exp2.main(cfg)


def run_quick_demo(cfg):
    """Quick demonstration with a single game"""
    print("=" * 60)
    print("Quick Demo: Single Game")
    print("=" * 60)

    menu_name = cfg.get("menu", "my_first_meal")
    menu = get_menu(menu_name, cfg.get("extra_cards"))
    players = build_players(cfg["players"], seed=cfg.get("seed"))

    print(f"\nMenu: {menu_name}")
    print(f"Players: {', '.join(p.name for p in players)}")

    result = simulate_game(
        menu, players, rng=cfg.get("seed"),
        score_desserts_each_round=cfg.get("score_desserts_each_round", False))

    for round_result in result.rounds:
        print(f"\nRound {round_result.round_number}:")
        for seat, player in enumerate(players):
            played = ", ".join(repr(c) for c in round_result.played_cards[seat])
            print(f"  {player.name}: {round_result.points[seat]:+d}  [{played}]")

    print("\nDesserts:")
    for seat, player in enumerate(players):
        print(f"  {player.name}: {result.dessert_points[seat]:+d}  "
              f"({len(result.played_desserts[seat])} cards)")

    print("\nFinal scores:")
    for seat, player in enumerate(players):
        print(f"  {player.name}: {result.scores[seat]}")


class TeeStream:
    """Helper that duplicates stdout writes to multiple streams."""

    def __init__(self, *streams):
        self.streams = streams

    def write(self, data):
        for stream in self.streams:
            stream.write(data)

    def flush(self):
        for stream in self.streams:
            stream.flush()


def run_with_logging(filename, func, cfg):
    # Create output directory if it doesn't exist
    project_root = os.path.dirname(os.path.abspath(__file__))
    output_dir = os.path.join(project_root, "output")
    os.makedirs(output_dir, exist_ok=True)

    output_path = os.path.join(output_dir, filename)
    with open(output_path, "w", encoding="utf-8") as outfile:
        tee = TeeStream(sys.stdout, outfile)
        with contextlib.redirect_stdout(tee):
            func(cfg)
    print(f"\nCompleted run. Output saved to {output_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Sushi Card Game Strategy Simulation")
    parser.add_argument(
        "--experiment",
        type=int,
        choices=[1, 2],
        help="Run specific experiment (1 or 2)"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Run all experiments"
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run quick demo (single game)"
    )
    parser.add_argument(
        "--config",
        default=os.path.join("configs", "base.yaml"),
        help="Path to the YAML config"
    )

    args = parser.parse_args()

    with open(args.config) as f:
        cfg = yaml.safe_load(f)

    if args.demo:
        run_quick_demo(cfg)
    elif args.experiment:
        experiment_map = {
            1: ("experiment1_output.txt", run_experiment_1),
            2: ("experiment2_output.txt", run_experiment_2),
        }
        filename, func = experiment_map[args.experiment]
        run_with_logging(filename, func, cfg)
    elif args.all:
        def run_all(cfg):
            print("Running all experiments...\n")
            run_experiment_1(cfg)
            print("\n\n")
            print("Running Experiment 2: seat-count sweep...\n")
            run_experiment_2(cfg)
        run_with_logging("all_experiments_output.txt", run_all, cfg)
    else:
        # Default: run quick demo
        print("No experiment specified. Running quick demo...")
        print("Use --experiment N to run experiment N, --all to run all, or --demo for quick demo\n")
        run_quick_demo(cfg)
