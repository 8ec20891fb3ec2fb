from typing import Union
import random
from collections import Counter
from .cards import parse_card
from .errors import ConfigurationError
from .strategies import BasePlayer, PreferredCardsPlayer, best_nigiri, wasabi_best_nigiri, nigiri_master


class RandomPlayer(BasePlayer):
    """
    Baseline policy used as the reference opponent in experiments.

    Plays a card drawn with probability proportional to its count in hand.
    """

    name = "RANDOM"

    def __init__(self, seed: Union[int, None] = None) -> None:
        """
        Args:
            seed: Random seed (None for an unseeded generator)
        """
        self._rng = random.Random(seed)

    def play(self, hand, player_idx, played_cards):
        return hand.random_card(self._rng)


PRESETS = {
    "random": RandomPlayer,
    "best_nigiri": best_nigiri,
    "wasabi_best_nigiri": wasabi_best_nigiri,
    "nigiri_master": nigiri_master,
}


def build_player(entry, seed: Union[int, None] = None) -> BasePlayer:
    """
    Build a player from a config entry.

    Args:
        entry: Preset name, or a dict with "preferences" (card strings) and optional "name"
        seed: Seed for the player's own random source
    """
    if isinstance(entry, str):
        if entry not in PRESETS:
            raise ConfigurationError(f"Unknown player preset: {entry!r} (known: {sorted(PRESETS)})")
        return PRESETS[entry](seed=seed)
    if isinstance(entry, dict):
        if "preset" in entry:
            return build_player(entry["preset"], seed=seed)
        preferences = entry.get("preferences")
        if not preferences:
            raise ConfigurationError(f"Player entry needs a preset or preferences: {entry!r}")
        return PreferredCardsPlayer(
            [parse_card(text) for text in preferences],
            seed=seed,
            name=entry.get("name"),
        )
    raise ConfigurationError(f"Bad player entry: {entry!r}")


def build_players(entries, seed: Union[int, None] = None):
    """Build one player per entry; seeds are derived from seed so seats stay independent."""
    players = []
    for i, entry in enumerate(entries):
        player_seed = None if seed is None else seed * 1000 + i
        players.append(build_player(entry, seed=player_seed))
    return players


def label_players(players):
    """Suffix repeated names with their occurrence number (RANDOM_1, RANDOM_2) so reports keep seats apart."""
    totals = Counter(p.name for p in players)
    seen = Counter()
    for player in players:
        name = player.name
        if totals[name] > 1:
            seen[name] += 1
            player.name = f"{name}_{seen[name]}"
    return players
