from typing import List, Optional, Sequence, Union
import random
from .cards import Card, CardKind, nigiri
from .hand import CardSet

# -----------------------------------------------------------------------------
# Player interface
# -----------------------------------------------------------------------------


class BasePlayer:
    """Interface for card-choice policies."""

    name: str = "BASE"

    def play(self, hand: CardSet, player_idx: int, played_cards: Sequence[Sequence[Card]]) -> Card:
        """
        Return the card to play from hand.

        played_cards holds every seat's played sequence for the current round
        (read-only). The returned card must be in hand.
        """
        raise NotImplementedError

    def __repr__(self):
        return self.name


# -----------------------------------------------------------------------------
# Preference-list strategies
# -----------------------------------------------------------------------------


class PreferredCardsPlayer(BasePlayer):
    """
    Plays the first card of a fixed preference list that is in hand,
    otherwise a random card.
    """

    name = "PREFERRED"

    def __init__(self, preferences: List[Card], seed: Union[int, None] = None, name: Optional[str] = None):
        """
        Args:
            preferences: Cards in order of preference
            seed: Seed for the random fallback
            name: Label used in reports
        """
        self.preferences = list(preferences)
        self._rng = random.Random(seed)
        if name is not None:
            self.name = name

    def play(self, hand, player_idx, played_cards):
        for card in self.preferences:
            if hand.contains_card(card):
                return card
        return hand.random_card(self._rng)

    def __repr__(self):
        return f"{self.name}{self.preferences}"


def best_nigiri(seed=None) -> PreferredCardsPlayer:
    return PreferredCardsPlayer([nigiri(3), nigiri(2), nigiri(1)], seed=seed, name="BEST_NIGIRI")


def wasabi_best_nigiri(seed=None) -> PreferredCardsPlayer:
    return PreferredCardsPlayer(
        [Card(CardKind.WASABI), nigiri(3), nigiri(2), nigiri(1)], seed=seed, name="WASABI_BEST_NIGIRI")


def nigiri_master(seed=None) -> PreferredCardsPlayer:
    # squid first, wasabi only when no squid is in hand
    return PreferredCardsPlayer(
        [nigiri(3), Card(CardKind.WASABI), nigiri(2), nigiri(1)], seed=seed, name="NIGIRI_MASTER")
