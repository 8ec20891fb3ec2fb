"""
Game simulation for the sushi card game.

One call to simulate() plays a full three-round game: each round builds the
deck from the menu, deals, rotates hands turn by turn while asking every
player for a card, and scores the played cards. Desserts are stashed across
rounds and scored once more when the game ends.
"""

import random
from dataclasses import dataclass, field
from typing import List, Sequence, Union

from .cards import Card, Menu, cards_per_player
from .errors import ConfigurationError, InternalInvariantViolation, StrategyContractViolation
from .hand import CardSet, HandsView
from .scoring import PointCalculator
from .strategies import BasePlayer

ROUNDS_COUNT = 3
MIN_PLAYERS = 2
MAX_PLAYERS = 8


@dataclass
class RoundResult:
    round_number: int
    played_cards: List[List[Card]]
    points: List[int]
    uramaki_position: int
    starting_uramaki_position: int = 0


@dataclass
class GameResult:
    scores: List[int]
    rounds: List[RoundResult] = field(default_factory=list)
    dessert_points: List[int] = field(default_factory=list)
    played_desserts: List[List[Card]] = field(default_factory=list)


def make_rng(rng: Union[random.Random, int, None]) -> random.Random:
    """Accept a generator, a seed or None"""
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def check_players_count(players: int):
    if not MIN_PLAYERS <= players <= MAX_PLAYERS:
        raise ConfigurationError(
            f"Invalid players count: {players} (must be {MIN_PLAYERS}-{MAX_PLAYERS})")


def build_deck(menu: Menu, players: int, round_number: int, rng: random.Random) -> CardSet:
    """Deck for one round: printed counts of each menu card plus the round's fruit."""
    return CardSet.from_menu(menu, players, round_number, rng)


def deal_hands(deck: CardSet, players: int, hand_size: int, rng: random.Random) -> List[CardSet]:
    """Shuffle the deck and deal hand_size cards to each seat in order; leftovers are discarded."""
    cards = deck.flatten()
    if len(cards) < players * hand_size:
        raise ConfigurationError(
            f"Deck of {len(cards)} cards cannot deal {hand_size} cards to {players} players")
    rng.shuffle(cards)
    dealer = iter(cards)
    hands = [CardSet() for _ in range(players)]
    for hand in hands:
        for _ in range(hand_size):
            hand.add_card(next(dealer))
    return hands


def play_round(hands: List[CardSet], players: Sequence[BasePlayer], hand_size: int) -> List[List[Card]]:
    """
    Play every turn of a round, passing hands by rotating the view.

    All seats choose against the same history before any hand changes.
    """
    played_cards: List[List[Card]] = [[] for _ in players]

    for turn in range(hand_size):
        hands_view = HandsView(hands, turn)
        history = tuple(tuple(cards) for cards in played_cards)
        played_now = []
        for idx, player in enumerate(players):
            hand = hands_view.get_hand(idx)
            card = player.play(hand, idx, history)
            if card is None or not hand.contains_card(card):
                raise StrategyContractViolation(
                    f"{player!r} at seat {idx} played {card!r}, which is not in its hand")
            played_now.append(card)

        for idx, card in enumerate(played_now):
            hands_view.get_hand_mut(idx).remove_card(card)
            played_cards[idx].append(card)

    for i, hand in enumerate(hands):
        if len(hand) != 0:
            raise InternalInvariantViolation(f"Hand {i} still holds {len(hand)} cards after the round")

    return played_cards


def simulate_game(menu: Menu, players: Sequence[BasePlayer],
                  rng: Union[random.Random, int, None] = None,
                  score_desserts_each_round: bool = False) -> GameResult:
    """
    Simulate one full game and keep the per-round breakdown.

    Args:
        menu: Active cards
        players: One policy per seat (2-8)
        rng: Generator or seed for dealing
        score_desserts_each_round: Also score desserts inside every round
            (they are always scored at game end)

    Returns:
        GameResult with final scores, round results and dessert points
    """
    rng = make_rng(rng)
    players_count = len(players)
    check_players_count(players_count)
    hand_size = cards_per_player(players_count)

    scores = [0] * players_count
    uramaki_position = 0
    played_desserts: List[List[Card]] = [[] for _ in range(players_count)]
    result = GameResult(scores=scores)

    for round_number in range(1, ROUNDS_COUNT + 1):
        deck = build_deck(menu, players_count, round_number, rng)
        hands = deal_hands(deck, players_count, hand_size, rng)
        played_cards = play_round(hands, players, hand_size)

        calculator = PointCalculator(players_count, uramaki_position)
        calculator.apply_cards(played_cards)
        points = calculator.calculate_points(
            menu, end_of_round=True, include_desserts=score_desserts_each_round)
        for i, delta in enumerate(points):
            scores[i] += delta
        uramaki_position = calculator.has_uramaki_scores()
        result.rounds.append(RoundResult(
            round_number, played_cards, points, uramaki_position, calculator.uramaki_position))

        for stash, cards in zip(played_desserts, played_cards):
            stash.extend(card for card in cards if card.is_dessert())

    calculator = PointCalculator(players_count, 0)
    calculator.apply_cards(played_desserts)
    dessert_points = calculator.calculate_points(menu, end_of_round=True)
    for i, delta in enumerate(dessert_points):
        scores[i] += delta

    result.dessert_points = dessert_points
    result.played_desserts = played_desserts
    return result


def simulate(menu: Menu, players: Sequence[BasePlayer],
             rng: Union[random.Random, int, None] = None,
             score_desserts_each_round: bool = False) -> List[int]:
    """Simulate one game and return the final score of every seat."""
    return simulate_game(menu, players, rng, score_desserts_each_round).scores
