"""
Hand containers: the CardSet multiset and the rotating view over seat hands.
"""

import random
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, TypeVar
from .cards import Card, CardKind, Menu, dessert_cards_per_round
from .errors import ConfigurationError, InternalInvariantViolation

T = TypeVar("T")


class CardSet:
    """Multiset of cards (card -> count) with a maintained total"""
    def __init__(self):
        self._set: Dict[Card, int] = {}
        self._count = 0

    @classmethod
    def from_menu(cls, menu: Menu, players: int, round_number: int,
                  rng: Optional[random.Random] = None) -> "CardSet":
        """
        Deck for one round: every regular menu card at its printed count plus
        the round's fruit desserts.

        Every card is priced before sorting, so a card without a print count
        fails here. Cards are added in catalog order so a seeded shuffle gives
        the same deal in every process. Fruit is drawn without replacement
        from the menu's fruit deck, which needs rng.
        """
        counts = {card: card.get_count(players, round_number) for card in menu}
        card_set = cls()
        fruit_deck = cls()
        for card in sorted(counts):
            if card.kind == CardKind.FRUIT:
                fruit_deck.add_cards(card, counts[card])
            else:
                card_set.add_cards(card, counts[card])
        if len(fruit_deck) > 0:
            if rng is None:
                raise ConfigurationError("Dealing fruit needs a random generator")
            for card in fruit_deck.draw(dessert_cards_per_round(players, round_number), rng):
                card_set.add_card(card)
        return card_set

    def with_cards(self, card: Card, count: int) -> "CardSet":
        self.add_cards(card, count)
        return self

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Tuple[Card, int]]:
        return iter(list(self._set.items()))

    def __eq__(self, other):
        if not isinstance(other, CardSet):
            return False
        return self._set == other._set

    def __repr__(self):
        return f"CardSet({self._set!r})"

    def contains_card(self, card: Card) -> bool:
        return card in self._set

    __contains__ = contains_card

    def count_of(self, card: Card) -> int:
        return self._set.get(card, 0)

    def add_cards(self, card: Card, count: int) -> "CardSet":
        if count <= 0:
            return self
        self._set[card] = self._set.get(card, 0) + count
        self._count += count
        return self

    def add_card(self, card: Card) -> "CardSet":
        return self.add_cards(card, 1)

    def remove_card(self, card: Card):
        """Remove one copy; the card must be present."""
        count = self._set.get(card, 0)
        if count <= 0:
            raise InternalInvariantViolation(f"Cannot remove {card!r}: not in set")
        if count == 1:
            del self._set[card]
        else:
            self._set[card] = count - 1
        self._count -= 1

    def random_card(self, rng: random.Random) -> Optional[Card]:
        """Pick a card with probability proportional to its count."""
        if self._count == 0:
            return None
        ordinal = rng.randrange(self._count)
        for card, count in self._set.items():
            if count > ordinal:
                return card
            ordinal -= count
        raise InternalInvariantViolation(
            f"CardSet total {self._count} does not match its entries")

    def draw(self, count: int, rng: random.Random) -> List[Card]:
        """Remove and return up to count weighted random cards."""
        drawn = []
        for _ in range(min(count, self._count)):
            card = self.random_card(rng)
            self.remove_card(card)
            drawn.append(card)
        return drawn

    def flatten(self) -> List[Card]:
        cards = []
        for card, count in self._set.items():
            cards.extend([card] * count)
        return cards


def get_wrapped(items: Sequence[T], idx: int) -> T:
    """Index with wrap-around (floored modulo, so negatives wrap too)"""
    return items[idx % len(items)]


class HandsView:
    """
    Seat-relative view over the physical hands.

    At turn t seat i holds physical hand (t + i) mod n; nothing is moved
    between seats.
    """
    def __init__(self, hands: List[CardSet], hands_shift: int):
        self.hands = hands
        self.hands_shift = hands_shift

    def slot(self, idx: int) -> int:
        return (self.hands_shift + idx) % len(self.hands)

    def get_hand(self, idx: int) -> CardSet:
        return get_wrapped(self.hands, self.hands_shift + idx)

    def get_hand_mut(self, idx: int) -> CardSet:
        return self.hands[self.slot(idx)]
