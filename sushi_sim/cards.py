"""
Card catalog for the sushi card game.
"""

from typing import Dict, FrozenSet, List, Optional, Tuple
from enum import Enum
from .errors import ConfigurationError


class CardKind(Enum):
    """Sushi card kinds"""
    NIGIRI = "nigiri"                            # rank 1 egg, 2 salmon, 3 squid
    MAKI = "maki"                                # rank 1-3
    TEMAKI = "temaki"
    URAMAKI = "uramaki"                          # rank 3-5
    DUMPLING = "dumpling"
    EDAMAME = "edamame"
    EEL = "eel"
    ONIGIRI = "onigiri"                          # (bool, bool) shape flags
    MISO_SOUP = "miso_soup"
    SASHIMI = "sashimi"
    TEMPURA = "tempura"
    TOFU = "tofu"
    CHOPSTICKS = "chopsticks"                    # rank 1-3
    MENU = "menu"                                # rank 7-9
    SOY_SAUCE = "soy_sauce"
    SPOON = "spoon"                              # rank 4-6
    SPECIAL_ORDER = "special_order"
    TAKEOUT_BOX = "takeout_box"                  # rank 10-12
    TEA = "tea"
    WASABI = "wasabi"
    GREEN_TEA_ICE_CREAM = "green_tea_ice_cream"
    FRUIT = "fruit"                              # (a, b, c) fruit counts
    PUDDING = "pudding"


class CardColor(Enum):
    """Colour tag of a card kind"""
    NIGIRI_YELLOW = "nigiri_yellow"
    MAKI_RED = "maki_red"
    TEMAKI_PURPLE = "temaki_purple"
    URAMAKI_GREEN = "uramaki_green"
    DUMPLING_BLUE = "dumpling_blue"
    EDAMAME_PURPLE = "edamame_purple"
    EEL_PURPLE = "eel_purple"
    ONIGIRI_PINK = "onigiri_pink"
    MISO_GREEN = "miso_green"
    SASHIMI_GREEN = "sashimi_green"
    TEMPURA_PURPLE = "tempura_purple"
    TOFU_GREEN = "tofu_green"
    CHOPSTICKS_BLUE = "chopsticks_blue"
    MENU_YELLOW = "menu_yellow"
    SOY_SAUCE_ORANGE = "soy_sauce_orange"
    SPOON_GREY = "spoon_grey"
    SPECIAL_ORDER_RAINBOW = "special_order_rainbow"
    TAKEOUT_BOX_BROWN = "takeout_box_brown"
    TEA_BROWN = "tea_brown"
    ICE_CREAM_BLUE = "ice_cream_blue"
    FRUIT_PINK = "fruit_pink"
    PUDDING_PINK = "pudding_pink"


KIND_ORDER = {kind: i for i, kind in enumerate(CardKind)}

CARD_COLORS: Dict[CardKind, CardColor] = {
    CardKind.NIGIRI: CardColor.NIGIRI_YELLOW,
    CardKind.WASABI: CardColor.NIGIRI_YELLOW,
    CardKind.MAKI: CardColor.MAKI_RED,
    CardKind.TEMAKI: CardColor.TEMAKI_PURPLE,
    CardKind.URAMAKI: CardColor.URAMAKI_GREEN,
    CardKind.DUMPLING: CardColor.DUMPLING_BLUE,
    CardKind.EDAMAME: CardColor.EDAMAME_PURPLE,
    CardKind.EEL: CardColor.EEL_PURPLE,
    CardKind.ONIGIRI: CardColor.ONIGIRI_PINK,
    CardKind.MISO_SOUP: CardColor.MISO_GREEN,
    CardKind.SASHIMI: CardColor.SASHIMI_GREEN,
    CardKind.TEMPURA: CardColor.TEMPURA_PURPLE,
    CardKind.TOFU: CardColor.TOFU_GREEN,
    CardKind.CHOPSTICKS: CardColor.CHOPSTICKS_BLUE,
    CardKind.MENU: CardColor.MENU_YELLOW,
    CardKind.SOY_SAUCE: CardColor.SOY_SAUCE_ORANGE,
    CardKind.SPOON: CardColor.SPOON_GREY,
    CardKind.SPECIAL_ORDER: CardColor.SPECIAL_ORDER_RAINBOW,
    CardKind.TAKEOUT_BOX: CardColor.TAKEOUT_BOX_BROWN,
    CardKind.TEA: CardColor.TEA_BROWN,
    CardKind.GREEN_TEA_ICE_CREAM: CardColor.ICE_CREAM_BLUE,
    CardKind.FRUIT: CardColor.FRUIT_PINK,
    CardKind.PUDDING: CardColor.PUDDING_PINK,
}

DESSERT_KINDS = frozenset([CardKind.GREEN_TEA_ICE_CREAM, CardKind.PUDDING, CardKind.FRUIT])

# Printed variants of every kind that carries a payload.
RANKED_VARIANTS: Dict[CardKind, Tuple[int, ...]] = {
    CardKind.NIGIRI: (1, 2, 3),
    CardKind.MAKI: (1, 2, 3),
    CardKind.URAMAKI: (3, 4, 5),
    CardKind.CHOPSTICKS: (1, 2, 3),
    CardKind.MENU: (7, 8, 9),
    CardKind.SPOON: (4, 5, 6),
    CardKind.TAKEOUT_BOX: (10, 11, 12),
}

ONIGIRI_SHAPES = ((False, False), (False, True), (True, False), (True, True))

# 15-card fruit deck: 2 of each double-fruit card, 3 of each two-fruit card
FRUIT_PRINT_COUNTS: Dict[Tuple[int, int, int], int] = {
    (2, 0, 0): 2,
    (0, 2, 0): 2,
    (0, 0, 2): 2,
    (1, 1, 0): 3,
    (1, 0, 1): 3,
    (0, 1, 1): 3,
}

RANKED_PRINT_COUNTS: Dict[CardKind, Dict[int, int]] = {
    CardKind.NIGIRI: {1: 4, 2: 5, 3: 3},
    CardKind.MAKI: {1: 4, 2: 5, 3: 3},
    CardKind.URAMAKI: {3: 4, 4: 4, 5: 4},
    CardKind.CHOPSTICKS: {1: 1, 2: 1, 3: 1},
    CardKind.MENU: {7: 1, 8: 1, 9: 1},
    CardKind.SPOON: {4: 1, 5: 1, 6: 1},
    CardKind.TAKEOUT_BOX: {10: 1, 11: 1, 12: 1},
}

FLAT_PRINT_COUNTS: Dict[CardKind, int] = {
    CardKind.TEMAKI: 12,
    CardKind.DUMPLING: 8,
    CardKind.EDAMAME: 8,
    CardKind.EEL: 8,
    CardKind.MISO_SOUP: 8,
    CardKind.SASHIMI: 8,
    CardKind.TEMPURA: 8,
    CardKind.TOFU: 8,
    CardKind.SOY_SAUCE: 3,
    CardKind.SPECIAL_ORDER: 3,
    CardKind.TEA: 3,
    CardKind.WASABI: 3,
}


def dessert_cards_per_round(players: int, round_number: int) -> int:
    """Copies of each dessert kind added to the deck in a round."""
    if 2 <= players <= 5:
        table = {1: 5, 2: 3, 3: 2}
    elif 6 <= players <= 8:
        table = {1: 7, 2: 5, 3: 3}
    else:
        table = {}
    if round_number not in table:
        raise ConfigurationError(
            f"Invalid players count ({players}) or round ({round_number})!")
    return table[round_number]


def cards_per_player(players: int) -> int:
    """Hand size dealt to each seat at the start of a round"""
    if 2 <= players <= 3:
        return 10
    if 4 <= players <= 5:
        return 9
    if 6 <= players <= 7:
        return 8
    if players == 8:
        return 7
    raise ConfigurationError(f"Invalid players count: {players}!")


class Card:
    """Single sushi card (kind plus optional payload)"""
    def __init__(self, kind: CardKind, value=None):
        self.kind = kind
        self.value = value  # int rank, (bool, bool) onigiri shape or (a, b, c) fruit counts

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.kind == other.kind and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        if self.value is None:
            return f"Card({self.kind.value})"
        return f"Card({self.kind.value}, {self.value})"

    def _sort_key(self):
        if self.value is None:
            value_key = ()
        elif isinstance(self.value, tuple):
            value_key = self.value
        else:
            value_key = (self.value,)
        return (KIND_ORDER[self.kind], value_key)

    def __lt__(self, other):
        """Catalog order"""
        return self._sort_key() < other._sort_key()

    def is_dessert(self) -> bool:
        return self.kind in DESSERT_KINDS

    def get_color(self) -> CardColor:
        return CARD_COLORS[self.kind]

    def get_count(self, players: int, round_number: int) -> int:
        """
        Print count of this exact card in the deck for a round.

        The seat/round pair is validated for every card, not only desserts.
        """
        dessert_cards = dessert_cards_per_round(players, round_number)
        if self.kind in (CardKind.GREEN_TEA_ICE_CREAM, CardKind.PUDDING):
            return dessert_cards
        if self.kind in FLAT_PRINT_COUNTS and self.value is None:
            return FLAT_PRINT_COUNTS[self.kind]
        if self.kind in RANKED_PRINT_COUNTS and self.value in RANKED_PRINT_COUNTS[self.kind]:
            return RANKED_PRINT_COUNTS[self.kind][self.value]
        if self.kind == CardKind.ONIGIRI and self.value in ONIGIRI_SHAPES:
            return 2  # per shape pair
        if self.kind == CardKind.FRUIT and self.value in FRUIT_PRINT_COUNTS:
            return FRUIT_PRINT_COUNTS[self.value]
        raise ConfigurationError(f"Unknown card: {self!r}!")


# Shorthand constructors
def nigiri(rank: int) -> Card:
    return Card(CardKind.NIGIRI, rank)


def maki(rank: int) -> Card:
    return Card(CardKind.MAKI, rank)


def uramaki(rank: int) -> Card:
    return Card(CardKind.URAMAKI, rank)


def onigiri(first: bool, second: bool) -> Card:
    return Card(CardKind.ONIGIRI, (first, second))


def fruit(a: int, b: int, c: int) -> Card:
    return Card(CardKind.FRUIT, (a, b, c))


def catalog_variants(kind: CardKind) -> List[Card]:
    """Every printed variant of a kind"""
    if kind in RANKED_VARIANTS:
        return [Card(kind, rank) for rank in RANKED_VARIANTS[kind]]
    if kind == CardKind.ONIGIRI:
        return [Card(kind, shape) for shape in ONIGIRI_SHAPES]
    if kind == CardKind.FRUIT:
        return [Card(kind, counts) for counts in FRUIT_PRINT_COUNTS]
    return [Card(kind)]


Menu = FrozenSet[Card]


def build_menu(*entries) -> Menu:
    """
    Build a menu from cards and/or card kinds.

    A CardKind entry stands for all of its printed variants.
    """
    cards = set()
    for entry in entries:
        if isinstance(entry, CardKind):
            cards.update(catalog_variants(entry))
        elif isinstance(entry, Card):
            cards.add(entry)
        else:
            raise ConfigurationError(f"Not a card or card kind: {entry!r}")
    return frozenset(cards)


def menu_has_kind(menu: Menu, kind: CardKind) -> bool:
    return any(card.kind == kind for card in menu)


def has_fruit(menu: Menu) -> bool:
    return menu_has_kind(menu, CardKind.FRUIT)


def parse_card(text: str) -> Card:
    """
    Parse a card from config text.

    Examples: "wasabi", "nigiri:3", "onigiri:1:0", "fruit:2:0:0".
    """
    parts = [p.strip() for p in str(text).lower().split(":")]
    try:
        kind = CardKind(parts[0])
    except ValueError:
        raise ConfigurationError(f"Unknown card kind: {text!r}") from None
    args = parts[1:]
    try:
        if kind == CardKind.ONIGIRI and len(args) == 2:
            return Card(kind, (bool(int(args[0])), bool(int(args[1]))))
        if kind == CardKind.FRUIT and len(args) == 3:
            return Card(kind, tuple(int(a) for a in args))
        if kind in RANKED_VARIANTS and len(args) == 1:
            return Card(kind, int(args[0]))
    except ValueError:
        raise ConfigurationError(f"Bad card payload: {text!r}") from None
    if not args and kind not in RANKED_VARIANTS and kind not in (CardKind.ONIGIRI, CardKind.FRUIT):
        return Card(kind)
    raise ConfigurationError(f"Bad card payload: {text!r}")


MENUS: Dict[str, Menu] = {
    "my_first_meal": build_menu(
        nigiri(1), nigiri(2), nigiri(3),
        maki(1), maki(2), maki(3),
        CardKind.TEMPURA,
        CardKind.SASHIMI,
        CardKind.MISO_SOUP,
        CardKind.WASABI,
        CardKind.TEA,
        CardKind.GREEN_TEA_ICE_CREAM,
    ),
    "sushi_go": build_menu(
        CardKind.NIGIRI,
        CardKind.MAKI,
        CardKind.TEMPURA,
        CardKind.SASHIMI,
        CardKind.DUMPLING,
        CardKind.WASABI,
        CardKind.CHOPSTICKS,
        CardKind.PUDDING,
    ),
}


def get_menu(name: str, extra: Optional[List[str]] = None) -> Menu:
    """Look up a named menu, optionally adding cards parsed from config text"""
    if name not in MENUS:
        raise ConfigurationError(f"Unknown menu: {name!r} (known: {sorted(MENUS)})")
    menu = MENUS[name]
    if extra:
        menu = menu | frozenset(parse_card(text) for text in extra)
    return menu
