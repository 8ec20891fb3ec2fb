"""
Point calculation for one scoring pass (a round, or the end-of-game desserts).
"""

from typing import Callable, Dict, List, Sequence, Set, Tuple
from dataclasses import dataclass, field
from .cards import Card, CardColor, CardKind, Menu, has_fruit, menu_has_kind
from .errors import InternalInvariantViolation

URAMAKI_THRESHOLD = 10

MAKI_POINTS_2_5_PLAYERS = (6, 3, 0)
MAKI_POINTS_6_8_PLAYERS = (6, 3, 0)
TEMAKI_2_PLAYERS = (4, 0)
TEMAKI_3_8_PLAYERS = (4, -4)
PUDDING_2_PLAYERS = (6, 0)
PUDDING_3_8_PLAYERS = (6, -6)

DUMPLING_POINTS = {0: 0, 1: 1, 2: 3, 3: 6, 4: 10}
DUMPLING_MAX_POINTS = 15
ONIGIRI_POINTS = {0: 0, 1: 1, 2: 4, 3: 9, 4: 16}
FRUIT_POINTS = {0: -2, 1: 0, 2: 1, 3: 3, 4: 6}
FRUIT_MAX_POINTS = 10


@dataclass
class PlayerScoreState:
    """Running category counters for one seat"""
    nigiri_points: int = 0
    wasabi_stack: int = 0
    maki_score: int = 0
    temaki_count: int = 0
    uramaki_score: int = 0
    dumpling_count: int = 0
    edamame_count: int = 0
    eel_count: int = 0
    onigiri_present: Set[Tuple[bool, bool]] = field(default_factory=set)
    miso_count: int = 0
    sashimi_count: int = 0
    tempura_count: int = 0
    tofu_count: int = 0
    soy_sauce_count: int = 0
    taken_out_count: int = 0
    tea_count: int = 0
    ice_cream_count: int = 0
    pudding_count: int = 0
    fruits_counts: Tuple[int, int, int] = (0, 0, 0)
    color_counts: Dict[CardColor, int] = field(default_factory=dict)

    def apply_cards(self, played_cards: Sequence[Card]):
        for card in played_cards:
            self.apply_card(card)

    def apply_card(self, card: Card):
        kind = card.kind
        if kind == CardKind.NIGIRI:
            if self.wasabi_stack > 0:
                self.wasabi_stack -= 1
                self.nigiri_points += card.value * 3
            else:
                self.nigiri_points += card.value
        elif kind == CardKind.WASABI:
            self.wasabi_stack += 1
        elif kind == CardKind.MAKI:
            self.maki_score += card.value
        elif kind == CardKind.TEMAKI:
            self.temaki_count += 1
        elif kind == CardKind.URAMAKI:
            self.uramaki_score += card.value
        elif kind == CardKind.DUMPLING:
            self.dumpling_count += 1
        elif kind == CardKind.EDAMAME:
            self.edamame_count += 1
        elif kind == CardKind.EEL:
            self.eel_count += 1
        elif kind == CardKind.ONIGIRI:
            self.onigiri_present.add(card.value)
        elif kind == CardKind.MISO_SOUP:
            self.miso_count += 1
        elif kind == CardKind.SASHIMI:
            self.sashimi_count += 1
        elif kind == CardKind.TEMPURA:
            self.tempura_count += 1
        elif kind == CardKind.TOFU:
            self.tofu_count += 1
        elif kind == CardKind.SOY_SAUCE:
            self.soy_sauce_count += 1
        elif kind == CardKind.TAKEOUT_BOX:
            self.taken_out_count += 1
        elif kind == CardKind.TEA:
            self.tea_count += 1
        elif kind == CardKind.GREEN_TEA_ICE_CREAM:
            self.ice_cream_count += 1
        elif kind == CardKind.PUDDING:
            self.pudding_count += 1
        elif kind == CardKind.FRUIT:
            a, b, c = card.value
            fa, fb, fc = self.fruits_counts
            self.fruits_counts = (fa + a, fb + b, fc + c)
        elif kind in (CardKind.CHOPSTICKS, CardKind.SPOON):
            pass  # special actions are not modelled
        elif kind in (CardKind.MENU, CardKind.SPECIAL_ORDER):
            raise InternalInvariantViolation(f"{card!r} shouldn't be played to the table!")
        else:
            raise InternalInvariantViolation(f"No scoring rule for {card!r}")
        color = card.get_color()
        self.color_counts[color] = self.color_counts.get(color, 0) + 1

    def has_uramaki_score(self) -> bool:
        return self.uramaki_score >= URAMAKI_THRESHOLD


class PointCalculator:
    """
    Converts the cards played in one scoring pass into per-seat deltas.

    A calculator is used for exactly one pass. The only state carried
    between rounds is the uramaki position, passed in by the caller.
    """

    def __init__(self, players: int, uramaki_position: int = 0):
        self.states: List[PlayerScoreState] = [PlayerScoreState() for _ in range(players)]
        self.uramaki_position = uramaki_position

    def apply_cards(self, played_cards: Sequence[Sequence[Card]]):
        for state, cards in zip(self.states, played_cards):
            state.apply_cards(cards)

    def apply_card(self, idx: int, card: Card):
        self.states[idx].apply_card(card)

    # -------------------------------------------------------------------------
    # Generic rules
    # -------------------------------------------------------------------------

    def _add_simple_points(self, points: List[int], points_fn: Callable[[PlayerScoreState], int]):
        for i, state in enumerate(self.states):
            points[i] += points_fn(state)

    def _add_most_fewest_points(self, points: List[int], payouts: Tuple[int, int],
                                accessor: Callable[[PlayerScoreState], int]):
        """Seats at the maximum get the first payout, seats at the minimum the second."""
        points_for_max, points_for_min = payouts
        counts = [accessor(state) for state in self.states]
        if not counts:
            return
        max_count = max(counts)
        min_count = min(counts)
        for i, count in enumerate(counts):
            if count == max_count:
                points[i] += points_for_max
            elif count == min_count:
                points[i] += points_for_min

    # -------------------------------------------------------------------------
    # Category rules
    # -------------------------------------------------------------------------

    def _add_nigiri_points(self, points: List[int]):
        self._add_simple_points(points, lambda state: state.nigiri_points)

    def _add_maki_points(self, points: List[int]):
        scores = [state.maki_score for state in self.states]
        max_score = max(scores, default=0)
        if max_score == 0:
            return
        maki_points = MAKI_POINTS_2_5_PLAYERS if len(self.states) <= 5 else MAKI_POINTS_6_8_PLAYERS

        second_score = max((s for s in scores if s != max_score), default=0)
        third_score = max((s for s in scores if s != max_score and s != second_score), default=0)

        for i, score in enumerate(scores):
            if score == 0:
                continue
            if score == max_score:
                points[i] += maki_points[0]
            elif score == second_score:
                points[i] += maki_points[1]
            elif score == third_score:
                points[i] += maki_points[2]

    def _add_temaki_points(self, points: List[int]):
        payouts = TEMAKI_2_PLAYERS if len(self.states) == 2 else TEMAKI_3_8_PLAYERS
        self._add_most_fewest_points(points, payouts, lambda state: state.temaki_count)

    def _add_uramaki_points(self, points: List[int], end_of_round: bool):
        # No payout table; only the position carry-over is tracked.
        pass

    def _add_dumpling_points(self, points: List[int]):
        self._add_simple_points(
            points, lambda state: DUMPLING_POINTS.get(state.dumpling_count, DUMPLING_MAX_POINTS))

    def _add_edamame_points(self, points: List[int]):
        players_with_edamame = sum(1 for state in self.states if state.edamame_count > 0)
        if players_with_edamame >= 5:
            points_per_edamame = 4
        else:
            points_per_edamame = players_with_edamame - 1
        self._add_simple_points(points, lambda state: state.edamame_count * points_per_edamame)

    def _add_eel_points(self, points: List[int]):
        def eel(state):
            if state.eel_count == 0:
                return 0
            return -3 if state.eel_count == 1 else 7
        self._add_simple_points(points, eel)

    def _add_onigiri_points(self, points: List[int]):
        def onigiri(state):
            shapes = len(state.onigiri_present)
            if shapes not in ONIGIRI_POINTS:
                raise InternalInvariantViolation(
                    f"Invalid onigiri shapes count: {shapes} for {state.onigiri_present}")
            return ONIGIRI_POINTS[shapes]
        self._add_simple_points(points, onigiri)

    def _add_tofu_points(self, points: List[int]):
        # 3 or more tofu spoil
        self._add_simple_points(points, lambda state: {1: 2, 2: 6}.get(state.tofu_count, 0))

    def _add_soy_sauce_points(self, points: List[int]):
        pass

    def _add_tea_points(self, points: List[int]):
        pass

    def _add_pudding_points(self, points: List[int]):
        payouts = PUDDING_2_PLAYERS if len(self.states) == 2 else PUDDING_3_8_PLAYERS
        self._add_most_fewest_points(points, payouts, lambda state: state.pudding_count)

    @staticmethod
    def get_points_for_fruit_count(count: int) -> int:
        return FRUIT_POINTS.get(count, FRUIT_MAX_POINTS)

    def _add_fruit_points(self, points: List[int]):
        self._add_simple_points(
            points,
            lambda state: sum(self.get_points_for_fruit_count(c) for c in state.fruits_counts))

    def calculate_points(self, menu: Menu, end_of_round: bool = True,
                         include_desserts: bool = True) -> List[int]:
        """
        Per-seat point deltas for this pass.

        Args:
            menu: Active menu; gates the Temaki, Pudding and Fruit rules
            end_of_round: Passed to the uramaki hook
            include_desserts: Score Ice Cream, Pudding and Fruit in this pass
        """
        points = [0] * len(self.states)

        self._add_nigiri_points(points)
        self._add_maki_points(points)
        if menu_has_kind(menu, CardKind.TEMAKI):
            self._add_temaki_points(points)
        self._add_uramaki_points(points, end_of_round)
        self._add_dumpling_points(points)
        self._add_edamame_points(points)
        self._add_eel_points(points)
        self._add_onigiri_points(points)
        self._add_simple_points(points, lambda state: state.miso_count * 3)
        self._add_simple_points(points, lambda state: state.sashimi_count // 3 * 10)
        self._add_simple_points(points, lambda state: state.tempura_count // 2 * 5)
        self._add_tofu_points(points)
        self._add_soy_sauce_points(points)
        self._add_simple_points(points, lambda state: state.taken_out_count * 2)
        self._add_tea_points(points)
        if include_desserts:
            self._add_simple_points(points, lambda state: state.ice_cream_count // 4 * 12)
            if menu_has_kind(menu, CardKind.PUDDING):
                self._add_pudding_points(points)
            if has_fruit(menu):
                self._add_fruit_points(points)

        return points

    def has_uramaki_scores(self) -> int:
        """Number of seats whose uramaki total reached the threshold"""
        return sum(1 for state in self.states if state.has_uramaki_score())
