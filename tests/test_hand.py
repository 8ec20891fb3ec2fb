"""Tests for sushi_sim.hand module (CardSet and HandsView)."""

import random
import pytest
from sushi_sim.cards import Card, CardKind, MENUS, build_menu, dessert_cards_per_round, maki, nigiri
from sushi_sim.errors import ConfigurationError, InternalInvariantViolation
from sushi_sim.hand import CardSet, HandsView, get_wrapped


def _entries_total(card_set):
    return sum(count for _, count in card_set)


def test_card_set_starts_empty():
    card_set = CardSet()
    assert len(card_set) == 0
    assert list(card_set) == []
    assert card_set.flatten() == []


def test_len_matches_entries_through_add_and_remove():
    """Total count always equals the sum of entry counts."""
    rng = random.Random(11)
    card_set = CardSet()
    pool = [nigiri(1), nigiri(2), maki(3), Card(CardKind.WASABI)]
    for _ in range(300):
        card = rng.choice(pool)
        if rng.random() < 0.6 or not card_set.contains_card(card):
            card_set.add_cards(card, rng.randint(1, 3))
        else:
            card_set.remove_card(card)
        assert len(card_set) == _entries_total(card_set)
        assert all(count >= 1 for _, count in card_set)


def test_remove_last_copy_drops_entry():
    card_set = CardSet().with_cards(nigiri(2), 2)
    card_set.remove_card(nigiri(2))
    assert card_set.contains_card(nigiri(2))
    assert card_set.count_of(nigiri(2)) == 1
    card_set.remove_card(nigiri(2))
    assert not card_set.contains_card(nigiri(2))
    assert nigiri(2) not in card_set
    assert len(card_set) == 0
    assert list(card_set) == []


def test_remove_absent_card_raises():
    card_set = CardSet().with_cards(nigiri(1), 1)
    with pytest.raises(InternalInvariantViolation):
        card_set.remove_card(nigiri(3))
    card_set.remove_card(nigiri(1))
    with pytest.raises(InternalInvariantViolation):
        card_set.remove_card(nigiri(1))


def test_add_card_and_chaining():
    card_set = CardSet()
    card_set.add_card(maki(1)).add_card(maki(1)).add_cards(maki(2), 3)
    assert len(card_set) == 5
    assert card_set.count_of(maki(1)) == 2
    assert card_set.count_of(maki(2)) == 3


def test_add_zero_cards_stores_nothing():
    card_set = CardSet().with_cards(Card(CardKind.TEA), 0)
    assert len(card_set) == 0
    assert not card_set.contains_card(Card(CardKind.TEA))


def test_flatten_repeats_each_card():
    card_set = CardSet().with_cards(nigiri(1), 2).with_cards(Card(CardKind.TOFU), 3)
    flat = card_set.flatten()
    assert len(flat) == 5
    assert flat.count(nigiri(1)) == 2
    assert flat.count(Card(CardKind.TOFU)) == 3


def test_card_set_equality():
    a = CardSet().with_cards(nigiri(1), 2).with_cards(maki(1), 1)
    b = CardSet().with_cards(maki(1), 1).with_cards(nigiri(1), 2)
    assert a == b
    b.remove_card(nigiri(1))
    assert a != b


def test_random_card_empty_returns_none():
    assert CardSet().random_card(random.Random(1)) is None


def test_random_card_single_kind():
    card_set = CardSet().with_cards(Card(CardKind.EEL), 4)
    rng = random.Random(3)
    assert all(card_set.random_card(rng) == Card(CardKind.EEL) for _ in range(20))


def test_random_card_is_weighted_by_count():
    """A x3 and B x1 should give A about 75% of the time."""
    a = nigiri(3)
    b = Card(CardKind.WASABI)
    card_set = CardSet().with_cards(a, 3).with_cards(b, 1)
    rng = random.Random(7)
    draws = 20000
    hits = sum(1 for _ in range(draws) if card_set.random_card(rng) == a)
    assert hits / draws == pytest.approx(0.75, abs=0.02)


def test_random_card_is_reproducible_with_seed():
    card_set = CardSet().with_cards(nigiri(1), 2).with_cards(maki(2), 5).with_cards(Card(CardKind.TEA), 1)
    first = [card_set.random_card(random.Random(5)) for _ in range(3)]
    second = [card_set.random_card(random.Random(5)) for _ in range(3)]
    assert first == second


def test_from_menu_uses_print_counts():
    deck = CardSet.from_menu(MENUS["my_first_meal"], 4, 1)
    # nigiri 12 + maki 12 + tempura 8 + sashimi 8 + miso 8 + wasabi 3 + tea 3 + ice cream 5
    assert len(deck) == 59
    assert deck.count_of(nigiri(2)) == 5
    assert deck.count_of(Card(CardKind.GREEN_TEA_ICE_CREAM)) == 5
    late = CardSet.from_menu(MENUS["my_first_meal"], 4, 3)
    assert late.count_of(Card(CardKind.GREEN_TEA_ICE_CREAM)) == 2


def test_from_menu_order_is_catalog_order():
    deck = CardSet.from_menu(MENUS["my_first_meal"], 2, 1)
    cards = [card for card, _ in deck]
    assert cards == sorted(cards)


def test_from_menu_deals_round_fruit_count():
    """Fruit joins the deck at the round's dessert count, not the full fruit deck."""
    menu = MENUS["sushi_go"] | build_menu(CardKind.FRUIT)
    for round_number in (1, 2, 3):
        deck = CardSet.from_menu(menu, 4, round_number, random.Random(round_number))
        fruit_cards = sum(count for card, count in deck if card.kind == CardKind.FRUIT)
        assert fruit_cards == dessert_cards_per_round(4, round_number)


def test_from_menu_fruit_needs_rng():
    menu = build_menu(nigiri(1), CardKind.FRUIT)
    with pytest.raises(ConfigurationError):
        CardSet.from_menu(menu, 4, 1)


def test_from_menu_bad_payload_is_configuration_error():
    """Cards are priced before they are sorted."""
    menu = build_menu(maki(1), Card(CardKind.MAKI, "big"))
    with pytest.raises(ConfigurationError):
        CardSet.from_menu(menu, 4, 1)


def test_draw_removes_cards():
    card_set = CardSet().with_cards(nigiri(1), 2).with_cards(maki(2), 1)
    drawn = card_set.draw(2, random.Random(4))
    assert len(drawn) == 2
    assert len(card_set) == 1
    assert card_set.draw(5, random.Random(4)) != []
    assert len(card_set) == 0
    assert card_set.draw(1, random.Random(4)) == []


def test_random_card_requires_rng():
    with pytest.raises(TypeError):
        CardSet().with_cards(nigiri(1), 1).random_card()


def test_get_wrapped():
    items = [1, 2, 3]
    assert get_wrapped(items, 0) == 1
    assert get_wrapped(items, 1) == 2
    assert get_wrapped(items, 2) == 3
    assert get_wrapped(items, 3) == 1
    assert get_wrapped(items, 4) == 2
    assert get_wrapped(items, 5) == 3

    assert get_wrapped(items, -1) == 3
    assert get_wrapped(items, -2) == 2
    assert get_wrapped(items, -3) == 1
    assert get_wrapped(items, -4) == 3
    assert get_wrapped(items, -5) == 2
    assert get_wrapped(items, -6) == 1


@pytest.mark.parametrize("players", range(2, 9))
def test_hands_view_read_and_write_hit_same_slot(players):
    hands = [CardSet() for _ in range(players)]
    for turn in range(-players, 3 * players):
        view = HandsView(hands, turn)
        for seat in range(players):
            expected = hands[(turn + seat) % players]
            assert view.get_hand(seat) is expected
            assert view.get_hand_mut(seat) is expected


@pytest.mark.parametrize("players", range(2, 9))
def test_hands_view_visits_every_hand(players):
    """Over n turns each seat sees each physical hand exactly once."""
    hands = [CardSet() for _ in range(players)]
    for seat in range(players):
        seen = [HandsView(hands, turn).slot(seat) for turn in range(players)]
        assert sorted(seen) == list(range(players))
    for turn in range(players):
        view = HandsView(hands, turn)
        assert sorted(view.slot(seat) for seat in range(players)) == list(range(players))


def test_hands_view_mutation_is_visible_through_view():
    hands = [CardSet().with_cards(nigiri(i), 1) for i in (1, 2, 3)]
    view = HandsView(hands, 1)
    view.get_hand_mut(2).remove_card(nigiri(1))
    assert len(hands[0]) == 0
    assert len(view.get_hand(2)) == 0
