from __future__ import annotations

import itertools
import random

from setgame.engine.deck import generate_deck
from setgame.engine.rules import find_sets, is_set, third_card
from setgame.engine.types import Card


def test_all_different_on_every_axis_is_a_set() -> None:
    a = Card.of(1, "red", "oval", "solid")
    b = Card.of(2, "green", "squiggle", "striped")
    c = Card.of(3, "blue", "diamond", "open")
    assert is_set(a, b, c)


def test_two_equal_one_different_breaks_the_set() -> None:
    a = Card.of(1, "red", "oval", "solid")
    b = Card.of(1, "green", "oval", "solid")
    c = Card.of(1, "blue", "squiggle", "solid")
    assert not is_set(a, b, c)


def test_mixed_same_and_different_axes() -> None:
    a = Card.of(2, "red", "oval", "solid")
    b = Card.of(2, "green", "oval", "striped")
    c = Card.of(2, "blue", "oval", "open")
    assert is_set(a, b, c)


def test_flags_do_not_affect_the_predicate() -> None:
    a = Card.of(1, "red", "oval", "solid")
    b = Card.of(2, "green", "squiggle", "striped")
    c = Card.of(3, "blue", "diamond", "open")
    a.selected = True
    c.matched = True
    assert is_set(a, b, c)


def test_is_set_symmetric_under_permutation() -> None:
    cards = list(generate_deck())
    random.Random(3).shuffle(cards)
    sample = cards[:15]
    for trio in itertools.combinations(sample, 3):
        results = {is_set(*p) for p in itertools.permutations(trio)}
        assert len(results) == 1


def test_is_set_matches_per_axis_definition() -> None:
    cards = list(generate_deck())
    random.Random(8).shuffle(cards)
    for a, b, c in itertools.combinations(cards[:20], 3):
        expected = all(len({x, y, z}) in (1, 3) for x, y, z in zip(a.values(), b.values(), c.values()))
        assert is_set(a, b, c) == expected


def test_full_deck_contains_1080_sets() -> None:
    assert len(find_sets(list(generate_deck()))) == 1080


def test_third_card_completes_any_pair() -> None:
    cards = list(generate_deck())
    for a, b in itertools.combinations(cards[:27], 2):
        c = third_card(a, b)
        assert c != a and c != b
        assert is_set(a, b, c)


def test_find_sets_keeps_given_order() -> None:
    a = Card.of(1, "red", "oval", "solid")
    b = Card.of(2, "green", "squiggle", "striped")
    filler = Card.of(1, "red", "oval", "striped")
    c = Card.of(3, "blue", "diamond", "open")
    assert find_sets([a, b, filler, c]) == [(a, b, c)]
    assert find_sets([a, b, filler]) == []
