from __future__ import annotations

import itertools
from collections.abc import Sequence

from .types import AXES, Card, Combination, Trio


def is_set(a: Card, b: Card, c: Card) -> bool:
    """True when, on every axis, the three values are all equal or all different."""
    for values in zip(a.values(), b.values(), c.values()):
        if len(set(values)) == 2:
            return False
    return True


def third_card(a: Card, b: Card) -> Card:
    """Return the only card that completes a set with `a` and `b`."""
    out: list[object] = []
    for axis, va, vb in zip(AXES, a.values(), b.values()):
        if va == vb:
            out.append(va)
        else:
            out.append(next(v for v in axis if v != va and v != vb))
    number, color, symbol, shading = out
    return Card(Combination(number=number, color=color, symbol=symbol, shading=shading))  # type: ignore[arg-type]


def find_sets(cards: Sequence[Card]) -> list[Trio]:
    """All sets among `cards`, each trio in the order the cards were given."""
    found: list[Trio] = []
    for a, b, c in itertools.combinations(cards, 3):
        if is_set(a, b, c):
            found.append((a, b, c))
    return found
