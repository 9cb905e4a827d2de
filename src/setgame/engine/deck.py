from __future__ import annotations

import itertools
import random
from collections.abc import Iterable, Iterator, Sequence

from .types import AXES, Card, Combination


class DuplicateCardError(ValueError):
    pass


class Deck:
    """Cards not yet dealt, in draw order. Rejects duplicate combinations."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: list[Card] = []
        self._seen: set[Combination] = set()
        for card in cards:
            self.insert(card)

    def insert(self, card: Card) -> None:
        if card.combination in self._seen:
            raise DuplicateCardError(f"Card already in deck: {card.label()}")
        self._seen.add(card.combination)
        self._cards.append(card)

    def draw(self, amount: int) -> list[Card]:
        """Remove and return the first `amount` cards.

        Callers check `len(deck)` first; drawing more than the deck holds
        returns what is left.
        """
        drawn = self._cards[:amount]
        del self._cards[:amount]
        for card in drawn:
            self._seen.discard(card.combination)
        return drawn

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __contains__(self, card: object) -> bool:
        if not isinstance(card, Card):
            return False
        return card.combination in self._seen


def build_combinations(axes: Sequence[Sequence[object]]) -> Iterator[tuple[object, ...]]:
    # First axis varies slowest.
    return itertools.product(*axes)


def generate_deck() -> Deck:
    """Build the full 81-card deck, one card per combination of the four axes."""
    deck = Deck()
    for number, color, symbol, shading in build_combinations(AXES):
        deck.insert(
            Card(Combination(number=number, color=color, symbol=symbol, shading=shading))  # type: ignore[arg-type]
        )
    return deck
