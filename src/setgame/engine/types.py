from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

Number = Literal[1, 2, 3]
Color = Literal["red", "green", "blue"]
Symbol = Literal["oval", "squiggle", "diamond"]
Shading = Literal["solid", "striped", "open"]

NUMBERS: tuple[Number, ...] = (1, 2, 3)
COLORS: tuple[Color, ...] = ("red", "green", "blue")
SYMBOLS: tuple[Symbol, ...] = ("oval", "squiggle", "diamond")
SHADINGS: tuple[Shading, ...] = ("solid", "striped", "open")

# Number outermost, Shading innermost.
AXES: tuple[Sequence[object], ...] = (NUMBERS, COLORS, SYMBOLS, SHADINGS)
AXIS_NAMES: tuple[str, ...] = ("number", "color", "symbol", "shading")


@dataclass(frozen=True)
class Combination:
    number: Number
    color: Color
    symbol: Symbol
    shading: Shading

    def values(self) -> tuple[object, ...]:
        return (self.number, self.color, self.symbol, self.shading)


@dataclass
class Card:
    """A card on the deck, table or in the matched history.

    Identity is the combination alone; the `selected`/`matched` flags are
    transient table state and never take part in equality or hashing.
    """

    combination: Combination
    selected: bool = field(default=False, compare=False)
    matched: bool = field(default=False, compare=False)

    def __hash__(self) -> int:
        return hash(self.combination)

    @staticmethod
    def of(number: Number, color: Color, symbol: Symbol, shading: Shading) -> "Card":
        return Card(Combination(number=number, color=color, symbol=symbol, shading=shading))

    def values(self) -> tuple[object, ...]:
        return self.combination.values()

    def label(self) -> str:
        return " ".join(str(v) for v in self.values())


@dataclass(frozen=True)
class EmptySlot:
    pass


@dataclass(frozen=True)
class OccupiedSlot:
    card: Card


Slot = EmptySlot | OccupiedSlot

Trio = tuple[Card, Card, Card]
