from __future__ import annotations

from dataclasses import dataclass, field

from .deck import Deck
from .types import Card, EmptySlot, OccupiedSlot, Slot


@dataclass
class Table:
    slots: list[Slot] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.slots)

    def card_at(self, index: int) -> Card | None:
        if index < 0 or index >= len(self.slots):
            return None
        slot = self.slots[index]
        if isinstance(slot, OccupiedSlot):
            return slot.card
        return None

    def put(self, index: int, card: Card) -> None:
        self.slots[index] = OccupiedSlot(card)

    def occupied_indices(self) -> list[int]:
        return [i for i, s in enumerate(self.slots) if isinstance(s, OccupiedSlot)]

    def empty_indices(self) -> list[int]:
        return [i for i, s in enumerate(self.slots) if isinstance(s, EmptySlot)]

    def selected_indices(self) -> list[int]:
        out: list[int] = []
        for i, s in enumerate(self.slots):
            if isinstance(s, OccupiedSlot) and s.card.selected and not s.card.matched:
                out.append(i)
        return out

    def matched_indices(self) -> list[int]:
        return [i for i, s in enumerate(self.slots) if isinstance(s, OccupiedSlot) and s.card.matched]

    def cards(self) -> list[Card]:
        return [s.card for s in self.slots if isinstance(s, OccupiedSlot)]

    def place(self, cards: list[Card]) -> list[int]:
        """Fill empty slots in index order, then append the rest as new slots.

        Returns the slot index each card landed in.
        """
        pending = list(cards)
        placed: list[int] = []
        for i in self.empty_indices():
            if not pending:
                break
            self.slots[i] = OccupiedSlot(pending.pop(0))
            placed.append(i)
        for card in pending:
            self.slots.append(OccupiedSlot(card))
            placed.append(len(self.slots) - 1)
        return placed

    def clear_matched(self) -> int:
        """Empty every slot holding a matched card. Returns how many were cleared."""
        cleared = 0
        for i in self.matched_indices():
            self.slots[i] = EmptySlot()
            cleared += 1
        return cleared

    def clear(self) -> None:
        self.slots = []


def deal(deck: Deck, table: Table, amount: int = 3) -> list[Card]:
    """Move `amount` cards from the deck onto the table.

    All-or-nothing: a non-positive amount or a deck smaller than `amount`
    deals nothing and returns an empty list.
    """
    if amount <= 0:
        return []
    if len(deck) < amount:
        return []
    cards = deck.draw(amount)
    table.place(cards)
    return cards
