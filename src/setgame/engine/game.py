from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Protocol

from .actions import Action, DealAction, ResetAction, SelectCardAction
from .deck import Deck, generate_deck
from .rules import find_sets, is_set
from .table import Table, deal
from .types import Card, OccupiedSlot, Slot, Trio

Event = dict[str, object]


@dataclass(frozen=True)
class GameConfig:
    initial_deal: int = 12
    deal_batch: int = 3
    match_reward: int = 4
    mismatch_penalty: int = 2

    def __post_init__(self) -> None:
        if self.initial_deal < 0:
            raise ValueError("initial_deal must not be negative.")
        if self.deal_batch <= 0:
            raise ValueError("deal_batch must be positive.")
        if self.match_reward < 0 or self.mismatch_penalty < 0:
            raise ValueError("Score deltas must not be negative.")


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None
    dealt: list[Card] = field(default_factory=list)


@dataclass
class GameState:
    config: GameConfig
    seed: int | None
    rng: random.Random
    deck: Deck
    table: Table = field(default_factory=Table)
    matched: list[Trio] = field(default_factory=list)
    round_no: int = 0
    _score: int = 0
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def score(self) -> int:
        return self._score

    def adjust_score(self, delta: int) -> int:
        """Apply `delta`, flooring the score at zero. Returns the applied change."""
        before = self._score
        self._score = max(0, self._score + delta)
        return self._score - before


def _fresh_deck(seed: int | None, round_no: int) -> Deck:
    deck = generate_deck()
    # Unseeded games deal in generation order.
    if seed is not None:
        # Depends on (seed, round) only.
        deck.shuffle(random.Random(f"{seed}/{round_no}"))
    return deck


def _ignored(error: str) -> StepResult:
    return StepResult(ok=False, events=[], error=error)


def _change_score(state: GameState, delta: int) -> None:
    applied = state.adjust_score(delta)
    state.event_log.append({"type": "SCORE_CHANGED", "delta": applied, "score": state.score})


def _deal(state: GameState, amount: int) -> list[Card]:
    cards = deal(state.deck, state.table, amount)
    if cards:
        state.event_log.append(
            {
                "type": "CARDS_DEALT",
                "cards": [c.label() for c in cards],
                "deck_remaining": len(state.deck),
                "table_size": len(state.table),
            }
        )
    return cards


def _resolve_trio(state: GameState, indices: list[int]) -> None:
    trio = [state.table.card_at(i) for i in indices]
    assert all(c is not None for c in trio)
    a, b, c = trio  # type: ignore[misc]

    if is_set(a, b, c):
        resolved: list[Card] = []
        for i, card in zip(indices, trio):
            assert card is not None
            done = replace(card, selected=False, matched=True)
            state.table.put(i, done)
            resolved.append(done)
        state.matched.append((resolved[0], resolved[1], resolved[2]))
        state.event_log.append(
            {"type": "TRIO_MATCHED", "slots": list(indices), "cards": [x.label() for x in resolved]}
        )
        _change_score(state, state.config.match_reward)
        return

    for i, card in zip(indices, trio):
        assert card is not None
        state.table.put(i, replace(card, selected=False))
    state.event_log.append(
        {"type": "TRIO_MISMATCHED", "slots": list(indices), "cards": [x.label() for x in trio if x is not None]}
    )
    _change_score(state, -state.config.mismatch_penalty)


def _select_card(state: GameState, action: SelectCardAction) -> StepResult:
    index = action.index
    if index < 0 or index >= len(state.table):
        return _ignored("Invalid slot index.")
    card = state.table.card_at(index)
    if card is None:
        return _ignored("Slot is empty.")
    if card.matched:
        return _ignored("Card already matched.")

    # Pre-click selection, before anything is mutated.
    selected = state.table.selected_indices()
    toggled = replace(card, selected=not card.selected)

    start = len(state.event_log)
    dealt: list[Card] = []
    if len(selected) == 3:
        if index in selected:
            return _ignored("Cannot deselect a card from a pending trio.")
        _resolve_trio(state, selected)
    else:
        cleared = state.table.clear_matched()
        if cleared > 0:
            state.event_log.append({"type": "MATCHED_CLEARED", "count": cleared})
            dealt = _deal(state, state.config.deal_batch)

    state.table.put(index, toggled)
    state.event_log.append(
        {
            "type": "CARD_SELECTED" if toggled.selected else "CARD_DESELECTED",
            "slot": index,
            "card": toggled.label(),
        }
    )
    return StepResult(ok=True, events=state.event_log[start:], dealt=dealt)


def _deal_action(state: GameState, action: DealAction) -> StepResult:
    if action.amount <= 0:
        return _ignored("Deal amount must be positive.")
    if len(state.deck) < action.amount:
        return _ignored("Not enough cards in deck.")
    start = len(state.event_log)
    dealt = _deal(state, action.amount)
    return StepResult(ok=True, events=state.event_log[start:], dealt=dealt)


def _reset(state: GameState, action: ResetAction) -> StepResult:
    start = len(state.event_log)
    state.round_no += 1
    state.deck = _fresh_deck(state.seed, state.round_no)
    state.adjust_score(-state.score)
    state.matched = []
    state.table.clear()
    state.event_log.append({"type": "GAME_RESET", "deck_size": len(state.deck)})
    return StepResult(ok=True, events=state.event_log[start:])


def step(state: GameState, action: Action) -> StepResult:
    """Apply a single action to the game state.

    Illegal actions leave the state untouched and come back with
    `ok=False` and the reason in `error`. Deterministic for a given
    (seed, action sequence).
    """
    state.action_log.append(action)

    if isinstance(action, SelectCardAction):
        return _select_card(state, action)
    if isinstance(action, DealAction):
        return _deal_action(state, action)
    if isinstance(action, ResetAction):
        return _reset(state, action)
    return _ignored("Unknown action.")


def new_game(seed: int | None = None, config: GameConfig | None = None) -> GameState:
    """Fresh game with a full deck and an empty table."""
    cfg = config or GameConfig()
    rng = random.Random(seed)
    return GameState(config=cfg, seed=seed, rng=rng, deck=_fresh_deck(seed, 0))


def start_game(seed: int | None = None, config: GameConfig | None = None) -> GameState:
    state = new_game(seed=seed, config=config)
    if state.config.initial_deal > 0:
        step(state, DealAction(amount=state.config.initial_deal))
    return state


def replay(
    actions: Iterable[Action],
    seed: int | None = None,
    config: GameConfig | None = None,
) -> GameState:
    state = new_game(seed=seed, config=config)
    for a in actions:
        step(state, a)
    return state


def playable_indices(state: GameState) -> list[int]:
    """Occupied slots whose card is neither selected nor matched."""
    out: list[int] = []
    for i in state.table.occupied_indices():
        card = state.table.card_at(i)
        if card is not None and not card.selected and not card.matched:
            out.append(i)
    return out


def find_set_indices(state: GameState, indices: list[int] | None = None) -> list[tuple[int, int, int]]:
    if indices is None:
        indices = playable_indices(state)
    by_card: dict[Card, int] = {}
    for i in indices:
        card = state.table.card_at(i)
        if card is not None:
            by_card[card] = i
    return [(by_card[a], by_card[b], by_card[c]) for a, b, c in find_sets(list(by_card))]


def hint(state: GameState) -> tuple[int, int, int] | None:
    found = find_set_indices(state)
    return found[0] if found else None


def is_over(state: GameState) -> bool:
    """No set left among unmatched table cards and the deck cannot refill."""
    if len(state.deck) >= state.config.deal_batch:
        return False
    live: list[int] = []
    for i in state.table.occupied_indices():
        card = state.table.card_at(i)
        if card is not None and not card.matched:
            live.append(i)
    return not find_set_indices(state, live)


def _copy_slot(slot: Slot) -> Slot:
    if isinstance(slot, OccupiedSlot):
        return OccupiedSlot(replace(slot.card))
    return slot


class TelemetrySink(Protocol):
    def log(self, event_type: str, payload: Mapping[str, object]) -> None: ...


class SetGame:
    """Method-style facade over a single `GameState`.

    This is the surface a UI works against: it calls `select_card`, `deal`
    and `reset`, and reads `deck`, `table`, `matched` and `score`.
    """

    def __init__(
        self,
        seed: int | None = None,
        config: GameConfig | None = None,
        telemetry: TelemetrySink | None = None,
    ) -> None:
        self._state = new_game(seed=seed, config=config)
        self._telemetry = telemetry

    @property
    def state(self) -> GameState:
        return self._state

    def _apply(self, action: Action) -> StepResult:
        res = step(self._state, action)
        if res.ok and self._telemetry is not None:
            for ev in res.events:
                payload = {k: v for k, v in ev.items() if k != "type"}
                self._telemetry.log(str(ev["type"]), payload)
        return res

    def select_card(self, index: int) -> StepResult:
        return self._apply(SelectCardAction(index=index))

    def deal(self, amount: int = 3) -> list[Card]:
        return [replace(c) for c in self._apply(DealAction(amount=amount)).dealt]

    def reset(self) -> StepResult:
        return self._apply(ResetAction())

    def hint(self) -> tuple[int, int, int] | None:
        return hint(self._state)

    @property
    def deck(self) -> tuple[Card, ...]:
        return tuple(replace(c) for c in self._state.deck)

    @property
    def table(self) -> tuple[Slot, ...]:
        # Copies; flags only change through `step`.
        return tuple(_copy_slot(s) for s in self._state.table.slots)

    @property
    def matched(self) -> tuple[Trio, ...]:
        return tuple((replace(a), replace(b), replace(c)) for a, b, c in self._state.matched)

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def is_over(self) -> bool:
        return is_over(self._state)
