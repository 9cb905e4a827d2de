from __future__ import annotations

import itertools
from dataclasses import dataclass

from .actions import DealAction, SelectCardAction
from .game import GameState, find_set_indices, is_over, playable_indices, step


@dataclass(frozen=True)
class AISpec:
    """Simple auto-player tuning.

    mistake_rate: chance per turn of clicking an arbitrary trio instead of
    a real set (0.0 never errs, 1.0 always guesses).
    """

    mistake_rate: float = 0.0


def _clear_partial_selection(state: GameState) -> None:
    # Pending trios (3 selected) resolve on the next click, partial ones are undone.
    selected = state.table.selected_indices()
    if 0 < len(selected) < 3:
        for i in selected:
            step(state, SelectCardAction(index=i))


def _pick_trio(state: GameState, spec: AISpec) -> tuple[int, int, int] | None:
    candidates = playable_indices(state)
    if len(candidates) < 3:
        return None

    if spec.mistake_rate > 0 and state.rng.random() < spec.mistake_rate:
        trios = list(itertools.combinations(candidates, 3))
        a, b, c = trios[state.rng.randrange(len(trios))]
        return (a, b, c)

    found = find_set_indices(state, candidates)
    if not found:
        return None
    return found[0]


def ai_take_turn(state: GameState, spec: AISpec | None = None) -> bool:
    """Click one trio, or deal more cards when the table has no set.

    Uses the engine RNG (`state.rng`) so it stays deterministic for a given
    seed. Returns False when no further progress is possible.
    """
    spec = spec or AISpec()
    _clear_partial_selection(state)

    trio = _pick_trio(state, spec)
    if trio is None:
        res = step(state, DealAction(amount=state.config.deal_batch))
        if res.ok:
            return True
        # Table exhausted; resolve a trio still waiting on its fourth click.
        pending = state.table.selected_indices()
        rest = playable_indices(state)
        if len(pending) == 3 and rest:
            step(state, SelectCardAction(index=rest[0]))
            return not is_over(state)
        return False

    for i in trio:
        step(state, SelectCardAction(index=i))
    return True


def play_out(state: GameState, spec: AISpec | None = None, max_turns: int = 200) -> int:
    """Run the auto-player until it stalls or `max_turns` is reached. Returns turns taken."""
    turns = 0
    while turns < max_turns:
        if not ai_take_turn(state, spec):
            break
        turns += 1
    return turns
