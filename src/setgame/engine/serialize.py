from __future__ import annotations


from .actions import Action, DealAction, ResetAction, SelectCardAction
from .game import GameState
from .types import Card, OccupiedSlot, Slot


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, SelectCardAction):
        return {"type": "select", "index": a.index}
    if isinstance(a, DealAction):
        return {"type": "deal", "amount": a.amount}
    if isinstance(a, ResetAction):
        return {"type": "reset"}
    # should be unreachable
    return {"type": "unknown"}


def card_to_dict(c: Card) -> dict[str, object]:
    return {
        "number": c.combination.number,
        "color": c.combination.color,
        "symbol": c.combination.symbol,
        "shading": c.combination.shading,
        "selected": c.selected,
        "matched": c.matched,
    }


def _slot_to_dict(s: Slot) -> dict[str, object] | None:
    if isinstance(s, OccupiedSlot):
        return card_to_dict(s.card)
    return None


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current game state."""
    return {
        "seed": state.seed,
        "score": state.score,
        "deck": [c.label() for c in state.deck],
        "table": [_slot_to_dict(s) for s in state.table.slots],
        "matched": [[c.label() for c in trio] for trio in state.matched],
        "action_log": [action_to_dict(a) for a in state.action_log],
    }
