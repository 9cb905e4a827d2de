"""Deterministic, headless rules engine for Set.

IMPORTANT: This package must never import a UI toolkit.
"""

from .actions import DealAction, ResetAction, SelectCardAction
from .game import GameConfig, GameState, SetGame, StepResult, new_game, start_game, step
from .rules import find_sets, is_set, third_card
from .types import Card, Combination, EmptySlot, OccupiedSlot

__all__ = [
    "Card",
    "Combination",
    "DealAction",
    "EmptySlot",
    "GameConfig",
    "GameState",
    "OccupiedSlot",
    "ResetAction",
    "SelectCardAction",
    "SetGame",
    "StepResult",
    "find_sets",
    "is_set",
    "new_game",
    "start_game",
    "step",
    "third_card",
]
