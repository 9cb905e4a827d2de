from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectCardAction:
    index: int


@dataclass(frozen=True)
class DealAction:
    amount: int = 3


@dataclass(frozen=True)
class ResetAction:
    pass


Action = SelectCardAction | DealAction | ResetAction
