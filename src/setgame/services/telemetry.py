from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from setgame.engine.game import GameState


@dataclass
class TelemetryService:
    """Append-only JSON Lines log of game events."""

    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_game_summary(self, state: GameState, *, game_id: int) -> None:
        self.log(
            "game_summary",
            {
                "game_id": game_id,
                "seed": state.seed,
                "score": state.score,
                "sets_found": len(state.matched),
                "deck_remaining": len(state.deck),
                "actions": len(state.action_log),
            },
        )

    def read_all(self) -> list[dict[str, object]]:
        if not self.path.exists():
            return []
        out: list[dict[str, object]] = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if line.strip():
                out.append(json.loads(line))
        return out
