from __future__ import annotations

from pathlib import Path

import pytest

from setgame.cli import main
from setgame.engine.ai import AISpec, ai_take_turn, play_out
from setgame.engine.game import new_game, start_game
from setgame.engine.rules import is_set
from setgame.services.telemetry import TelemetryService


def _all_cards(state) -> list[object]:
    out: list[object] = list(state.deck)
    out.extend(c for c in state.table.cards() if not c.matched)
    out.extend(c for trio in state.matched for c in trio)
    return out


def test_perfect_autoplayer_only_scores_sets() -> None:
    state = start_game(seed=7)
    turns = play_out(state, AISpec(), max_turns=500)
    assert turns > 0
    assert len(state.matched) > 0
    assert all(is_set(*trio) for trio in state.matched)
    assert state.score == 4 * len(state.matched)
    assert len(state.deck) == 0

    cards = _all_cards(state)
    assert len(cards) == 81
    assert len(set(cards)) == 81


def test_sloppy_autoplayer_keeps_score_non_negative() -> None:
    state = start_game(seed=3)
    spec = AISpec(mistake_rate=0.8)
    for _ in range(60):
        if not ai_take_turn(state, spec):
            break
        assert state.score >= 0
    assert len(set(_all_cards(state))) == 81


def test_autoplayer_deals_into_an_empty_table() -> None:
    state = new_game(seed=2)
    assert ai_take_turn(state)
    assert len(state.table) == 3


def test_cli_runs_games(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "telemetry.jsonl"
    rc = main(["--games", "2", "--seed", "10", "--telemetry", str(path)])
    assert rc == 0

    out = capsys.readouterr().out.strip().splitlines()
    assert len(out) == 2
    assert out[0].startswith("game=0 seed=10 ")
    assert out[1].startswith("game=1 seed=11 ")

    records = TelemetryService(path).read_all()
    assert [r["type"] for r in records] == ["game_summary", "game_summary"]
    assert records[1]["payload"]["seed"] == 11
