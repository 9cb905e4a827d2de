from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from setgame.engine.ai import AISpec, play_out
from setgame.engine.game import start_game
from setgame.paths import get_paths
from setgame.services.content import ContentService
from setgame.services.telemetry import TelemetryService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="setgame-sim", description="Auto-play headless Set games.")
    parser.add_argument("--games", type=int, default=1)
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first game; later games add 1 each.")
    parser.add_argument("--mistake-rate", type=float, default=0.0)
    parser.add_argument("--max-turns", type=int, default=200)
    parser.add_argument("--rules", type=Path, default=None, help="Rules JSON file (defaults to the bundled one).")
    parser.add_argument("--telemetry", type=Path, default=None, help="JSON Lines file to append game summaries to.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    paths = get_paths()

    if args.rules is not None:
        content = ContentService(data_dir=args.rules.parent, schema_dir=paths.schema_dir)
        config = content.load_rules(args.rules.name)
    else:
        config = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir).load_rules()

    telemetry = TelemetryService(args.telemetry) if args.telemetry is not None else None
    spec = AISpec(mistake_rate=args.mistake_rate)

    for n in range(args.games):
        seed = args.seed + n
        state = start_game(seed=seed, config=config)
        turns = play_out(state, spec, max_turns=args.max_turns)
        print(
            f"game={n} seed={seed} turns={turns} score={state.score} "
            f"sets={len(state.matched)} deck={len(state.deck)}"
        )
        if telemetry is not None:
            telemetry.log_game_summary(state, game_id=n)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
