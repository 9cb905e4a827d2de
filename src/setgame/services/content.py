from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from jsonschema import Draft202012Validator

from setgame.engine.game import GameConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def parse_rules(raw: object) -> GameConfig:
    if not isinstance(raw, dict):
        raise ContentError("rules file must be an object")
    rules = raw.get("rules")
    if not isinstance(rules, dict):
        raise ContentError("rules must be an object")
    try:
        return GameConfig(
            initial_deal=_require_int(rules, "initial_deal"),
            deal_batch=_require_int(rules, "deal_batch"),
            match_reward=_require_int(rules, "match_reward"),
            mismatch_penalty=_require_int(rules, "mismatch_penalty"),
        )
    except ValueError as e:
        raise ContentError(f"Invalid rules: {e}") from e


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_rules(self, filename: str = "rules.json") -> GameConfig:
        path = self._data_dir / filename
        schema = _load_json(self._schema_dir / "rules.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        return parse_rules(raw)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_rules()
