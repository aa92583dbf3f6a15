"""JSON file persistence for the rule collection."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from proxyrules.rules.errors import RuleValidationError, RulesFormatError, RulesIOError
from proxyrules.rules.models import Rule
from proxyrules.rules.validation import validate_rule


class RulesPersistence(Protocol):
    def save(self, rules: Sequence[Rule]) -> None: ...

    def load(self) -> list[Rule]: ...


def dump_rules(rules: Sequence[Rule]) -> str:
    """Pretty-printed JSON array, one object per rule in order."""
    return json.dumps([r.model_dump(mode="json") for r in rules], indent=2, ensure_ascii=False)


def parse_rules(text: str) -> list[Rule]:
    """Parse and check a persisted document. Blank text is an empty collection.

    Raises RulesFormatError on malformed JSON, bad entries, ill-formed values
    or duplicates; a corrupt file is never silently treated as empty.
    """
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RulesFormatError(e) from e
    if not isinstance(data, list):
        raise RulesFormatError(f"expected a JSON array, got {type(data).__name__}")

    rules: list[Rule] = []
    seen: set[Rule] = set()
    for i, entry in enumerate(data):
        try:
            rule = Rule.model_validate(entry)
            validate_rule(rule)
        except ValidationError as e:
            raise RulesFormatError(f"entry {i}: {e.error_count()} validation error(s)") from e
        except RuleValidationError as e:
            raise RulesFormatError(f"entry {i}: {e}") from e
        if rule in seen:
            raise RulesFormatError(f"entry {i}: duplicate rule {rule.line()}")
        seen.add(rule)
        rules.append(rule)
    return rules


class JsonRulesFile:
    """Stores the rule list as a single JSON file, replaced atomically on save."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def save(self, rules: Sequence[Rule]) -> None:
        content = dump_rules(rules)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        except OSError as e:
            raise RulesIOError(e) from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException as e:
            Path(tmp).unlink(missing_ok=True)
            if isinstance(e, OSError):
                raise RulesIOError(e) from e
            raise

    def load(self) -> list[Rule]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise RulesIOError(e) from e
        return parse_rules(text)
