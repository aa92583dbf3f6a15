"""Shared fixtures for proxyrules tests."""

import json
from pathlib import Path

import pytest

from proxyrules.rules.models import Rule, RuleType


def _write_rules(path: Path, entries: list[dict]) -> Path:
    """Write a list of rule dicts as a pretty-printed JSON array."""
    path.write_text(json.dumps(entries, indent=2))
    return path


@pytest.fixture
def rules_path(tmp_path: Path) -> Path:
    """Path to a not-yet-existing rules file."""
    return tmp_path / "rules.json"


@pytest.fixture
def sample_rules() -> list[Rule]:
    return [
        Rule(rule_type=RuleType.IP_CIDR, value="192.168.0.0/16"),
        Rule(rule_type=RuleType.DOMAIN_SUFFIX, value="example.com"),
        Rule(rule_type=RuleType.DST_PORT, value="80-443"),
        Rule(rule_type=RuleType.PROCESS_NAME, value="curl"),
    ]


@pytest.fixture
def populated_rules_file(rules_path: Path) -> Path:
    """Rules file with two valid entries."""
    return _write_rules(
        rules_path,
        [
            {"rule_type": "DOMAIN", "value": "example.com"},
            {"rule_type": "IP-CIDR6", "value": "2001:db8::/32"},
        ],
    )
