"""Tests for rules/persistence.py — JSON rules file save/load."""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from proxyrules.rules.errors import RulesFormatError, RulesIOError
from proxyrules.rules.models import Rule, RuleType
from proxyrules.rules.persistence import JsonRulesFile, dump_rules, parse_rules


class TestDumpRules:
    def test_pretty_printed_array(self):
        rules = [Rule(rule_type=RuleType.IP_CIDR, value="10.0.0.0/8")]
        text = dump_rules(rules)
        assert text == '[\n  {\n    "rule_type": "IP-CIDR",\n    "value": "10.0.0.0/8"\n  }\n]'

    def test_empty(self):
        assert json.loads(dump_rules([])) == []

    def test_non_ascii_kept(self):
        rules = [Rule(rule_type=RuleType.PROCESS_NAME, value="浏览器")]
        assert "浏览器" in dump_rules(rules)


class TestParseRules:
    def test_blank_is_empty(self):
        assert parse_rules("") == []
        assert parse_rules("  \n") == []

    def test_malformed_json(self):
        with pytest.raises(RulesFormatError) as exc_info:
            parse_rules("[{not json")
        assert str(exc_info.value).startswith("JSON error:")

    def test_not_an_array(self):
        with pytest.raises(RulesFormatError, match="expected a JSON array"):
            parse_rules('{"rule_type": "DOMAIN", "value": "example.com"}')

    def test_unknown_rule_type(self):
        with pytest.raises(RulesFormatError, match="entry 0"):
            parse_rules('[{"rule_type": "BOGUS", "value": "x"}]')

    def test_missing_field(self):
        with pytest.raises(RulesFormatError, match="entry 1"):
            parse_rules('[{"rule_type": "MATCH", "value": "x"}, {"rule_type": "MATCH"}]')

    def test_ill_formed_value(self):
        with pytest.raises(RulesFormatError, match="Invalid port number: 99999"):
            parse_rules('[{"rule_type": "DST-PORT", "value": "99999"}]')

    def test_duplicate_entries(self):
        entry = {"rule_type": "DOMAIN", "value": "example.com"}
        with pytest.raises(RulesFormatError, match="duplicate"):
            parse_rules(json.dumps([entry, entry]))


class TestJsonRulesFile:
    def test_missing_file_loads_empty(self, rules_path: Path):
        assert not rules_path.exists()
        assert JsonRulesFile(rules_path).load() == []

    def test_round_trip_preserves_order(self, rules_path: Path, sample_rules: list[Rule]):
        store = JsonRulesFile(rules_path)
        store.save(sample_rules)
        assert store.load() == sample_rules

    def test_round_trip_reversed_order(self, rules_path: Path, sample_rules: list[Rule]):
        store = JsonRulesFile(rules_path)
        store.save(list(reversed(sample_rules)))
        assert store.load() == list(reversed(sample_rules))

    def test_save_overwrites(self, rules_path: Path, sample_rules: list[Rule]):
        store = JsonRulesFile(rules_path)
        store.save(sample_rules)
        store.save(sample_rules[:1])
        assert store.load() == sample_rules[:1]

    def test_save_creates_parent_dirs(self, tmp_path: Path, sample_rules: list[Rule]):
        path = tmp_path / "nested" / "dir" / "rules.json"
        JsonRulesFile(path).save(sample_rules)
        assert path.exists()

    def test_file_format(self, rules_path: Path):
        JsonRulesFile(rules_path).save([Rule(rule_type=RuleType.MATCH, value="DIRECT")])
        assert json.loads(rules_path.read_text()) == [{"rule_type": "MATCH", "value": "DIRECT"}]

    def test_loads_existing(self, populated_rules_file: Path):
        rules = JsonRulesFile(populated_rules_file).load()
        assert [r.line() for r in rules] == ["DOMAIN,example.com", "IP-CIDR6,2001:db8::/32"]

    def test_corrupt_file_is_error(self, rules_path: Path):
        rules_path.write_text("this is not json")
        with pytest.raises(RulesFormatError):
            JsonRulesFile(rules_path).load()

    def test_empty_file_loads_empty(self, rules_path: Path):
        rules_path.write_text("")
        assert JsonRulesFile(rules_path).load() == []

    def test_no_temp_files_left_behind(self, rules_path: Path, sample_rules: list[Rule]):
        JsonRulesFile(rules_path).save(sample_rules)
        assert [p.name for p in rules_path.parent.iterdir()] == ["rules.json"]

    def test_failed_replace_keeps_old_file(self, rules_path: Path, sample_rules: list[Rule]):
        store = JsonRulesFile(rules_path)
        store.save(sample_rules[:1])
        with patch("proxyrules.rules.persistence.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(RulesIOError, match="disk full"):
                store.save(sample_rules)
        assert store.load() == sample_rules[:1]
        assert [p.name for p in rules_path.parent.iterdir()] == ["rules.json"]

    def test_unwritable_directory(self, tmp_path: Path, sample_rules: list[Rule]):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        with pytest.raises(RulesIOError):
            JsonRulesFile(blocker / "rules.json").save(sample_rules)

    def test_read_error_is_io_error(self, tmp_path: Path):
        directory = tmp_path / "rules.json"
        directory.mkdir()
        with pytest.raises(RulesIOError):
            JsonRulesFile(directory).load()

    def test_atomic_replace_used(self, rules_path: Path, sample_rules: list[Rule]):
        with patch("proxyrules.rules.persistence.os.replace", wraps=os.replace) as replace:
            JsonRulesFile(rules_path).save(sample_rules)
        replace.assert_called_once()
        assert replace.call_args.args[1] == rules_path
