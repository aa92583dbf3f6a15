"""Rule model, validation, persistence, and the concurrency-safe store."""

from proxyrules.rules.errors import (
    DuplicateRule,
    EmptyRuleValue,
    InvalidDomain,
    InvalidIpCidr,
    InvalidPort,
    PersistenceError,
    RuleError,
    RuleNotFound,
    RulesFormatError,
    RulesIOError,
    RuleValidationError,
    UnknownRuleType,
)
from proxyrules.rules.models import Rule, RuleType, from_token, to_token
from proxyrules.rules.persistence import JsonRulesFile, RulesPersistence
from proxyrules.rules.store import RuleStore
from proxyrules.rules.validation import validate, validate_rule

__all__ = [
    "DuplicateRule",
    "EmptyRuleValue",
    "InvalidDomain",
    "InvalidIpCidr",
    "InvalidPort",
    "JsonRulesFile",
    "PersistenceError",
    "Rule",
    "RuleError",
    "RuleNotFound",
    "RuleStore",
    "RuleType",
    "RuleValidationError",
    "RulesFormatError",
    "RulesIOError",
    "RulesPersistence",
    "UnknownRuleType",
    "from_token",
    "to_token",
    "validate",
    "validate_rule",
]
