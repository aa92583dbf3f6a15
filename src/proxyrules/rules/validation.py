"""Per-type grammar checks for rule values.

These are syntax sanity checks, not semantic ones: a DOMAIN-KEYWORD value
only needs to look domain-ish, and a port range may be written high-low.
Rule types without a grammar here are passed through to the downstream
rule consumer untouched.
"""

from __future__ import annotations

import ipaddress
import re

from proxyrules.rules.errors import EmptyRuleValue, InvalidDomain, InvalidIpCidr, InvalidPort
from proxyrules.rules.models import DOMAIN_TYPES, IP_NETWORK_TYPES, PORT_TYPES, Rule, RuleType

_DOMAIN_RE = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9_.-]+[a-zA-Z0-9]")
_DIGITS_RE = re.compile(r"[0-9]+")
_PORT_RE = re.compile(r"\+?[0-9]+")
_MAX_PORT = 65535


def is_valid_ip_network(value: str) -> bool:
    """Address plus numeric prefix length, either family. Host bits may be set.

    IPv6 zone IDs (``fe80::1%eth0/64``) are not part of a network literal.
    """
    address, sep, prefix = value.partition("/")
    if not sep or not address or "%" in address or not _DIGITS_RE.fullmatch(prefix):
        return False
    try:
        ipaddress.ip_network(value, strict=False)
    except ValueError:
        return False
    return True


def is_valid_domain(value: str) -> bool:
    return _DOMAIN_RE.fullmatch(value) is not None


def _is_port_number(text: str) -> bool:
    return _PORT_RE.fullmatch(text) is not None and int(text) <= _MAX_PORT


def is_valid_port(value: str) -> bool:
    """A single port or ``low-high`` range. Bounds are not required to be ordered."""
    if _is_port_number(value):
        return True
    parts = value.split("-")
    return len(parts) == 2 and all(_is_port_number(p) for p in parts)


def validate(rule_type: RuleType, value: str) -> None:
    """Raise the matching RuleValidationError if value is ill-formed for rule_type."""
    if rule_type in IP_NETWORK_TYPES:
        if not is_valid_ip_network(value):
            raise InvalidIpCidr(value)
    elif rule_type in DOMAIN_TYPES:
        if not is_valid_domain(value):
            raise InvalidDomain(value)
    elif rule_type in PORT_TYPES:
        if not is_valid_port(value):
            raise InvalidPort(value)
    elif not value:
        raise EmptyRuleValue()


def validate_rule(rule: Rule) -> None:
    validate(rule.rule_type, rule.value)
