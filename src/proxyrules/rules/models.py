"""Rule types, their canonical tokens, and the Rule model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from proxyrules.rules.errors import UnknownRuleType


class RuleType(StrEnum):
    """Recognized rule kinds. Each value is the canonical token."""

    DOMAIN = "DOMAIN"
    DOMAIN_SUFFIX = "DOMAIN-SUFFIX"
    DOMAIN_KEYWORD = "DOMAIN-KEYWORD"
    DOMAIN_WILDCARD = "DOMAIN-WILDCARD"
    DOMAIN_REGEX = "DOMAIN-REGEX"
    GEOSITE = "GEOSITE"
    IP_CIDR = "IP-CIDR"
    IP_CIDR6 = "IP-CIDR6"
    IP_SUFFIX = "IP-SUFFIX"
    IP_ASN = "IP-ASN"
    GEOIP = "GEOIP"
    SRC_GEOIP = "SRC-GEOIP"
    SRC_IP_ASN = "SRC-IP-ASN"
    SRC_IP_CIDR = "SRC-IP-CIDR"
    SRC_IP_SUFFIX = "SRC-IP-SUFFIX"
    DST_PORT = "DST-PORT"
    SRC_PORT = "SRC-PORT"
    IN_PORT = "IN-PORT"
    IN_TYPE = "IN-TYPE"
    IN_USER = "IN-USER"
    IN_NAME = "IN-NAME"
    PROCESS_PATH = "PROCESS-PATH"
    PROCESS_PATH_REGEX = "PROCESS-PATH-REGEX"
    PROCESS_NAME = "PROCESS-NAME"
    PROCESS_NAME_REGEX = "PROCESS-NAME-REGEX"
    UID = "UID"
    NETWORK = "NETWORK"
    DSCP = "DSCP"
    MATCH = "MATCH"


_TOKEN_BY_TYPE: dict[RuleType, str] = {rt: rt.value for rt in RuleType}
_TYPE_BY_TOKEN: dict[str, RuleType] = {token: rt for rt, token in _TOKEN_BY_TYPE.items()}

IP_NETWORK_TYPES = frozenset({RuleType.IP_CIDR, RuleType.IP_CIDR6, RuleType.SRC_IP_CIDR})
DOMAIN_TYPES = frozenset({RuleType.DOMAIN, RuleType.DOMAIN_SUFFIX, RuleType.DOMAIN_KEYWORD})
PORT_TYPES = frozenset({RuleType.DST_PORT, RuleType.SRC_PORT, RuleType.IN_PORT})


def to_token(rule_type: RuleType) -> str:
    return _TOKEN_BY_TYPE[rule_type]


def from_token(token: str) -> RuleType:
    """Exact, case-sensitive lookup. Raises UnknownRuleType otherwise."""
    try:
        return _TYPE_BY_TOKEN[token]
    except (KeyError, TypeError):
        raise UnknownRuleType(str(token)) from None


class Rule(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_type: RuleType
    value: str

    def line(self) -> str:
        return f"{to_token(self.rule_type)},{self.value}"
