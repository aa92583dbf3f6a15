"""Exception hierarchy for rule validation, store mutations, and persistence."""

from __future__ import annotations


class RuleError(Exception):
    """Base class for errors surfaced to rule-service clients.

    ``str(exc)`` is the client-facing message and ``status_code`` is the HTTP
    status the server layer responds with.
    """

    status_code: int = 500


class RuleValidationError(RuleError):
    """A rule value does not match the grammar of its rule type."""

    status_code = 400

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(self.describe(value))

    @staticmethod
    def describe(value: str) -> str:
        return f"Invalid rule value: {value}"


class InvalidIpCidr(RuleValidationError):
    @staticmethod
    def describe(value: str) -> str:
        return f"Invalid IP CIDR format: {value}"


class InvalidDomain(RuleValidationError):
    @staticmethod
    def describe(value: str) -> str:
        return f"Invalid domain format: {value}"


class InvalidPort(RuleValidationError):
    @staticmethod
    def describe(value: str) -> str:
        return f"Invalid port number: {value}"


class EmptyRuleValue(RuleValidationError):
    def __init__(self) -> None:
        super().__init__("")

    @staticmethod
    def describe(value: str) -> str:
        return "Rule value must not be empty"


class DuplicateRule(RuleError):
    status_code = 409

    def __init__(self) -> None:
        super().__init__("Rule already exists")


class RuleNotFound(RuleError):
    status_code = 404

    def __init__(self) -> None:
        super().__init__("Rule not found")


class UnknownRuleType(RuleError):
    status_code = 422

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unknown rule type: {token}")


class PersistenceError(RuleError):
    """The rules file could not be written or read back.

    Raised from add/remove after the in-memory collection has already been
    updated; the change is not rolled back.
    """

    status_code = 500


class RulesIOError(PersistenceError):
    def __init__(self, detail: object) -> None:
        super().__init__(f"IO error: {detail}")


class RulesFormatError(PersistenceError):
    def __init__(self, detail: object) -> None:
        super().__init__(f"JSON error: {detail}")
