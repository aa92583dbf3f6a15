"""RuleStore: the ordered, de-duplicated rule collection and its write path."""

from __future__ import annotations

import asyncio
import logging

from proxyrules.rules.errors import DuplicateRule, PersistenceError, RuleNotFound
from proxyrules.rules.models import Rule
from proxyrules.rules.persistence import RulesPersistence
from proxyrules.rules.validation import validate_rule

logger = logging.getLogger(__name__)


class RuleStore:
    """Owns the rule list. All access goes through the async methods.

    ``_lock`` guards the in-memory list and is released before disk I/O.
    ``_write_lock`` serializes disk writes: each mutation gets a revision,
    and a writer always persists the newest snapshot. A writer whose revision
    was already covered by a completed newer write skips the disk entirely,
    so the file can never end up older than the last acknowledged mutation.

    A persistence failure is raised to the caller but the in-memory change
    stays applied; clients should re-list after a 500.
    """

    def __init__(self, persistence: RulesPersistence) -> None:
        self._persistence = persistence
        self._rules: list[Rule] = []
        self._lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._revision = 0
        self._latest: tuple[Rule, ...] = ()
        self._written_revision = 0

    async def count(self) -> int:
        async with self._lock:
            return len(self._rules)

    async def load(self) -> int:
        """Replace the collection with the persisted one. Returns the rule count."""
        rules = await asyncio.to_thread(self._persistence.load)
        async with self._lock:
            self._rules = list(rules)
            self._latest = tuple(self._rules)
            self._revision += 1
            self._written_revision = self._revision
        logger.info(f"Loaded {len(rules)} rule(s)")
        return len(rules)

    async def list_rules(self) -> tuple[Rule, ...]:
        async with self._lock:
            return tuple(self._rules)

    async def add(self, rule: Rule) -> None:
        """Validate, append, persist. Raises RuleValidationError, DuplicateRule or PersistenceError."""
        validate_rule(rule)
        async with self._lock:
            if rule in self._rules:
                raise DuplicateRule()
            self._rules.append(rule)
            revision = self._commit()
        logger.info(f"Added rule {rule.line()}")
        await self._persist(revision)

    async def remove(self, rule: Rule) -> None:
        """Remove every equal rule, persist. Raises RuleNotFound or PersistenceError."""
        async with self._lock:
            kept = [r for r in self._rules if r != rule]
            if len(kept) == len(self._rules):
                raise RuleNotFound()
            self._rules = kept
            revision = self._commit()
        logger.info(f"Removed rule {rule.line()}")
        await self._persist(revision)

    def _commit(self) -> int:
        # caller holds self._lock
        self._revision += 1
        self._latest = tuple(self._rules)
        return self._revision

    async def _persist(self, revision: int) -> None:
        async with self._write_lock:
            if self._written_revision >= revision:
                logger.debug(f"Revision {revision} already persisted by a newer write")
                return
            async with self._lock:
                target, snapshot = self._revision, self._latest
            try:
                await asyncio.to_thread(self._persistence.save, snapshot)
            except PersistenceError as e:
                logger.error(f"Failed to persist rules at revision {target}: {e}")
                raise
            self._written_revision = target
