"""Starlette app factory with lifespan for rule store management."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.gzip import GZipMiddleware

from proxyrules.config import DEFAULT_GZIP_MINIMUM_SIZE, DEFAULT_RULES_FILE
from proxyrules.rules.errors import PersistenceError
from proxyrules.rules.persistence import JsonRulesFile
from proxyrules.rules.store import RuleStore
from proxyrules.server.routes_rules import routes as rules_routes
from proxyrules.server.routes_system import routes as system_routes

logger = logging.getLogger(__name__)


def create_app(
    rules_path: str | Path | None = None,
    *,
    store: RuleStore | None = None,
    gzip_minimum_size: int = DEFAULT_GZIP_MINIMUM_SIZE,
) -> Starlette:
    """Create a Starlette app serving the rules file at rules_path.

    Pass ``store`` to inject a pre-built RuleStore; it is still loaded from
    its persistence on startup.
    """
    if store is None:
        store = RuleStore(JsonRulesFile(Path(rules_path or DEFAULT_RULES_FILE)))

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        try:
            await store.load()
        except PersistenceError as e:
            logger.error(f"Failed to load rules: {e}")
            raise
        app.state.rule_store = store
        yield

    return Starlette(
        routes=rules_routes + system_routes,
        middleware=[Middleware(GZipMiddleware, minimum_size=gzip_minimum_size)],
        lifespan=lifespan,
    )
