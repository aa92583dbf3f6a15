"""Uvicorn launcher."""

from __future__ import annotations

from proxyrules.config import ServerConfig, load_config
from proxyrules.server.app import create_app


def run_server(config: ServerConfig | None = None) -> None:
    """Start the HTTP API server with uvicorn."""
    import uvicorn

    if config is None:
        config = load_config()

    app = create_app(config.rules_path, gzip_minimum_size=config.gzip_minimum_size)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level,
    )
