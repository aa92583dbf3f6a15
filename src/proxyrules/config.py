"""Server configuration: defaults, optional JSON config file, env overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3500
DEFAULT_RULES_FILE = "rules.json"
DEFAULT_GZIP_MINIMUM_SIZE = 500
DEFAULT_LOG_LEVEL = "info"


@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    rules_file: str = DEFAULT_RULES_FILE
    gzip_minimum_size: int = DEFAULT_GZIP_MINIMUM_SIZE
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def rules_path(self) -> Path:
        return Path(self.rules_file)


def load_config(path: Path | None = None) -> ServerConfig:
    """Load config from the ``server`` section of a JSON file, then apply env overrides."""
    config = ServerConfig()
    if path and path.exists():
        try:
            text = path.read_text()
            if text.strip():
                data = json.loads(text)
                section = data.get("server", {}) if isinstance(data, dict) else {}
                if isinstance(section, dict):
                    _apply(config, section)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")

    if host := os.environ.get("PROXYRULES_HOST"):
        config.host = host
    if port := os.environ.get("PROXYRULES_PORT"):
        try:
            config.port = int(port)
        except ValueError:
            logger.warning(f"Ignoring non-integer PROXYRULES_PORT={port!r}")
    if rules_file := os.environ.get("PROXYRULES_RULES_FILE"):
        config.rules_file = rules_file
    if log_level := os.environ.get("PROXYRULES_LOG_LEVEL"):
        config.log_level = log_level.lower()
    return config


def _apply(cfg: ServerConfig, data: dict[str, object]) -> None:
    if "host" in data and isinstance(data["host"], str):
        cfg.host = data["host"]
    if "port" in data and isinstance(data["port"], int) and not isinstance(data["port"], bool):
        cfg.port = data["port"]
    if "rules_file" in data and isinstance(data["rules_file"], str):
        cfg.rules_file = data["rules_file"]
    if (
        "gzip_minimum_size" in data
        and isinstance(data["gzip_minimum_size"], int)
        and not isinstance(data["gzip_minimum_size"], bool)
    ):
        cfg.gzip_minimum_size = data["gzip_minimum_size"]
    if "log_level" in data and isinstance(data["log_level"], str):
        cfg.log_level = data["log_level"].lower()
