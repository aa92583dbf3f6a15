"""CLI entry point for proxyrules."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import cast

from proxyrules import __version__
from proxyrules.config import load_config
from proxyrules.rules.errors import PersistenceError
from proxyrules.rules.persistence import JsonRulesFile
from proxyrules.server.runner import run_server


def _cmd_serve(args: argparse.Namespace) -> None:
    config = load_config(cast(Path | None, args.config))
    if args.host is not None:
        config.host = cast(str, args.host)
    if args.port is not None:
        config.port = cast(int, args.port)
    if args.rules_file is not None:
        config.rules_file = cast(str, args.rules_file)

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_server(config)


def _cmd_check(args: argparse.Namespace) -> None:
    rules_file = cast(Path, args.rules_file)
    if not rules_file.exists():
        print(f"Error: file not found: {rules_file}", file=sys.stderr)
        sys.exit(1)

    try:
        rules = JsonRulesFile(rules_file).load()
    except PersistenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for rule in rules:
        print(rule.line())
    print(f"{len(rules)} rule(s) OK", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="proxyrules",
        description="HTTP service for proxy traffic-classification rules",
    )
    _ = parser.add_argument(
        "-V", "--version", action="version", version=f"proxyrules {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command")

    # serve subcommand
    serve_p = subparsers.add_parser("serve", help="Start the HTTP API server")
    _ = serve_p.add_argument("--config", type=Path, default=None, help="JSON config file")
    _ = serve_p.add_argument("--host", default=None, help="Listen address (default: 0.0.0.0)")
    _ = serve_p.add_argument("--port", type=int, default=None, help="Listen port (default: 3500)")
    _ = serve_p.add_argument(
        "--rules-file",
        default=None,
        dest="rules_file",
        help="Persisted rules file (default: rules.json)",
    )

    # check subcommand
    check_p = subparsers.add_parser("check", help="Validate a persisted rules file")
    _ = check_p.add_argument("rules_file", type=Path, help="Path to rules JSON file")

    args = parser.parse_args(argv)
    dispatch = {
        "serve": _cmd_serve,
        "check": _cmd_check,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if handler:
        handler(args)
    else:
        parser.print_help()
        sys.exit(1)
