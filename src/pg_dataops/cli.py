"""Command-line entrypoint for pg-dataops."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from pg_dataops import __version__

TOOL_HELP = {
    "query-table": (
        "Query rows with WHERE conditions (equality, IN lists, LIKE patterns), "
        "sorting and pagination."
    ),
    "insert-data": (
        "Insert one or many records with optional conflict handling "
        "(ignore/update)."
    ),
    "update-data": "Update rows matching mandatory WHERE conditions.",
    "delete-data": (
        "Delete rows matching mandatory WHERE conditions; large deletions "
        "need confirm_delete."
    ),
    "execute-query": "Execute a parameterized SQL statement after safety checks.",
    "get-schema": "List tables, columns and optionally constraints of a schema.",
    "get-table-info": "Describe one table: columns, constraints, indexes, size.",
    "connection-status": "Report database connectivity.",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pg-dataops",
        description=(
            "Structured PostgreSQL data operations with parameterized SQL and "
            "destructive-operation safeguards."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "config-check",
        help="Validate environment configuration for pg-dataops.",
    )
    subparsers.add_parser(
        "healthcheck",
        help="Check PostgreSQL connectivity and report server identity.",
    )
    for name, help_text in TOOL_HELP.items():
        tool_parser = subparsers.add_parser(name, help=help_text)
        tool_parser.add_argument(
            "--params",
            default="{}",
            help="Tool parameters as a JSON object (default: {}).",
        )
        if name == "connection-status":
            tool_parser.add_argument(
                "--retry",
                action="store_true",
                help="Re-probe the connection before reporting.",
            )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _parse_payload(raw: str) -> dict[str, Any]:
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError("--params must be a JSON object.")
    return payload


async def _run_tool(settings: Any, tool_name: str, payload: dict[str, Any]) -> dict[str, Any]:
    from pg_dataops.db.connection import Database
    from pg_dataops.tools import TOOLS

    async with Database(settings) as db:
        await db.test_connection()
        return await TOOLS[tool_name](db, payload)


async def _run_healthcheck(settings: Any) -> Any:
    from pg_dataops.db.connection import Database

    async with Database(settings) as db:
        return await db.healthcheck()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        from pg_dataops.config import ConfigError, load_settings
    except ModuleNotFoundError:
        print(
            "Configuration tooling dependencies are missing. "
            "Install project dependencies first (pip install -e .).",
            file=sys.stderr,
        )
        return 2

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error:\n{exc}", file=sys.stderr)
        return 2
    _configure_logging(settings.log_level)

    if args.command == "config-check":
        print("Configuration loaded successfully:")
        print(f"- DATABASE_URL: {settings.redacted_dsn}")
        print(f"- MAX_CONNECTIONS: {settings.max_connections}")
        print(f"- QUERY_TIMEOUT: {settings.query_timeout_ms or '(not set)'}")
        print(f"- CONNECT_TIMEOUT: {settings.connect_timeout}")
        print(f"- LOG_LEVEL: {settings.log_level}")
        return 0

    if args.command == "healthcheck":
        from pg_dataops.db.connection import DatabaseConnectionError

        try:
            result = asyncio.run(_run_healthcheck(settings))
        except DatabaseConnectionError as exc:
            print(f"Healthcheck failed:\n{exc}", file=sys.stderr)
            return 1

        print("PostgreSQL healthcheck succeeded:")
        print(f"- database: {result.current_database}")
        print(f"- user: {result.current_user}")
        print(f"- server_version: {result.server_version}")
        return 0

    from pg_dataops.tools import is_error, to_json

    try:
        payload = _parse_payload(args.params)
    except ValueError as exc:
        print(f"Invalid --params:\n{exc}", file=sys.stderr)
        return 2
    if args.command == "connection-status" and args.retry:
        payload["retry"] = True

    response = asyncio.run(_run_tool(settings, args.command, payload))
    print(to_json(response))
    return 1 if is_error(response) else 0


if __name__ == "__main__":
    sys.exit(main())
