"""Command-line entry point that migrates the database and serves the API."""

from __future__ import annotations

import argparse
import logging
import os
import sqlite3
import sys
from collections.abc import Sequence

from flask import Flask

from ledgerdesk.app import create_app
from ledgerdesk.database import connect
from ledgerdesk.schema import migrate_up

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for the server."""
    parser = argparse.ArgumentParser(
        prog="ledgerdesk", description="Serve the double-entry bookkeeping API."
    )
    parser.add_argument(
        "--database",
        default=os.environ.get("LEDGERDESK_DATABASE", "ledgerdesk.db"),
        help="path of the database file",
    )
    parser.add_argument("--host", default="127.0.0.1", help="address to listen on")
    parser.add_argument("--port", type=int, default=8000, help="port to listen on")
    parser.add_argument(
        "--secret-key",
        dest="secret_key",
        default=None,
        help="key for signing access tokens (default: $JWT_SECRET_KEY)",
    )
    return parser


def build_app(database: str, secret_key: str) -> Flask:
    """Apply pending migrations to the database and build the application."""
    connection = connect(database)
    try:
        applied = migrate_up(connection)
    except sqlite3.Error as exc:
        raise RuntimeError(f"Failed to migrate: {exc}") from exc
    finally:
        connection.close()
    for name in applied:
        log.info("applied migration %s", name)
    return create_app(lambda: connect(database), secret_key)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG)
    secret_key = (
        args.secret_key
        if args.secret_key is not None
        else os.environ.get("JWT_SECRET_KEY", "")
    )
    try:
        app = build_app(args.database, secret_key)
    except sqlite3.Error as exc:
        print(f"Failed to connect to the database: {exc}", file=sys.stderr)
        return 1
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        return 1
    app.run(host=args.host, port=args.port)
    return 0