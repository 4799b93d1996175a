"""Database settings and connections."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings for the database server."""

    username: str = ""
    password: str = ""
    host: str = "localhost"
    port: int = 3306
    database: str = ""
    max_connections: int = 50

    def url(self) -> str:
        """The MySQL connection URL built from these settings."""
        return (
            f"mysql://{self.username}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DatabaseConfig:
        """Read settings from DB_* variables; missing ones keep their defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()
        port_text = env.get("DB_PORT")
        try:
            port = int(port_text) if port_text else defaults.port
        except ValueError as exc:
            raise ValueError(f"invalid DB_PORT: {port_text!r}") from exc
        return cls(
            username=env.get("DB_USERNAME", defaults.username),
            password=env.get("DB_PASSWORD", defaults.password),
            host=env.get("DB_HOST", defaults.host),
            port=port,
            database=env.get("DB_DATABASE_NAME", defaults.database),
        )


def connect(path: str | os.PathLike[str]) -> sqlite3.Connection:
    """Open a database file with foreign keys enforced and rows addressable by name."""
    connection = sqlite3.connect(str(Path(path)) if path != ":memory:" else path)
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    return connection