"""Database schema migrations for the ledger tables."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

MIGRATION_TABLE = "seaql_migrations"


def _touch_trigger(table: str) -> str:
    """Keep ``updated_at`` current on every update of ``table``."""
    return (
        f'CREATE TRIGGER IF NOT EXISTS "trg_{table}_updated_at" '
        f'AFTER UPDATE ON "{table}" FOR EACH ROW '
        "WHEN NEW.updated_at IS OLD.updated_at "
        f'BEGIN UPDATE "{table}" SET updated_at = CURRENT_TIMESTAMP '
        "WHERE id = NEW.id; END"
    )


_TIMESTAMPS = (
    "created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP, "
    "updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP"
)


@dataclass(frozen=True)
class Migration:
    """One named schema change with its forward and backward statements."""

    name: str
    up_statements: tuple[str, ...]
    down_statements: tuple[str, ...]

    def up(self, connection: sqlite3.Connection) -> None:
        for statement in self.up_statements:
            connection.execute(statement)

    def down(self, connection: sqlite3.Connection) -> None:
        for statement in self.down_statements:
            connection.execute(statement)


_CREATE_USER = Migration(
    name="m20220101_000001_create_user_table",
    up_statements=(
        'CREATE TABLE IF NOT EXISTS "User" ('
        "id BLOB NOT NULL PRIMARY KEY, "
        "username TEXT NOT NULL, "
        "first_name TEXT NOT NULL, "
        "last_name TEXT NOT NULL, "
        "email TEXT NOT NULL UNIQUE, "
        "password_hash TEXT NOT NULL, "
        f"{_TIMESTAMPS})",
        _touch_trigger("User"),
    ),
    down_statements=('DROP TABLE "User"',),
)

_CREATE_COMPANY = Migration(
    name="m20250224_200022_create_company_table",
    up_statements=(
        'CREATE TABLE IF NOT EXISTS "Company" ('
        "id BLOB NOT NULL PRIMARY KEY, "
        "name TEXT NOT NULL UNIQUE, "
        "description TEXT NOT NULL, "
        "user_id BLOB NOT NULL, "
        f"{_TIMESTAMPS}, "
        'CONSTRAINT fk_company_user_id FOREIGN KEY (user_id) REFERENCES "User" (id) '
        "ON DELETE CASCADE ON UPDATE CASCADE)",
        _touch_trigger("Company"),
    ),
    down_statements=('DROP TABLE "Company"',),
)

_CREATE_CONTACT_TYPE = Migration(
    name="m20250301_212131_create_contact_type",
    up_statements=(
        'CREATE TABLE IF NOT EXISTS "ContactType" ('
        "id BLOB NOT NULL PRIMARY KEY, "
        "name TEXT NOT NULL, "
        "description TEXT NOT NULL, "
        f"{_TIMESTAMPS})",
        _touch_trigger("ContactType"),
    ),
    down_statements=('DROP TABLE "ContactType"',),
)

_CREATE_CONTACT = Migration(
    name="m20250301_211311_create_contact_table",
    up_statements=(
        'CREATE TABLE IF NOT EXISTS "Contact" ('
        "id BLOB NOT NULL PRIMARY KEY, "
        "name TEXT NOT NULL, "
        "company_id BLOB NOT NULL, "
        "user_id BLOB NOT NULL, "
        "contact_type_id BLOB NOT NULL, "
        f"{_TIMESTAMPS}, "
        'CONSTRAINT fk_contact_user_id FOREIGN KEY (user_id) REFERENCES "User" (id) '
        "ON DELETE CASCADE ON UPDATE CASCADE, "
        "CONSTRAINT fk_contact_contact_type_id FOREIGN KEY (contact_type_id) "
        'REFERENCES "ContactType" (id) ON DELETE CASCADE ON UPDATE CASCADE)',
        _touch_trigger("Contact"),
    ),
    down_statements=('DROP TABLE "Contact"',),
)

_CREATE_CONTACT_DETAIL = Migration(
    name="m20250301_212123_create_contact_detail",
    up_statements=(
        'CREATE TABLE IF NOT EXISTS "ContactDetail" ('
        "id BLOB NOT NULL PRIMARY KEY, "
        "contact_id BLOB NOT NULL, "
        "mobile_phone_1 TEXT NOT NULL, "
        "mobile_phone_2 TEXT NOT NULL, "
        "mobile_phone_3 TEXT NOT NULL, "
        "email TEXT NOT NULL, "
        "address TEXT NOT NULL, "
        f"{_TIMESTAMPS}, "
        "CONSTRAINT fk_contact_detail_contact_id FOREIGN KEY (contact_id) "
        'REFERENCES "Contact" (id) ON DELETE CASCADE ON UPDATE CASCADE)',
        _touch_trigger("ContactDetail"),
    ),
    down_statements=('DROP TABLE "ContactDetail"',),
)

# Independent tables first, then tables that depend on them.
_MIGRATIONS = (
    _CREATE_USER,
    _CREATE_COMPANY,
    _CREATE_CONTACT_TYPE,
    _CREATE_CONTACT,
    _CREATE_CONTACT_DETAIL,
)


def migrations() -> list[Migration]:
    """All migrations in the order they are applied."""
    return list(_MIGRATIONS)


def _ensure_migration_table(connection: sqlite3.Connection) -> None:
    connection.execute(
        f'CREATE TABLE IF NOT EXISTS "{MIGRATION_TABLE}" ('
        "version TEXT NOT NULL PRIMARY KEY, "
        "applied_at INTEGER NOT NULL DEFAULT (strftime('%s', 'now')))"
    )


def applied_migrations(connection: sqlite3.Connection) -> list[str]:
    """Names of the migrations already applied, in application order."""
    _ensure_migration_table(connection)
    known = {migration.name for migration in _MIGRATIONS}
    recorded = {
        row[0]
        for row in connection.execute(f'SELECT version FROM "{MIGRATION_TABLE}"')
    }
    ordered = [m.name for m in _MIGRATIONS if m.name in recorded]
    ordered.extend(sorted(recorded - known))
    return ordered


def migrate_up(connection: sqlite3.Connection) -> list[str]:
    """Apply every pending migration and return the names applied."""
    done = set(applied_migrations(connection))
    applied = []
    for migration in _MIGRATIONS:
        if migration.name in done:
            continue
        with connection:
            migration.up(connection)
            connection.execute(
                f'INSERT INTO "{MIGRATION_TABLE}" (version) VALUES (?)',
                (migration.name,),
            )
        applied.append(migration.name)
    return applied


def migrate_down(connection: sqlite3.Connection) -> list[str]:
    """Roll back every applied migration, newest first, and return their names."""
    done = set(applied_migrations(connection))
    reverted = []
    for migration in reversed(_MIGRATIONS):
        if migration.name not in done:
            continue
        with connection:
            migration.down(connection)
            connection.execute(
                f'DELETE FROM "{MIGRATION_TABLE}" WHERE version = ?',
                (migration.name,),
            )
        reverted.append(migration.name)
    return reverted