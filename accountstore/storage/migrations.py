"""
Schema migrations for the AccountStore SQLite database.

The applied schema version is tracked in PRAGMA user_version. Each migration
runs in its own transaction together with the user_version bump, so a
database is always left at a fully applied version.
"""

import logging
import sqlite3
from dataclasses import dataclass
from typing import Sequence

from accountstore.storage.errors import MigrationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    """A single schema evolution step."""
    version: int
    description: str
    statements: tuple[str, ...]


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version=1,
        description="create account tables",
        statements=(
            """
            CREATE TABLE accounts (
                id INTEGER PRIMARY KEY,       -- u64 account id stored with i64 bit pattern
                nonce INTEGER NOT NULL,       -- u64 nonce stored with i64 bit pattern
                vault_root TEXT NOT NULL,
                storage_root TEXT NOT NULL,
                code_root TEXT NOT NULL,
                committed BOOLEAN NOT NULL
            )
            """,
            """
            CREATE TABLE account_code (
                root TEXT PRIMARY KEY,
                procedures TEXT NOT NULL,     -- JSON array of digests
                module TEXT NOT NULL          -- JSON string, or null
            )
            """,
            """
            CREATE TABLE account_storage (
                root TEXT PRIMARY KEY,
                slots TEXT NOT NULL           -- JSON object of slot index to word
            )
            """,
            """
            CREATE TABLE account_vault (
                root TEXT PRIMARY KEY,
                assets TEXT NOT NULL          -- JSON array of assets
            )
            """,
        ),
    ),
    Migration(
        version=2,
        description="index account component roots",
        statements=(
            "CREATE INDEX idx_accounts_code_root ON accounts (code_root)",
            "CREATE INDEX idx_accounts_storage_root ON accounts (storage_root)",
            "CREATE INDEX idx_accounts_vault_root ON accounts (vault_root)",
        ),
    ),
)

LATEST_SCHEMA_VERSION = MIGRATIONS[-1].version


def get_user_version(connection: sqlite3.Connection) -> int:
    """Return the schema version recorded in the database."""
    return connection.execute("PRAGMA user_version").fetchone()[0]


def _check_sequence(migrations: Sequence[Migration]) -> None:
    for expected, migration in enumerate(migrations, start=1):
        if migration.version != expected:
            raise MigrationError(
                f"Migration sequence is not contiguous: expected version {expected}, "
                f"found {migration.version}"
            )


def _apply(connection: sqlite3.Connection, migration: Migration) -> None:
    """Apply one migration and its version bump in a single transaction."""
    try:
        connection.execute("BEGIN IMMEDIATE")
        for statement in migration.statements:
            connection.execute(statement)
        # PRAGMA does not accept bound parameters
        connection.execute(f"PRAGMA user_version = {int(migration.version)}")
        connection.execute("COMMIT")
    except sqlite3.Error as e:
        if connection.in_transaction:
            try:
                connection.execute("ROLLBACK")
            except sqlite3.Error as rollback_error:
                logger.error(f"Rollback of migration {migration.version} failed: {rollback_error}")
        logger.error(f"Migration {migration.version} ({migration.description}) failed: {e}")
        raise MigrationError(
            f"Failed to apply migration {migration.version} ({migration.description}): {e}"
        ) from e


def update_to_latest(connection: sqlite3.Connection,
                     migrations: Sequence[Migration] | None = None) -> int:
    """
    Bring the database schema to the latest version.

    Safe to call on a fresh file (runs every migration) and on an
    up-to-date database (no-op). Already applied migrations are skipped.

    Args:
        connection: Open SQLite connection with no transaction in progress
        migrations: Migration sequence to apply, defaults to MIGRATIONS

    Returns:
        Schema version after the update

    Raises:
        MigrationError: If the database is newer than the known migrations,
            cannot be read, a transaction is already open, or a migration fails
    """
    migrations = MIGRATIONS if migrations is None else tuple(migrations)
    _check_sequence(migrations)
    latest = migrations[-1].version if migrations else 0

    try:
        current = get_user_version(connection)
    except sqlite3.Error as e:
        raise MigrationError(f"Failed to read schema version: {e}") from e

    if current > latest:
        raise MigrationError(
            f"Database schema version {current} is newer than this software, "
            f"which only supports up to version {latest}"
        )

    pending = [m for m in migrations if m.version > current]
    if not pending:
        logger.debug(f"Database schema is up to date at version {current}")
        return current

    if connection.in_transaction:
        raise MigrationError(
            f"Cannot migrate from version {current}: a transaction is already in progress"
        )

    for migration in pending:
        _apply(connection, migration)
        logger.info(f"Applied migration {migration.version}: {migration.description}")

    return latest
