"""
SQLite Store for AccountStore.

This module provides the persistent store for account records and their
content-addressed components (code, storage, vault). The Store owns a single
connection, runs schema migrations on open, and converts between account
value objects and their relational representation at its boundary.

The Store is not thread-safe; a single owner must serialize access.
"""

import logging
import sqlite3
from dataclasses import dataclass
from typing import Any

from accountstore.config.settings import Settings, settings as default_settings
from accountstore.core.accounts import (
    Account,
    AccountCode,
    AccountStorage,
    AccountStub,
    AccountVault,
)
from accountstore.core.crypto import Digest
from accountstore.core.utils import sanitize_for_log
from accountstore.storage import encoding, migrations
from accountstore.storage.errors import (
    DataDeserializationError,
    MigrationError,
    QueryError,
    StoreConnectionError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    """Location of the store database file."""
    path: str

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "StoreConfig":
        """Derive the store configuration from client settings."""
        settings = settings or default_settings
        return cls(path=str(settings.get_store_config()["path"]))


class Store:
    """
    Persistent store for accounts and account components.

    Every operation is a blocking call that either completes or raises a
    StoreError subclass:
    - StoreConnectionError / MigrationError when opening fails
    - QueryError when a database read or write fails
    - InputSerializationError when a value cannot be encoded
    - DataDeserializationError when a stored value cannot be decoded
    """

    def __init__(self, config: StoreConfig):
        """
        Open (or create) the database and migrate it to the latest schema.

        Args:
            config: Store configuration

        Raises:
            StoreConnectionError: If the database cannot be opened
            MigrationError: If the schema cannot be migrated
        """
        self.path = config.path
        try:
            # Autocommit mode: each statement is its own transaction
            self._db = sqlite3.connect(self.path, isolation_level=None)
        except sqlite3.Error as e:
            logger.error(f"Failed to open store at {sanitize_for_log(self.path)}: {e}")
            raise StoreConnectionError(f"Failed to open database {self.path!r}: {e}") from e

        try:
            version = migrations.update_to_latest(self._db)
        except MigrationError:
            self._db.close()
            raise

        logger.info(f"Store opened at {sanitize_for_log(self.path)} (schema version {version})")

    def _execute(self, sql: str, params: tuple | dict = ()) -> sqlite3.Cursor:
        try:
            return self._db.execute(sql, params)
        except sqlite3.Error as e:
            logger.error(f"Store query failed: {e}")
            raise QueryError(f"Query failed: {e}") from e

    def _fetchall(self, sql: str, params: tuple = ()) -> list[tuple]:
        cursor = self._execute(sql, params)
        try:
            return cursor.fetchall()
        except sqlite3.Error as e:
            raise QueryError(f"Query failed: {e}") from e

    def _fetchone(self, sql: str, params: tuple = ()) -> tuple | None:
        rows = self._fetchall(sql, params)
        return rows[0] if rows else None

    # Accounts

    def get_accounts(self) -> list[AccountStub]:
        """
        Get summaries of all stored accounts, ordered by account id.

        Returns:
            List of account stubs, empty if no accounts are stored

        Raises:
            QueryError: If the read fails
            DataDeserializationError: If any row cannot be decoded
        """
        rows = self._fetchall(
            "SELECT id, nonce, vault_root, storage_root, code_root FROM accounts ORDER BY id"
        )
        return [self._stub_from_row(row) for row in rows]

    def get_account_stub(self, account_id: int) -> AccountStub | None:
        """
        Get the summary of a single account.

        Args:
            account_id: Unsigned 64-bit account id

        Returns:
            Account stub, or None if the account is not stored
        """
        row = self._fetchone(
            "SELECT id, nonce, vault_root, storage_root, code_root FROM accounts WHERE id = ?",
            (encoding.encode_u64(account_id, "account id"),),
        )
        return self._stub_from_row(row) if row else None

    def is_account_committed(self, account_id: int) -> bool | None:
        """Return whether the account is on-chain, or None if it is not stored."""
        row = self._fetchone(
            "SELECT committed FROM accounts WHERE id = ?",
            (encoding.encode_u64(account_id, "account id"),),
        )
        return bool(row[0]) if row else None

    @staticmethod
    def _stub_from_row(row: tuple) -> AccountStub:
        account_id, nonce, vault_root, storage_root, code_root = row
        account_id = encoding.decode_u64(account_id, "account id")
        try:
            return AccountStub(
                id=account_id,
                nonce=encoding.decode_u64(nonce, "account nonce"),
                vault_root=encoding.decode_digest(vault_root, "vault root"),
                storage_root=encoding.decode_digest(storage_root, "storage root"),
                code_root=encoding.decode_digest(code_root, "code root"),
            )
        except DataDeserializationError as e:
            logger.error(f"Malformed account row {account_id}: {sanitize_for_log(e.message)}")
            raise
        except ValueError as e:
            raise DataDeserializationError(f"Invalid account row {account_id}: {e}") from e

    @staticmethod
    def _account_params(account: Account) -> dict[str, Any]:
        return {
            "id": encoding.encode_u64(account.id, "account id"),
            "nonce": encoding.encode_u64(account.nonce, "account nonce"),
            "vault_root": encoding.encode_digest(account.vault.commitment, "vault root"),
            "storage_root": encoding.encode_digest(account.storage.root, "storage root"),
            "code_root": encoding.encode_digest(account.code.root, "code root"),
            "committed": bool(account.is_on_chain()),
        }

    def insert_account(self, account: Account) -> None:
        """
        Insert an account row.

        Component rows are not checked; callers insert code, storage and
        vault before the account that references them.

        Raises:
            InputSerializationError: If the account cannot be encoded
            QueryError: If the write fails, including when the id already exists
        """
        params = self._account_params(account)
        self._execute(
            "INSERT INTO accounts (id, nonce, vault_root, storage_root, code_root, committed) "
            "VALUES (:id, :nonce, :vault_root, :storage_root, :code_root, :committed)",
            params,
        )
        logger.debug(f"Inserted account {account.id}")

    def update_account(self, account: Account) -> None:
        """
        Update the nonce, roots and committed flag of an existing account.

        Raises:
            InputSerializationError: If the account cannot be encoded
            QueryError: If the write fails or the account is not stored
        """
        params = self._account_params(account)
        cursor = self._execute(
            "UPDATE accounts SET nonce = :nonce, vault_root = :vault_root, "
            "storage_root = :storage_root, code_root = :code_root, committed = :committed "
            "WHERE id = :id",
            params,
        )
        if cursor.rowcount == 0:
            raise QueryError(f"Account {account.id} not found")
        logger.debug(f"Updated account {account.id} to nonce {account.nonce}")

    # Account code

    def insert_account_code(self, account_code: AccountCode) -> None:
        """
        Insert an account code row keyed by its root.

        Raises:
            InputSerializationError: If the code cannot be encoded
            QueryError: If the write fails, including when the root already exists
        """
        root = encoding.encode_digest(account_code.root, "code root")
        procedures = encoding.encode_procedures(account_code)
        module = encoding.encode_module(account_code)

        self._execute(
            "INSERT INTO account_code (root, procedures, module) VALUES (?, ?, ?)",
            (root, procedures, module),
        )
        logger.debug(f"Inserted account code {root}")

    def get_account_code(self, root: Digest) -> AccountCode | None:
        """Get the account code stored under root, or None if not stored."""
        key = encoding.encode_digest(root, "code root")
        row = self._fetchone("SELECT procedures, module FROM account_code WHERE root = ?", (key,))
        if row is None:
            return None

        try:
            code = AccountCode(
                procedures=encoding.decode_procedures(row[0]),
                module=encoding.decode_module(row[1]),
            )
        except (ValueError, TypeError) as e:
            raise DataDeserializationError(f"Invalid account code {key}: {e}") from e
        self._check_root(code.root, root, "account code")
        return code

    # Account storage

    def insert_account_storage(self, account_storage: AccountStorage) -> None:
        """
        Insert an account storage row keyed by its root.

        Raises:
            InputSerializationError: If the storage cannot be encoded
            QueryError: If the write fails, including when the root already exists
        """
        root = encoding.encode_digest(account_storage.root, "storage root")
        slots = encoding.encode_slots(account_storage)

        self._execute(
            "INSERT INTO account_storage (root, slots) VALUES (?, ?)",
            (root, slots),
        )
        logger.debug(f"Inserted account storage {root}")

    def get_account_storage(self, root: Digest) -> AccountStorage | None:
        """Get the account storage stored under root, or None if not stored."""
        key = encoding.encode_digest(root, "storage root")
        row = self._fetchone("SELECT slots FROM account_storage WHERE root = ?", (key,))
        if row is None:
            return None

        try:
            storage = AccountStorage(slots=encoding.decode_slots(row[0]))
        except (ValueError, TypeError) as e:
            raise DataDeserializationError(f"Invalid account storage {key}: {e}") from e
        self._check_root(storage.root, root, "account storage")
        return storage

    # Account vault

    def insert_account_vault(self, account_vault: AccountVault) -> None:
        """
        Insert an account vault row keyed by its commitment.

        Raises:
            InputSerializationError: If the vault cannot be encoded
            QueryError: If the write fails, including when the root already exists
        """
        root = encoding.encode_digest(account_vault.commitment, "vault root")
        assets = encoding.encode_assets(account_vault)

        self._execute(
            "INSERT INTO account_vault (root, assets) VALUES (?, ?)",
            (root, assets),
        )
        logger.debug(f"Inserted account vault {root}")

    def get_account_vault(self, root: Digest) -> AccountVault | None:
        """Get the account vault stored under root, or None if not stored."""
        key = encoding.encode_digest(root, "vault root")
        row = self._fetchone("SELECT assets FROM account_vault WHERE root = ?", (key,))
        if row is None:
            return None

        try:
            vault = AccountVault(assets=encoding.decode_assets(row[0]))
        except (ValueError, TypeError) as e:
            raise DataDeserializationError(f"Invalid account vault {key}: {e}") from e
        self._check_root(vault.commitment, root, "account vault")
        return vault

    @staticmethod
    def _check_root(actual: Digest, expected: Digest, what: str) -> None:
        if actual != expected:
            logger.error(f"Stored {what} {expected} decodes to root {actual}")
            raise DataDeserializationError(
                f"Stored {what} does not match its root: expected {expected}, got {actual}"
            )

    # Lifecycle

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()
        logger.debug(f"Store closed at {sanitize_for_log(self.path)}")

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Store(path={self.path})"
