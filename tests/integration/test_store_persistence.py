"""
Integration tests for the store against database files on disk
"""

import sqlite3

from accountstore.core.accounts import AccountStub
from accountstore.storage.migrations import MIGRATIONS, LATEST_SCHEMA_VERSION, get_user_version, update_to_latest
from accountstore.storage.store import Store, StoreConfig


def _insert_full_account(store, account):
    """Insert components before the account that references them."""
    store.insert_account_code(account.code)
    store.insert_account_storage(account.storage)
    store.insert_account_vault(account.vault)
    store.insert_account(account)


def test_full_account_round_trip_across_reopen(db_path, account_factory):
    """Test that everything written survives closing and reopening the file"""
    accounts = [
        account_factory(account_id=0x8000_0000_0000_0001, nonce=3, seed=1, on_chain=True),
        account_factory(account_id=12, nonce=0, seed=2),
    ]

    with Store(StoreConfig(path=str(db_path))) as store:
        for account in accounts:
            _insert_full_account(store, account)

    with Store(StoreConfig(path=str(db_path))) as store:
        stubs = {stub.id: stub for stub in store.get_accounts()}
        assert len(stubs) == 2

        for account in accounts:
            stub = stubs[account.id]
            assert stub == AccountStub.from_account(account)
            assert store.get_account_code(stub.code_root) == account.code
            assert store.get_account_storage(stub.storage_root) == account.storage
            assert store.get_account_vault(stub.vault_root) == account.vault
            assert store.is_account_committed(account.id) is account.on_chain


def test_nonce_update_after_reopen(db_path, account_factory):
    """Test the account update path across store instances"""
    with Store(StoreConfig(path=str(db_path))) as store:
        _insert_full_account(store, account_factory(account_id=99, nonce=1))

    with Store(StoreConfig(path=str(db_path))) as store:
        store.update_account(account_factory(account_id=99, nonce=2, on_chain=True))

    with Store(StoreConfig(path=str(db_path))) as store:
        assert store.get_account_stub(99).nonce == 2
        assert store.is_account_committed(99) is True


def test_store_opens_database_from_older_version(db_path, account):
    """Test that a file created at schema version 1 is upgraded on open"""
    conn = sqlite3.connect(str(db_path), isolation_level=None)
    update_to_latest(conn, MIGRATIONS[:1])
    conn.close()

    with Store(StoreConfig(path=str(db_path))) as store:
        _insert_full_account(store, account)
        assert store.get_accounts() == [AccountStub.from_account(account)]

    conn = sqlite3.connect(str(db_path))
    assert get_user_version(conn) == LATEST_SCHEMA_VERSION
    conn.close()


def test_account_rows_do_not_require_components(db_path, account):
    """Root columns are not enforced as foreign keys"""
    with Store(StoreConfig(path=str(db_path))) as store:
        store.insert_account(account)

        stub = store.get_account_stub(account.id)
        assert stub == AccountStub.from_account(account)
        assert store.get_account_code(stub.code_root) is None
