"""
Pytest configuration for AccountStore.

Ensures project root is on sys.path so `import accountstore` resolves during
test collection, and provides sample account objects and an opened store.
"""

import os
import sys
import pytest

# Compute project root (parent of this tests directory)
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from accountstore.core.accounts import Account, AccountCode, AccountStorage, AccountVault  # noqa: E402
from accountstore.core.assets import FungibleAsset, NonFungibleAsset  # noqa: E402
from accountstore.core.utils import generate_hash  # noqa: E402
from accountstore.storage.store import Store, StoreConfig  # noqa: E402


def _make_account_code(name: str = "wallet", module: str | None = "export.receive_asset") -> AccountCode:
    """Build account code with two procedures derived from name."""
    return AccountCode(
        procedures=[generate_hash(f"{name}::receive_asset"), generate_hash(f"{name}::send_asset")],
        module=module,
    )


def _make_account_storage(seed: int = 1) -> AccountStorage:
    return AccountStorage(slots={
        0: (seed, 0, 0, 0),
        7: (1, 2, 3, seed),
        2**64 - 1: (2**64 - 2**32, 0, seed, 0),
    })


def _make_account_vault(seed: int = 1) -> AccountVault:
    return AccountVault(assets=[
        FungibleAsset(faucet_id=0xA000_0000_0000_0001, amount=100 * seed),
        NonFungibleAsset(faucet_id=0xB000_0000_0000_0002, data_hash=generate_hash(f"nft-{seed}")),
    ])


def _make_account(account_id: int = 0x0102_0304_0506_0708, nonce: int = 1, seed: int = 1,
                 on_chain: bool = False) -> Account:
    return Account(
        id=account_id,
        nonce=nonce,
        code=_make_account_code(f"wallet-{seed}"),
        storage=_make_account_storage(seed),
        vault=_make_account_vault(seed),
        on_chain=on_chain,
    )


@pytest.fixture
def db_path(tmp_path):
    """Path to a not yet existing database file."""
    return tmp_path / "store.sqlite3"


@pytest.fixture
def store(db_path):
    """Opened store backed by a fresh database file."""
    s = Store(StoreConfig(path=str(db_path)))
    yield s
    s.close()


@pytest.fixture
def account_code_factory():
    return _make_account_code


@pytest.fixture
def account_storage_factory():
    return _make_account_storage


@pytest.fixture
def account_vault_factory():
    return _make_account_vault


@pytest.fixture
def account_factory():
    """Factory building full accounts; keyword arguments override id, nonce, seed and on_chain."""
    return _make_account


@pytest.fixture
def account():
    return _make_account()
