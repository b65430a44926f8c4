"""
Account value objects for AccountStore.

An account is made of an identifier, a nonce and three content-addressed
components:
- AccountCode: the procedures exposed by the account (root over procedure digests)
- AccountStorage: a sparse map of slot index to Word (root over slot leaves)
- AccountVault: the assets held by the account (commitment over the asset list)

Components derive their roots from their contents; the roots are what the
store uses as keys.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterator

from accountstore.core.assets import Asset, FungibleAsset, NonFungibleAsset
from accountstore.core.crypto import Digest, Word, is_felt, is_u64, make_word
from accountstore.core.utils import MerkleTree


@dataclass(frozen=True)
class AccountCode:
    """Account code: ordered procedure digests plus optional module source."""

    procedures: tuple[Digest, ...]
    module: str | None = None

    def __post_init__(self):
        procedures = tuple(self.procedures)
        for procedure in procedures:
            if not isinstance(procedure, Digest):
                raise TypeError(f"Procedure must be a Digest, got {type(procedure).__name__}")
        object.__setattr__(self, "procedures", procedures)

    @cached_property
    def root(self) -> Digest:
        """Merkle root over the procedure digests."""
        return MerkleTree(leaves=list(self.procedures)).get_root()


@dataclass(frozen=True)
class AccountStorage:
    """Sparse account storage flattened to a map of slot index to Word."""

    slots: dict[int, Word] = field(default_factory=dict)

    def __post_init__(self):
        normalized = {}
        for index in sorted(self.slots):
            if not is_u64(index):
                raise ValueError(f"Invalid storage slot index: {index!r}")
            normalized[index] = make_word(self.slots[index])
        object.__setattr__(self, "slots", normalized)

    def leaves(self) -> Iterator[tuple[int, Word]]:
        """Iterate over (slot index, value) pairs in ascending index order."""
        return iter(self.slots.items())

    @cached_property
    def root(self) -> Digest:
        """Merkle root over the slot leaves."""
        return MerkleTree([
            {"index": index, "value": list(value)} for index, value in self.leaves()
        ]).get_root()


@dataclass(frozen=True)
class AccountVault:
    """Ordered sequence of assets held by an account."""

    assets: tuple[Asset, ...] = ()

    def __post_init__(self):
        assets = tuple(self.assets)
        for asset in assets:
            if not isinstance(asset, (FungibleAsset, NonFungibleAsset)):
                raise TypeError(f"Unsupported asset type: {type(asset).__name__}")
        object.__setattr__(self, "assets", assets)

    @cached_property
    def commitment(self) -> Digest:
        """Commitment over the asset sequence."""
        return MerkleTree([asset.to_dict() for asset in self.assets]).get_root()


@dataclass(frozen=True)
class Account:
    """Full account: identity, nonce and components."""

    id: int
    nonce: int
    code: AccountCode
    storage: AccountStorage
    vault: AccountVault
    on_chain: bool = False

    def __post_init__(self):
        if not is_u64(self.id):
            raise ValueError(f"Invalid account id: {self.id!r}")
        if not is_felt(self.nonce):
            raise ValueError(f"Invalid account nonce: {self.nonce!r}")

    def is_on_chain(self) -> bool:
        return self.on_chain


@dataclass(frozen=True)
class AccountStub:
    """Account summary without component contents."""

    id: int
    nonce: int
    vault_root: Digest
    storage_root: Digest
    code_root: Digest

    def __post_init__(self):
        if not is_u64(self.id):
            raise ValueError(f"Invalid account id: {self.id!r}")
        if not is_felt(self.nonce):
            raise ValueError(f"Invalid account nonce: {self.nonce!r}")

    @classmethod
    def from_account(cls, account: Account) -> "AccountStub":
        return cls(
            id=account.id,
            nonce=account.nonce,
            vault_root=account.vault.commitment,
            storage_root=account.storage.root,
            code_root=account.code.root,
        )
