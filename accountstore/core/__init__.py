"""
Core value objects for AccountStore: digests, assets and account components.
"""

from accountstore.core.accounts import (
    Account,
    AccountCode,
    AccountStorage,
    AccountStub,
    AccountVault,
)
from accountstore.core.assets import Asset, FungibleAsset, NonFungibleAsset
from accountstore.core.crypto import Digest, Word

__all__ = [
    "Account",
    "AccountCode",
    "AccountStorage",
    "AccountStub",
    "AccountVault",
    "Asset",
    "FungibleAsset",
    "NonFungibleAsset",
    "Digest",
    "Word",
]
