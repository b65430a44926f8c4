"""
Asset value objects held in an account vault.

Two kinds of assets exist:
- FungibleAsset: an amount issued by a faucet account
- NonFungibleAsset: a unique item issued by a faucet, identified by a data hash
"""

from dataclasses import dataclass
from typing import Any, Union

from accountstore.core.crypto import Digest, is_u64


@dataclass(frozen=True)
class FungibleAsset:
    """Fungible asset issued by a faucet."""

    faucet_id: int
    amount: int

    def __post_init__(self):
        if not is_u64(self.faucet_id):
            raise ValueError(f"Invalid faucet id: {self.faucet_id!r}")
        if not is_u64(self.amount):
            raise ValueError(f"Invalid fungible amount: {self.amount!r}")

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "fungible", "faucet_id": self.faucet_id, "amount": self.amount}


@dataclass(frozen=True)
class NonFungibleAsset:
    """Non-fungible asset issued by a faucet."""

    faucet_id: int
    data_hash: Digest

    def __post_init__(self):
        if not is_u64(self.faucet_id):
            raise ValueError(f"Invalid faucet id: {self.faucet_id!r}")
        if not isinstance(self.data_hash, Digest):
            raise TypeError("data_hash must be a Digest")

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "non_fungible",
            "faucet_id": self.faucet_id,
            "data_hash": self.data_hash.to_hex(),
        }


Asset = Union[FungibleAsset, NonFungibleAsset]


def asset_from_dict(data: dict[str, Any]) -> Asset:
    """
    Reconstruct an asset from its dictionary form.

    Raises:
        ValueError: If the asset kind is unknown or a field is invalid
    """
    kind = data.get("kind")
    if kind == "fungible":
        return FungibleAsset(faucet_id=data["faucet_id"], amount=data["amount"])
    if kind == "non_fungible":
        return NonFungibleAsset(
            faucet_id=data["faucet_id"],
            data_hash=Digest.from_hex(data["data_hash"]),
        )
    raise ValueError(f"Unknown asset kind: {kind!r}")
