"""
Pydantic schemas for persisted AccountStore records.

This module defines the canonical JSON encoding of the composite columns:
- account_code.procedures: list of digest strings
- account_code.module: module source, or null when unavailable
- account_storage.slots: map of slot index to Word
- account_vault.assets: list of asset records discriminated by "kind"

The same schemas validate records on the way in and on the way out.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel

from accountstore.core.crypto import FIELD_MODULUS, U64_MAX

DigestHex = Annotated[str, Field(pattern=r"^0x[0-9a-f]{64}$")]
FeltValue = Annotated[int, Field(ge=0, lt=FIELD_MODULUS, strict=True)]
U64Value = Annotated[int, Field(ge=0, le=U64_MAX, strict=True)]
# JSON object keys are strings, so slot indexes are parsed in lax mode
SlotIndex = Annotated[int, Field(ge=0, le=U64_MAX)]
WordValue = tuple[FeltValue, FeltValue, FeltValue, FeltValue]


class ProcedureListRecord(RootModel[list[DigestHex]]):
    """Ordered procedure digests of an account code."""


class ModuleRecord(RootModel[Union[str, None]]):
    """Module source; null means no module data is available."""


class StorageSlotsRecord(RootModel[dict[SlotIndex, WordValue]]):
    """Storage slots keyed by slot index."""


class FungibleAssetRecord(BaseModel):
    """Serialized fungible asset"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["fungible"] = Field("fungible", description="Asset kind discriminator")
    faucet_id: U64Value = Field(..., description="Issuing faucet account id")
    amount: U64Value = Field(..., description="Asset amount")


class NonFungibleAssetRecord(BaseModel):
    """Serialized non-fungible asset"""
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["non_fungible"] = Field("non_fungible", description="Asset kind discriminator")
    faucet_id: U64Value = Field(..., description="Issuing faucet account id")
    data_hash: DigestHex = Field(..., description="Hash of the asset data")


AssetRecord = Annotated[
    Union[FungibleAssetRecord, NonFungibleAssetRecord],
    Field(discriminator="kind"),
]


class AssetListRecord(RootModel[list[AssetRecord]]):
    """Ordered assets of an account vault."""
