"""
Serialization boundary between account value objects and SQLite columns.

Wire format:
- Digests are stored as "0x" followed by 64 lowercase hex characters.
- Account ids and nonces are unsigned 64-bit values. SQLite only has a signed
  64-bit integer, so they are stored as the signed integer with the same bit
  pattern and reinterpreted back on read.
- Composite columns are compact JSON produced by the schemas in
  accountstore.core.schemas.
"""

import logging
import struct
from typing import Any

from pydantic import RootModel

from accountstore.core.accounts import AccountCode, AccountStorage, AccountVault
from accountstore.core.assets import Asset, asset_from_dict
from accountstore.core.crypto import Digest, Word
from accountstore.core.schemas import (
    AssetListRecord,
    ModuleRecord,
    ProcedureListRecord,
    StorageSlotsRecord,
)
from accountstore.storage.errors import DataDeserializationError, InputSerializationError

logger = logging.getLogger(__name__)


def u64_to_i64(value: int) -> int:
    """
    Reinterpret an unsigned 64-bit integer as signed, keeping the bit pattern.

    Raises:
        struct.error: If value is not an integer in [0, 2**64)
    """
    return struct.unpack("<q", struct.pack("<Q", value))[0]


def i64_to_u64(value: int) -> int:
    """
    Reinterpret a signed 64-bit integer as unsigned, keeping the bit pattern.

    Raises:
        struct.error: If value is not an integer in [-2**63, 2**63)
    """
    return struct.unpack("<Q", struct.pack("<q", value))[0]


def encode_u64(value: int, what: str = "value") -> int:
    """Encode an unsigned 64-bit value for an INTEGER column."""
    if isinstance(value, bool):
        raise InputSerializationError(f"Failed to encode {what}: expected integer, got bool")
    try:
        return u64_to_i64(value)
    except struct.error as e:
        raise InputSerializationError(f"Failed to encode {what} {value!r}: {e}") from e


def decode_u64(value: Any, what: str = "value") -> int:
    """Decode an INTEGER column written by encode_u64."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise DataDeserializationError(f"Failed to decode {what}: expected integer, got {type(value).__name__}")
    try:
        return i64_to_u64(value)
    except struct.error as e:
        raise DataDeserializationError(f"Failed to decode {what} {value!r}: {e}") from e


def encode_digest(digest: Digest, what: str = "digest") -> str:
    """Encode a digest to its canonical text form."""
    if not isinstance(digest, Digest):
        raise InputSerializationError(f"Failed to encode {what}: expected Digest, got {type(digest).__name__}")
    return digest.to_hex()


def decode_digest(text: Any, what: str = "digest") -> Digest:
    """Decode the canonical text form of a digest."""
    try:
        return Digest.from_hex(text)
    except ValueError as e:
        raise DataDeserializationError(f"Failed to decode {what}: {e}") from e


def _dump(record_type: type[RootModel], value: Any, what: str) -> str:
    try:
        return record_type(value).model_dump_json()
    except (ValueError, TypeError) as e:
        # pydantic ValidationError is a ValueError
        raise InputSerializationError(f"Failed to encode {what}: {e}") from e


def _load(record_type: type[RootModel], text: Any, what: str) -> Any:
    try:
        return record_type.model_validate_json(text).root
    except (ValueError, TypeError) as e:
        raise DataDeserializationError(f"Failed to decode {what}: {e}") from e


def encode_procedures(code: AccountCode) -> str:
    procedures = [encode_digest(p, "procedure digest") for p in code.procedures]
    return _dump(ProcedureListRecord, procedures, "account code procedures")


def decode_procedures(text: Any) -> list[Digest]:
    return [Digest.from_hex(p) for p in _load(ProcedureListRecord, text, "account code procedures")]


def encode_module(code: AccountCode) -> str:
    """
    Encode module source; a missing module is stored as JSON null.

    A module that is not source text has no serializer and is stored as
    missing as well.
    """
    module = code.module
    if module is not None and not isinstance(module, str):
        logger.warning(f"Account code {code.root} module of type {type(module).__name__} "
                       f"has no serializer, storing it as missing")
        module = None
    return _dump(ModuleRecord, module, "account code module")


def decode_module(text: Any) -> str | None:
    return _load(ModuleRecord, text, "account code module")


def encode_slots(storage: AccountStorage) -> str:
    slots = {index: tuple(value) for index, value in storage.leaves()}
    return _dump(StorageSlotsRecord, slots, "account storage slots")


def decode_slots(text: Any) -> dict[int, Word]:
    slots = _load(StorageSlotsRecord, text, "account storage slots")
    return {index: tuple(value) for index, value in slots.items()}


def encode_assets(vault: AccountVault) -> str:
    try:
        assets = [asset.to_dict() for asset in vault.assets]
    except AttributeError as e:
        raise InputSerializationError(f"Failed to encode account vault assets: {e}") from e
    return _dump(AssetListRecord, assets, "account vault assets")


def decode_assets(text: Any) -> list[Asset]:
    records = _load(AssetListRecord, text, "account vault assets")
    try:
        return [asset_from_dict(record.model_dump()) for record in records]
    except ValueError as e:
        raise DataDeserializationError(f"Failed to decode account vault assets: {e}") from e
