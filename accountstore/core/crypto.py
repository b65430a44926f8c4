"""
Cryptographic primitives for AccountStore.

This module defines the fixed-size values that identify account components:
- Digest: a 32-byte hash with one canonical text form ("0x" + 64 hex chars)
- Word: four field elements, the value type of a storage slot
"""

import re
from dataclasses import dataclass

# Prime field used by the ledger protocol (2^64 - 2^32 + 1)
FIELD_MODULUS = 2**64 - 2**32 + 1
U64_MAX = 2**64 - 1

DIGEST_SIZE = 32
WORD_SIZE = 4

_DIGEST_HEX_RE = re.compile(r"0x[0-9a-f]{64}")

Word = tuple[int, int, int, int]


def is_felt(value: int) -> bool:
    """Check that value is a canonical field element."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < FIELD_MODULUS


def is_u64(value: int) -> bool:
    """Check that value fits in an unsigned 64-bit integer."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX


def make_word(values) -> Word:
    """
    Build a Word from an iterable of four field elements.

    Raises:
        ValueError: If the iterable does not hold exactly four valid elements
    """
    word = tuple(values)
    if len(word) != WORD_SIZE:
        raise ValueError(f"Word must have {WORD_SIZE} elements, got {len(word)}")
    for element in word:
        if not is_felt(element):
            raise ValueError(f"Word element {element!r} is not a field element")
    return word


@dataclass(frozen=True)
class Digest:
    """A 32-byte hash value."""

    value: bytes

    def __post_init__(self):
        if not isinstance(self.value, bytes):
            raise TypeError(f"Digest value must be bytes, got {type(self.value).__name__}")
        if len(self.value) != DIGEST_SIZE:
            raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(self.value)}")

    @classmethod
    def from_hex(cls, text: str) -> "Digest":
        """
        Parse the canonical text form of a digest.

        Args:
            text: "0x" followed by 64 lowercase hexadecimal characters

        Returns:
            Parsed Digest

        Raises:
            ValueError: If text is not in canonical form
        """
        if not isinstance(text, str) or not _DIGEST_HEX_RE.fullmatch(text):
            raise ValueError(f"Invalid digest encoding: {text!r}")
        return cls(bytes.fromhex(text[2:]))

    def to_hex(self) -> str:
        """Return the canonical text form of the digest."""
        return "0x" + self.value.hex()

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"Digest({self.to_hex()[:10]}...)"
