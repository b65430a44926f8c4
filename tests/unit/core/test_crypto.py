"""
Test suite for cryptographic primitives

This module contains unit tests for Digest text encoding and Word construction.
"""

import pytest
from hypothesis import given, strategies as st

from accountstore.core.crypto import FIELD_MODULUS, Digest, is_felt, is_u64, make_word


def test_digest_hex_round_trip():
    """Test that a digest parses back from its canonical text"""
    digest = Digest(bytes(range(32)))
    text = digest.to_hex()

    assert text.startswith("0x")
    assert len(text) == 66
    assert text == text.lower()
    assert Digest.from_hex(text) == digest
    assert str(digest) == text


@given(raw=st.binary(min_size=32, max_size=32))
def test_digest_hex_round_trip_is_byte_identical(raw):
    """Test that every 32-byte value survives the text encoding"""
    assert Digest.from_hex(Digest(raw).to_hex()).value == raw


@pytest.mark.parametrize("text", [
    "",
    "0x",
    "00" * 32,                      # missing prefix
    "0x" + "ab" * 31,               # too short
    "0x" + "ab" * 33,               # too long
    "0x" + "AB" * 32,               # uppercase is not canonical
    "0x" + "zz" * 32,
    '"0x' + "ab" * 32 + '"',        # JSON-quoted
])
def test_digest_from_hex_rejects_non_canonical_text(text):
    """Test that only the canonical form is accepted"""
    with pytest.raises(ValueError):
        Digest.from_hex(text)


def test_digest_from_hex_rejects_non_string():
    with pytest.raises(ValueError):
        Digest.from_hex(None)


def test_digest_requires_32_bytes():
    with pytest.raises(ValueError):
        Digest(b"\x00" * 31)
    with pytest.raises(TypeError):
        Digest("00" * 32)


def test_make_word():
    """Test word construction and validation"""
    assert make_word([1, 2, 3, 4]) == (1, 2, 3, 4)
    assert make_word((FIELD_MODULUS - 1, 0, 0, 0))[0] == FIELD_MODULUS - 1

    with pytest.raises(ValueError):
        make_word([1, 2, 3])
    with pytest.raises(ValueError):
        make_word([FIELD_MODULUS, 0, 0, 0])
    with pytest.raises(ValueError):
        make_word([-1, 0, 0, 0])


def test_integer_bounds():
    assert is_u64(0)
    assert is_u64(2**64 - 1)
    assert not is_u64(2**64)
    assert not is_u64(-1)
    assert not is_u64(True)

    assert is_felt(FIELD_MODULUS - 1)
    assert not is_felt(FIELD_MODULUS)
