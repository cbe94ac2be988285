"""
Unit tests for hash primitives and hasher strategies.

Tests cover:
1. Hashing functions
2. Hasher combine semantics
3. Hasher registry
4. Hex helpers
"""

import hashlib

import pytest

from fixmerkle.crypto import (
    DEFAULT_HASHER,
    DOUBLE_SHA256,
    KECCAK256,
    SHA256,
    Hasher,
    available_hashers,
    bytes_to_hex,
    double_sha256,
    get_hasher,
    hex_to_bytes,
    keccak256,
    register_hasher,
    sha256,
)


class TestHashing:
    """Tests for hash functions."""

    def test_sha256_known_vector(self):
        assert sha256(b"0").hex() == (
            "5feceb66ffc86f38d952786c6d696c79c2dbc239dd4e91b46729d73a27fb57e9"
        )

    def test_keccak256_known_vector(self):
        """Keccak-256 of empty input (differs from SHA3-256)."""
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_double_sha256(self):
        assert double_sha256(b"abc") == sha256(sha256(b"abc"))

    def test_digest_lengths(self):
        for fn in (sha256, keccak256, double_sha256):
            assert len(fn(b"data")) == 32


class TestHasher:
    """Tests for the Hasher strategy."""

    def test_default_is_sha256(self):
        assert DEFAULT_HASHER is SHA256

    def test_hash(self):
        assert SHA256.hash(b"leaf") == sha256(b"leaf")

    def test_combine_is_plain_concatenation(self):
        left, right = sha256(b"l"), sha256(b"r")

        assert SHA256.combine(left, right) == sha256(left + right)

    def test_combine_is_ordered(self):
        left, right = sha256(b"l"), sha256(b"r")

        assert SHA256.combine(left, right) != SHA256.combine(right, left)

    def test_accepts_bytearray(self):
        assert SHA256.hash(bytearray(b"x")) == sha256(b"x")

    def test_custom_hasher(self):
        blake = Hasher(
            name="blake2b-256",
            digest=lambda data: hashlib.blake2b(data, digest_size=32).digest(),
            digest_size=32,
        )

        assert blake.hash(b"x") == hashlib.blake2b(b"x", digest_size=32).digest()


class TestRegistry:
    """Tests for resolving hashers by name."""

    def test_builtin_names(self):
        assert get_hasher("sha256") is SHA256
        assert get_hasher("keccak256") is KECCAK256
        assert get_hasher("double_sha256") is DOUBLE_SHA256

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown hash function"):
            get_hasher("md5")

    def test_register_custom(self):
        sha512_256 = Hasher(
            name="test-sha512-256",
            digest=lambda data: hashlib.sha512(data).digest()[:32],
            digest_size=32,
        )

        register_hasher(sha512_256)

        assert get_hasher("test-sha512-256") is sha512_256
        assert "test-sha512-256" in available_hashers()


class TestHexHelpers:
    """Tests for hex conversion."""

    def test_bytes_to_hex(self):
        assert bytes_to_hex(b"\x01\xff") == "0x01ff"

    def test_hex_to_bytes_with_and_without_prefix(self):
        assert hex_to_bytes("0x01ff") == b"\x01\xff"
        assert hex_to_bytes("0X01FF") == b"\x01\xff"
        assert hex_to_bytes("01ff") == b"\x01\xff"

    def test_hex_to_bytes_invalid(self):
        with pytest.raises(ValueError):
            hex_to_bytes("0xzz")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
