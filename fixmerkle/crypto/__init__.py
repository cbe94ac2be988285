"""
Hash primitives for fixmerkle.

This module provides:
- Hashing functions (SHA-256, Keccak-256, double SHA-256)
- The Hasher strategy the tree and proofs depend on
- A small registry so proofs can name their hash on the wire

Design Notes:
-------------
The tree never calls a concrete algorithm directly. It only needs two
operations:

    hash(data)            -> digest
    combine(left, right)  -> hash(left || right)

Any digest function can be wrapped in a Hasher. Node combination has no
domain prefix, so roots stay compatible with trees built elsewhere with
the plain H(left || right) rule.
"""

import hashlib
from dataclasses import dataclass
from typing import Callable, Dict, List

from Crypto.Hash import keccak


# =============================================================================
# Hashing
# =============================================================================


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash.

    Default digest for Merkle trees.
    """
    return hashlib.sha256(data).digest()


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (Ethereum-style).

    Used for: compatibility with EVM-side verifiers.
    """
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def double_sha256(data: bytes) -> bytes:
    """
    Compute SHA-256(SHA-256(data)).

    Bitcoin convention.
    """
    return sha256(sha256(data))


# =============================================================================
# Hasher Strategy
# =============================================================================


@dataclass(frozen=True)
class Hasher:
    """
    A named digest strategy.

    Attributes:
        name: Registry name (e.g. "sha256"), carried in serialized proofs
        digest: Function mapping bytes to a fixed-length digest
        digest_size: Output length in bytes
    """
    name: str
    digest: Callable[[bytes], bytes]
    digest_size: int

    def hash(self, data: bytes) -> bytes:
        """Hash a single byte buffer."""
        return self.digest(bytes(data))

    def combine(self, left: bytes, right: bytes) -> bytes:
        """Hash two children to produce parent node."""
        return self.digest(bytes(left) + bytes(right))


SHA256 = Hasher(name="sha256", digest=sha256, digest_size=32)
KECCAK256 = Hasher(name="keccak256", digest=keccak256, digest_size=32)
DOUBLE_SHA256 = Hasher(name="double_sha256", digest=double_sha256, digest_size=32)

DEFAULT_HASHER = SHA256

_HASHERS: Dict[str, Hasher] = {
    SHA256.name: SHA256,
    KECCAK256.name: KECCAK256,
    DOUBLE_SHA256.name: DOUBLE_SHA256,
}


def register_hasher(hasher: Hasher) -> None:
    """
    Make a custom strategy resolvable by name.

    Args:
        hasher: Strategy to register; replaces any existing entry with the same name
    """
    _HASHERS[hasher.name] = hasher


def get_hasher(name: str) -> Hasher:
    """
    Resolve a hasher by registry name.

    Raises:
        ValueError: If no hasher is registered under this name
    """
    try:
        return _HASHERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown hash function {name!r}, expected one of {available_hashers()}"
        ) from None


def available_hashers() -> List[str]:
    """Names of all registered hashers."""
    return sorted(_HASHERS)


# =============================================================================
# Utility Functions
# =============================================================================


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to hex string with 0x prefix."""
    return "0x" + data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string (with or without 0x prefix) to bytes."""
    if hex_str.startswith("0x") or hex_str.startswith("0X"):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)


__all__ = [
    "sha256",
    "keccak256",
    "double_sha256",
    "Hasher",
    "SHA256",
    "KECCAK256",
    "DOUBLE_SHA256",
    "DEFAULT_HASHER",
    "register_hasher",
    "get_hasher",
    "available_hashers",
    "bytes_to_hex",
    "hex_to_bytes",
]
