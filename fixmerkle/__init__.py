"""
fixmerkle

Fixed-height binary Merkle tree with incremental appends and
membership proofs verifiable against the root alone.
"""
from fixmerkle.core import (
    MerkleTree,
    Proof,
    verify_proof,
    TreeConfig,
    load_config,
    MerkleError,
    MerkleTreeFull,
    InsufficientHeight,
    IndexOutOfBounds,
)
from fixmerkle.crypto import Hasher, get_hasher, register_hasher

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "Proof",
    "verify_proof",
    "TreeConfig",
    "load_config",
    "MerkleError",
    "MerkleTreeFull",
    "InsufficientHeight",
    "IndexOutOfBounds",
    "Hasher",
    "get_hasher",
    "register_hasher",
]
