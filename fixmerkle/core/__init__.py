"""Merkle tree, proofs and configuration"""
from fixmerkle.core.errors import (
    MerkleError,
    MerkleTreeFull,
    InsufficientHeight,
    IndexOutOfBounds,
)
from fixmerkle.core.config import TreeConfig, load_config
from fixmerkle.core.proof import Proof, ProofModel, verify_proof
from fixmerkle.core.tree import MerkleTree, PADDING_SENTINEL, level_offsets

__all__ = [
    "MerkleError",
    "MerkleTreeFull",
    "InsufficientHeight",
    "IndexOutOfBounds",
    "TreeConfig",
    "load_config",
    "Proof",
    "ProofModel",
    "verify_proof",
    "MerkleTree",
    "PADDING_SENTINEL",
    "level_offsets",
]
