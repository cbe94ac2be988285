"""
Error kinds raised by the Merkle tree.

All three are local and deterministic: retrying the same call on the same
tree fails the same way. Proof verification never raises; a bad proof is
simply a False result.
"""


class MerkleError(Exception):
    """Base class for Merkle tree errors."""


class MerkleTreeFull(MerkleError):
    """Insert attempted when every leaf slot is already occupied."""

    def __init__(self):
        super().__init__("Merkle tree is full")


class InsufficientHeight(MerkleError):
    """
    Build attempted with more leaves than 2**height.

    Attributes:
        num_leaves: Number of leaves that were supplied
    """

    def __init__(self, num_leaves: int):
        self.num_leaves = num_leaves
        super().__init__(
            f"Insufficient height for building tree with {num_leaves} leaves"
        )


class IndexOutOfBounds(MerkleError, IndexError):
    """
    Proof requested for a leaf index that holds no value.

    Attributes:
        index: The requested leaf index
    """

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Querying out of bounds leaf at index {index}")


__all__ = [
    "MerkleError",
    "MerkleTreeFull",
    "InsufficientHeight",
    "IndexOutOfBounds",
]
