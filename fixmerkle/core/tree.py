"""
Fixed-height binary Merkle tree.

Conceptual Background:
---------------------
The tree commits an ordered list of byte values to a single root digest.
Its height H is fixed at construction, so it always has 2**H leaf slots.
Slots without a value hold the sentinel digest hash(b"0").

Layout:
------
Every level is stored in one flat list, bottom to top:

    [ level 0: 2**H leaf digests | level 1: 2**(H-1) | ... | level H: root ]

    offset(0) = 0
    offset(k) = offset(k-1) + 2**(H-(k-1))

A node at per-level index i has its sibling at i ^ 1 and its parent at
i // 2 on the next level. All walks keep the per-level index and the
level offset in lockstep.

Properties:
----------
- Build: O(2**H)
- Insert: O(H), only the new leaf's ancestor chain is rehashed
- Root: O(1)
- Prove: O(H)
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from fixmerkle.core.config import TreeConfig
from fixmerkle.core.errors import IndexOutOfBounds, InsufficientHeight, MerkleTreeFull
from fixmerkle.core.proof import Proof
from fixmerkle.crypto import DEFAULT_HASHER, Hasher
from fixmerkle.utils.logger import get_logger
from fixmerkle.utils.validation import require_height, require_leaf

logger = get_logger("tree")


# =============================================================================
# Constants
# =============================================================================

# Raw value whose digest fills unused leaf slots
PADDING_SENTINEL = b"0"


def level_offsets(height: int) -> List[int]:
    """
    Start position of each level in the flat node table.

    Returns:
        height + 1 offsets, level 0 first
    """
    offsets = [0]
    for level in range(1, height + 1):
        offsets.append(offsets[-1] + 2 ** (height - (level - 1)))
    return offsets


# =============================================================================
# Merkle Tree
# =============================================================================


class MerkleTree:
    """
    Append-only Merkle tree with a fixed number of leaf slots.

    Attributes:
        height: Number of levels above the leaves (capacity is 2**height)
        hasher: Digest strategy used for leaves and internal nodes
    """

    def __init__(
        self,
        height: int,
        hasher: Optional[Hasher] = None,
        leaves: Iterable[bytes] = (),
    ):
        self._height = require_height(height)
        self._hasher = hasher or DEFAULT_HASHER
        self._offsets = level_offsets(self._height)

        values = [require_leaf(leaf, f"leaves[{i}]") for i, leaf in enumerate(leaves)]
        if len(values) > self.capacity:
            raise InsufficientHeight(len(values))

        self._leaves: List[bytes] = values
        self._nodes: List[bytes] = self._build(values)

        logger.debug(
            f"Built Merkle tree: height={self._height}, leaves={len(values)}, "
            f"hash={self._hasher.name}"
        )

    @classmethod
    def from_leaves(
        cls,
        leaves: Sequence[bytes],
        height: int,
        hasher: Optional[Hasher] = None,
    ) -> "MerkleTree":
        """
        Build a tree over leaves.

        Args:
            leaves: Raw leaf values in tree order
            height: Tree height; must satisfy len(leaves) <= 2**height
            hasher: Digest strategy (default SHA-256)

        Raises:
            InsufficientHeight: If there are more leaves than slots
        """
        return cls(height, hasher=hasher, leaves=leaves)

    @classmethod
    def from_config(cls, config: TreeConfig, leaves: Sequence[bytes] = ()) -> "MerkleTree":
        """Build a tree with the height and hash named by config."""
        return cls(config.height, hasher=config.hasher(), leaves=leaves)

    def _build(self, leaves: List[bytes]) -> List[bytes]:
        """Hash leaves, pad to capacity and combine level by level."""
        hashes = [self._hasher.hash(leaf) for leaf in leaves]
        hashes.extend([self._hasher.hash(PADDING_SENTINEL)] * (self.capacity - len(leaves)))

        nodes = list(hashes)
        for _ in range(self._height):
            hashes = [
                self._hasher.combine(hashes[i], hashes[i + 1])
                for i in range(0, len(hashes), 2)
            ]
            nodes.extend(hashes)

        return nodes

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def height(self) -> int:
        return self._height

    @property
    def capacity(self) -> int:
        """Number of leaf slots (2**height)."""
        return 2 ** self._height

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def leaves(self) -> Tuple[bytes, ...]:
        return tuple(self._leaves)

    def __len__(self) -> int:
        return len(self._leaves)

    def is_full(self) -> bool:
        return len(self._leaves) == self.capacity

    # =========================================================================
    # Mutation
    # =========================================================================

    def insert(self, value: bytes) -> int:
        """
        Append a value in the next free slot.

        Only the path from the new leaf to the root is rehashed. Siblings
        are read from the current table: slots fill left to right, so every
        sibling is either a real leaf subtree or padding, both already final.

        Args:
            value: Raw leaf bytes

        Returns:
            Index of the inserted leaf

        Raises:
            MerkleTreeFull: If every slot is taken (tree is left unchanged)

        The new digests are all computed before the tree is touched, so an
        exception from the hasher also leaves the tree unchanged.
        """
        value = require_leaf(value, "value")
        if self.is_full():
            raise MerkleTreeFull()

        leaf_index = len(self._leaves)
        index = leaf_index
        current = self._hasher.hash(value)
        updates = [(index, current)]

        for level in range(self._height):
            offset = self._offsets[level]
            if index % 2 == 0:
                current = self._hasher.combine(current, self._nodes[offset + index + 1])
            else:
                current = self._hasher.combine(self._nodes[offset + index - 1], current)

            index //= 2
            updates.append((self._offsets[level + 1] + index, current))

        for position, digest in updates:
            self._nodes[position] = digest
        self._leaves.append(value)

        logger.debug(f"Inserted leaf {leaf_index}/{self.capacity}")
        return leaf_index

    # =========================================================================
    # Queries
    # =========================================================================

    def root(self) -> Optional[bytes]:
        """
        Get the Merkle root.

        Returns:
            Root digest, or None for a height-0 tree (a single slot, no internal node)
        """
        if self._height == 0:
            return None
        return self._nodes[-1]

    def get_value(self, index: int) -> Optional[bytes]:
        """Raw leaf bytes at index, or None if no leaf is stored there."""
        if index < 0 or index >= len(self._leaves):
            return None
        return self._leaves[index]

    def get_proof(self, index: int) -> Proof:
        """
        Generate a membership proof for a leaf.

        Args:
            index: Leaf index

        Returns:
            Proof with one (sibling, is_right) pair per level below the root

        Raises:
            IndexOutOfBounds: If no leaf is stored at index
        """
        if index < 0 or index >= len(self._leaves):
            raise IndexOutOfBounds(index)

        lemma = []
        path = []

        for level in range(self._height):
            offset = self._offsets[level]
            # Sibling node and position: right -> True, left -> False
            if index % 2 == 0:
                lemma.append(self._nodes[offset + index + 1])
                path.append(True)
            else:
                lemma.append(self._nodes[offset + index - 1])
                path.append(False)
            index //= 2

        return Proof(lemma=tuple(lemma), path=tuple(path), hasher=self._hasher)

    def level(self, level: int) -> List[bytes]:
        """
        Digests stored at one level (0 = leaf digests, height = root).

        Raises:
            IndexError: If level is outside [0, height]
        """
        if level < 0 or level > self._height:
            raise IndexError(f"Level {level} out of range [0, {self._height}]")
        start = self._offsets[level]
        return self._nodes[start:start + 2 ** (self._height - level)]

    def __repr__(self) -> str:
        root = self.root()
        root_hex = root.hex() if root is not None else None
        return (
            f"MerkleTree(height={self._height}, leaves={len(self._leaves)}/{self.capacity}, "
            f"hash={self._hasher.name}, root={root_hex})"
        )


__all__ = [
    "MerkleTree",
    "PADDING_SENTINEL",
    "level_offsets",
]
