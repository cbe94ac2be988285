"""
Merkle membership proofs.

A Proof is an immutable bundle of sibling digests (the lemma) and
left/right markers (the path), lowest level first. It holds no
reference to the tree that produced it, so a verifier only needs the
trusted root and the raw leaf bytes.

Path semantics:
--------------
    path[i] is True   -> sibling is on the right, parent = H(current || sibling)
    path[i] is False  -> sibling is on the left,  parent = H(sibling || current)

Verification never raises. Empty proofs, proofs whose lemma and path
lengths differ, siblings or roots that are not digest_size bytes long,
and non-bytes arguments all verify as False.

Wire format:
-----------
    {"hash": "sha256", "lemma": ["0x..", ...], "path": [true, ...]}
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from fixmerkle.crypto import (
    DEFAULT_HASHER,
    Hasher,
    bytes_to_hex,
    get_hasher,
    hex_to_bytes,
)
from fixmerkle.utils.logger import get_logger

logger = get_logger("proof")


# =============================================================================
# Proof
# =============================================================================


@dataclass(frozen=True)
class Proof:
    """
    Membership proof for a single leaf.

    Attributes:
        lemma: Sibling digests from leaf level to just below the root
        path: True where the sibling sits to the right
        hasher: Strategy used to recompute the root
    """
    lemma: Tuple[bytes, ...]
    path: Tuple[bool, ...]
    hasher: Hasher = field(default=DEFAULT_HASHER)

    def __post_init__(self):
        object.__setattr__(self, "lemma", tuple(bytes(h) for h in self.lemma))
        object.__setattr__(self, "path", tuple(bool(p) for p in self.path))

    def __len__(self) -> int:
        return len(self.lemma)

    @property
    def index(self) -> int:
        """Leaf position encoded by the path (bit i set where the path node is a right child)."""
        return sum(1 << i for i, is_right in enumerate(self.path) if not is_right)

    def is_well_formed(self) -> bool:
        """Non-empty, one direction marker per sibling, every sibling a full digest."""
        if len(self.lemma) == 0 or len(self.lemma) != len(self.path):
            return False
        return all(len(sibling) == self.hasher.digest_size for sibling in self.lemma)

    def compute_root(self, leaf_value: bytes) -> bytes:
        """
        Fold the lemma over hash(leaf_value).

        Assumes a well-formed proof; verify() is the checked entry point.
        """
        current = self.hasher.hash(leaf_value)
        for sibling, is_right in zip(self.lemma, self.path):
            if is_right:
                current = self.hasher.combine(current, sibling)
            else:
                current = self.hasher.combine(sibling, current)
        return current

    def verify(self, root: bytes, leaf_value: bytes) -> bool:
        """
        Check that leaf_value is committed under root.

        Args:
            root: Trusted root digest
            leaf_value: Raw (unhashed) leaf bytes

        Returns:
            True if the recomputed root equals root byte-for-byte
        """
        if not self.is_well_formed():
            return False
        if not isinstance(root, (bytes, bytearray, memoryview)):
            return False
        if len(root) != self.hasher.digest_size:
            return False
        if not isinstance(leaf_value, (bytes, bytearray, memoryview)):
            return False

        return self.compute_root(leaf_value) == bytes(root)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "hash": self.hasher.name,
            "lemma": [bytes_to_hex(h) for h in self.lemma],
            "path": list(self.path),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], hasher: Optional[Hasher] = None) -> "Proof":
        """
        Deserialize from a dict produced by to_dict().

        Args:
            data: Decoded payload
            hasher: Strategy to use; when None it is resolved from data["hash"]

        Raises:
            ValueError: If the payload does not match the wire format
        """
        try:
            model = ProofModel.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid proof payload: {e}") from e

        if hasher is None:
            hasher = get_hasher(model.hash)

        lemma = tuple(hex_to_bytes(h) for h in model.lemma)
        for i, sibling in enumerate(lemma):
            if len(sibling) != hasher.digest_size:
                raise ValueError(
                    f"lemma[{i}] must be {hasher.digest_size} bytes for {hasher.name}, "
                    f"got {len(sibling)}"
                )

        return cls(
            lemma=lemma,
            path=tuple(model.path),
            hasher=hasher,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_json(cls, text: str, hasher: Optional[Hasher] = None) -> "Proof":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid proof JSON: {e}") from e
        return cls.from_dict(data, hasher=hasher)


# =============================================================================
# Wire Model
# =============================================================================


class ProofModel(BaseModel):
    """Schema for serialized proofs."""

    model_config = ConfigDict(extra="forbid", strict=True)

    hash: str = DEFAULT_HASHER.name
    lemma: List[str]
    path: List[bool]

    @field_validator("lemma")
    @classmethod
    def _check_hex(cls, value: List[str]) -> List[str]:
        for i, item in enumerate(value):
            try:
                hex_to_bytes(item)
            except ValueError:
                raise ValueError(f"lemma[{i}] is not valid hex") from None
        return value


# =============================================================================
# Convenience Functions
# =============================================================================


def verify_proof(proof: Proof, root: bytes, leaf_value: bytes) -> bool:
    """
    Verify a membership proof.

    Standalone verification without the tree.
    """
    result = proof.verify(root, leaf_value)
    if not result:
        logger.debug(f"Proof rejected: {len(proof.lemma)} siblings, {len(proof.path)} markers")
    return result


__all__ = [
    "Proof",
    "ProofModel",
    "verify_proof",
]
