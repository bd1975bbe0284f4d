"""
Merkle Inclusion Proofs
Proof generation against a built tree and stateless proof replay.

This module provides:
- MerkleProof: sibling digests + direction flags, index-aligned
- generate_proof: walk a leaf's path to the root collecting siblings
- compute_root / verify_proof: replay a proof over a claimed leaf value
- require_valid_proof: replay and raise VerificationFailedError on mismatch
- MerkleProver / MerkleVerifier: class-based wrappers

Ordering Contract:
- Entries are emitted leaf-adjacent first, root-adjacent last, and are
  replayed in that same order. Proofs are never reversed.
- directions[k] is True when the node being authenticated at level k was
  the LEFT child, so replay computes hash_pair(current, sibling); when
  False it computes hash_pair(sibling, current).
"""
from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Any, Sequence

from core.crypto.hashing import DIGEST_SIZE, digest_from_hex, hash_pair, sha256, to_hex
from core.errors import MalformedProofError, VerificationFailedError
from core.merkle.merkle_tree import MerkleTree


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Immutable and hashable: any sequences passed in are stored as tuples.

    Attributes:
        siblings: Sibling digests from the leaf level up to the root level
        directions: True where the authenticated node was the left child
        index: The 0-based leaf index this proof was generated for
    """
    siblings: tuple[bytes, ...] = ()
    directions: tuple[bool, ...] = ()
    index: int = 0

    def __post_init__(self) -> None:
        """Reject malformed proofs before anyone tries to replay them."""
        if len(self.siblings) != len(self.directions):
            raise MalformedProofError(
                f"Proof has {len(self.siblings)} siblings but "
                f"{len(self.directions)} directions",
                details={
                    "siblings": len(self.siblings),
                    "directions": len(self.directions),
                },
            )
        for level, sibling in enumerate(self.siblings):
            if not isinstance(sibling, (bytes, bytearray)) or len(sibling) != DIGEST_SIZE:
                raise MalformedProofError(
                    f"Sibling at level {level} is not a {DIGEST_SIZE}-byte digest",
                    details={"level": level},
                )
        for level, direction in enumerate(self.directions):
            if not isinstance(direction, bool):
                raise MalformedProofError(
                    f"Direction at level {level} must be a bool, "
                    f"got {type(direction).__name__}",
                    details={"level": level},
                )
        if self.index < 0:
            raise MalformedProofError(f"Leaf index must be non-negative, got {self.index}")

        object.__setattr__(self, "siblings", tuple(bytes(s) for s in self.siblings))
        object.__setattr__(self, "directions", tuple(self.directions))

    def __len__(self) -> int:
        return len(self.siblings)

    @property
    def entries(self) -> list[tuple[bytes, bool]]:
        """(sibling, direction) pairs in replay order."""
        return list(zip(self.siblings, self.directions))

    @classmethod
    def from_parts(
        cls,
        siblings: Sequence[bytes],
        directions: Sequence[bool],
        index: int = 0,
    ) -> "MerkleProof":
        return cls(
            siblings=tuple(siblings),
            directions=tuple(directions),
            index=index,
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire form: hex digests and bool flags, equal length."""
        return {
            "index": self.index,
            "proof": [to_hex(s) for s in self.siblings],
            "directions": list(self.directions),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerkleProof":
        """
        Parse the wire form produced by to_dict().

        Raises:
            MalformedProofError: If fields are missing, lengths differ or
                                 a digest does not decode to 32 bytes
        """
        try:
            raw_siblings = data["proof"]
            raw_directions = data["directions"]
        except (KeyError, TypeError) as e:
            raise MalformedProofError(f"Proof payload missing field: {e}") from e

        if not isinstance(raw_siblings, list) or not isinstance(raw_directions, list):
            raise MalformedProofError("Proof and directions must be lists")

        try:
            siblings = [digest_from_hex(s) for s in raw_siblings]
        except (TypeError, AttributeError, ValueError) as e:
            raise MalformedProofError(f"Invalid sibling digest: {e}") from e

        index = data.get("index", 0)
        if not isinstance(index, int) or isinstance(index, bool):
            raise MalformedProofError(f"Leaf index must be an integer, got {index!r}")

        return cls(siblings=siblings, directions=raw_directions, index=index)


def generate_proof(tree: MerkleTree, index: int) -> MerkleProof:
    """
    Generate an inclusion proof for the leaf at the given index.

    Algorithm:
    1. Start at leaves[index]
    2. While the current node has a parent:
       - record (sibling.digest, current is left child)
       - move to the parent
    3. Stop at the root (it has no sibling)

    Args:
        tree: A built MerkleTree
        index: 0-based leaf index

    Returns:
        MerkleProof ordered leaf-adjacent first

    Raises:
        IndexOutOfRangeError: If index is outside [0, leaf_count)
    """
    current = tree.leaf_handle(index)

    siblings: list[bytes] = []
    directions: list[bool] = []

    while tree.parent(current) is not None:
        sibling = tree.sibling(current)
        siblings.append(tree.node(sibling).digest)
        directions.append(tree.is_left_child(current))
        current = tree.parent(current)

    return MerkleProof(siblings=siblings, directions=directions, index=index)


def compute_root(leaf_value: bytes, proof: MerkleProof) -> bytes:
    """
    Replay a proof over a raw leaf value and return the resulting root.

    Args:
        leaf_value: The raw value claimed to be at proof.index
        proof: Proof in generation order

    Returns:
        The reconstructed 32-byte root
    """
    current = sha256(bytes(leaf_value))
    for sibling, is_left in zip(proof.siblings, proof.directions):
        if is_left:
            # Authenticated node was the left child
            current = hash_pair(current, sibling)
        else:
            current = hash_pair(sibling, current)
    return current


def verify_proof(leaf_value: bytes, proof: MerkleProof, pinned_root: bytes) -> bool:
    """
    Verify that leaf_value is included under pinned_root.

    Pure and stateless: it never consults the store that served the value
    and the proof.

    Args:
        leaf_value: Raw value fetched from the (untrusted) store
        proof: Inclusion proof fetched alongside it
        pinned_root: Root digest captured earlier by the verifier

    Returns:
        True if the replay reproduces pinned_root, False otherwise
    """
    return hmac.compare_digest(compute_root(leaf_value, proof), bytes(pinned_root))


def require_valid_proof(leaf_value: bytes, proof: MerkleProof, pinned_root: bytes) -> None:
    """
    Verify a proof and raise if it does not reproduce the pinned root.

    Raises:
        VerificationFailedError: With the computed and expected roots
    """
    computed = compute_root(leaf_value, proof)
    if not hmac.compare_digest(computed, bytes(pinned_root)):
        logger.warning(
            f"Proof for index {proof.index} failed: computed {to_hex(computed)}, "
            f"pinned {to_hex(bytes(pinned_root))}"
        )
        raise VerificationFailedError(computed, bytes(pinned_root), index=proof.index)


class MerkleProver:
    """
    Convenience class for generating proofs from raw values.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> len(proof)
        2
    """

    @staticmethod
    def prove(leaf_values: Sequence[bytes], index: int) -> MerkleProof:
        """Build a tree over leaf_values and prove the given index."""
        return generate_proof(MerkleTree.build(leaf_values), index)

    @staticmethod
    def compute_root(leaf_values: Sequence[bytes]) -> bytes | None:
        """Root over leaf_values, or None when there are none."""
        return MerkleTree.build(leaf_values).root


class MerkleVerifier:
    """Convenience class for verifying proofs."""

    @staticmethod
    def verify(leaf_value: bytes, proof: MerkleProof, pinned_root: bytes) -> bool:
        return verify_proof(leaf_value, proof, pinned_root)

    @staticmethod
    def verify_parts(
        leaf_value: bytes,
        siblings: Sequence[bytes],
        directions: Sequence[bool],
        pinned_root: bytes,
    ) -> bool:
        """
        Verify from raw proof components.

        Raises:
            MalformedProofError: If siblings and directions differ in length
        """
        proof = MerkleProof.from_parts(siblings, directions)
        return verify_proof(leaf_value, proof, pinned_root)


__all__ = [
    "MerkleProof",
    "generate_proof",
    "compute_root",
    "verify_proof",
    "require_valid_proof",
    "MerkleProver",
    "MerkleVerifier",
]
