"""
Merkle Tree and Inclusion Proofs

This package provides:
- MerkleTree: arena-backed binary hash tree with in-place leaf updates
- MerkleProof: ordered sibling digests + direction flags
- generate_proof / verify_proof: the generation/replay pair

Canonical Commitment Rules:
1. Leaf hashing: sha256(value)
2. Parent hashing: sha256(left + right)
3. Padding: an unpaired last node is paired with a copy of itself
4. Empty tree: no root
5. Single leaf: root = leaf

Usage:
    from core.merkle import MerkleTree, generate_proof, verify_proof

    tree = MerkleTree.build([b"a", b"b", b"c"])
    pinned = tree.root

    proof = generate_proof(tree, index=2)
    assert verify_proof(b"c", proof, pinned)
"""
from .merkle_tree import (
    Node,
    MerkleTree,
)

from .merkle_proofs import (
    MerkleProof,
    generate_proof,
    compute_root,
    verify_proof,
    require_valid_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Node",
    "MerkleTree",
    "MerkleProof",
    # Core functions
    "generate_proof",
    "compute_root",
    "verify_proof",
    "require_valid_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
