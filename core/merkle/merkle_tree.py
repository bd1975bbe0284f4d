"""
Merkle Tree Implementation
Binary hash tree over an ordered list of blobs, with in-place leaf updates.

This module provides:
- MerkleTree.build: construct the tree from raw leaf values
- MerkleTree.update: replace one leaf and rehash its path to the root
- Node accessors (parent, sibling, side) used by proof generation

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(value)
2. Parent hashing: parent = sha256(left + right)
3. Padding rule: an unpaired last node at any level is paired with a new
   padding node carrying a copy of its digest
4. Empty input: no root, no leaves
5. Single leaf: root is the leaf itself

Storage Notes:
- Nodes live in an arena (a list) and refer to each other by integer
  handle, so parent back-links never own anything
- Padding nodes are separate arena entries; they remember which node they
  mirror but never share that node's parent slot
- Leaf order is upload order and is never changed
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from core.crypto.hashing import hash_pair, sha256
from core.errors import IndexOutOfRangeError


logger = logging.getLogger(__name__)


@dataclass
class Node:
    """
    A single tree node stored in the arena.

    Attributes:
        digest: 32-byte digest of this node
        parent: Handle of the parent node (None for the root)
        left: Handle of the left child (None for leaves)
        right: Handle of the right child (None for leaves)
        mirror_of: For padding nodes, handle of the node whose digest
                   this one copies; None for every other node
    """
    digest: bytes
    parent: Optional[int] = None
    left: Optional[int] = None
    right: Optional[int] = None
    mirror_of: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def is_padding(self) -> bool:
        return self.mirror_of is not None


class MerkleTree:
    """
    Merkle tree built over an ordered sequence of byte blobs.

    Example:
        >>> tree = MerkleTree.build([b"a", b"b", b"c"])
        >>> tree.leaf_count
        3
        >>> len(tree.root)
        32
    """

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._leaves: list[int] = []
        self._root: Optional[int] = None

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def build(cls, leaf_values: Sequence[bytes]) -> "MerkleTree":
        """
        Build a tree from raw leaf values.

        Algorithm:
        1. Hash every value into a leaf node
        2. Walk the current level two nodes at a time; if one node is left
           over, pair it with a fresh padding node carrying its digest
        3. Create a parent per pair, pointing both children back at it
        4. Repeat until one node remains; that node is the root

        Example: [x, y, z] -> [x, y, z, z'] -> [xy, zz'] -> [root]

        Args:
            leaf_values: Ordered raw values (an empty sequence is allowed)

        Returns:
            The built tree
        """
        tree = cls()
        if len(leaf_values) == 0:
            return tree

        level = [tree._new_node(sha256(bytes(value))) for value in leaf_values]
        tree._leaves = list(level)

        while len(level) > 1:
            next_level: list[int] = []
            for i in range(0, len(level), 2):
                left = level[i]
                if i + 1 < len(level):
                    right = level[i + 1]
                else:
                    right = tree._new_node(tree._nodes[left].digest, mirror_of=left)
                next_level.append(tree._join(left, right))
            level = next_level

        tree._root = level[0]
        return tree

    def _new_node(self, digest: bytes, mirror_of: Optional[int] = None) -> int:
        self._nodes.append(Node(digest=digest, mirror_of=mirror_of))
        return len(self._nodes) - 1

    def _join(self, left: int, right: int) -> int:
        """Create the parent of two nodes and link both children to it."""
        parent = self._new_node(
            hash_pair(self._nodes[left].digest, self._nodes[right].digest)
        )
        node = self._nodes[parent]
        node.left = left
        node.right = right
        self._nodes[left].parent = parent
        self._nodes[right].parent = parent
        return parent

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def update(self, index: int, new_value: bytes) -> None:
        """
        Replace the value of one leaf and rehash its path to the root.

        Only the nodes on the leaf-to-root path change; every other node,
        padding copies included, keeps its digest. Each ancestor is rehashed
        from its two children as they now stand. O(log n), no rebuild.

        Args:
            index: 0-based leaf index
            new_value: New raw value for the leaf

        Raises:
            IndexOutOfRangeError: If index is outside [0, leaf_count)
        """
        self._check_index(index)

        current = self._leaves[index]
        self._nodes[current].digest = sha256(bytes(new_value))

        while self._nodes[current].parent is not None:
            parent = self._nodes[current].parent
            node = self._nodes[parent]
            node.digest = hash_pair(
                self._nodes[node.left].digest,
                self._nodes[node.right].digest,
            )
            current = parent

        logger.debug(f"Updated leaf {index}; new root {self.root.hex()}")

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Optional[bytes]:
        """Root digest, or None for an empty tree."""
        if self._root is None:
            return None
        return self._nodes[self._root].digest

    @property
    def root_handle(self) -> Optional[int]:
        return self._root

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    def __len__(self) -> int:
        return len(self._leaves)

    @property
    def height(self) -> int:
        """Number of parent steps from a leaf to the root (0 if <= 1 leaf)."""
        if not self._leaves:
            return 0
        return self.depth_of(self._leaves[0])

    def depth_of(self, handle: int) -> int:
        """Count the parent links between a node and the root."""
        depth = 0
        current = self._nodes[handle].parent
        while current is not None:
            depth += 1
            current = self._nodes[current].parent
        return depth

    def node(self, handle: int) -> Node:
        return self._nodes[handle]

    def leaf_handle(self, index: int) -> int:
        self._check_index(index)
        return self._leaves[index]

    def leaf_digest(self, index: int) -> bytes:
        return self._nodes[self.leaf_handle(index)].digest

    def parent(self, handle: int) -> Optional[int]:
        return self._nodes[handle].parent

    def is_left_child(self, handle: int) -> bool:
        """True if the node is the left child of its parent."""
        parent = self._nodes[handle].parent
        if parent is None:
            return False
        return self._nodes[parent].left == handle

    def sibling(self, handle: int) -> Optional[int]:
        """
        Return the other child of this node's parent.

        The root has no sibling and yields None.
        """
        parent = self._nodes[handle].parent
        if parent is None:
            return None
        node = self._nodes[parent]
        if node.left == handle:
            return node.right
        return node.left

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._leaves):
            raise IndexOutOfRangeError(index, len(self._leaves))


__all__ = [
    "Node",
    "MerkleTree",
]
