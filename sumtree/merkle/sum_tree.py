"""
Module 03 - Merkle Sum Tree Implementation
Balanced Merkle sum tree construction, commitment projection, exclusive
allotment proof generation and verification.

Owner: Protocol/Crypto Engineer
Module ID: M03

This module provides:
- Commitment: public (sum, hash) summary of any node
- SumLeaf / SumBranch: immutable tree nodes
- MerkleSumTree: the built tree (root + leaf count)
- SumProof: self-contained inclusion proof for one leaf position
- build_sum_tree / commit / build_sum_proof / verify_sum_proof

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(u64_be(value))
2. Branch hashing: branch = sha256(word_be(height) || u64_be(sum) || left || right)
3. Leaf count must be an exact power of two (1 is a height-0 tree)
4. No padding and no rebalancing
5. Leaf order is position-sensitive; this module never sorts

Proof Layout:
- siblings are stored leaf-to-root
- bit i of the index says whether the node at height i is a left (0) or
  right (1) child
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union

from sumtree.crypto.hashing import (
    DIGEST_SIZE,
    U64_MAX,
    U64_SIZE,
    encode_u64,
    hash_branch,
    hash_leaf,
    is_u64,
)
from sumtree.schemas.errors import (
    IndexOutOfRangeException,
    InvalidLeafCountException,
    ProofDecodeException,
    SumOverflowException,
    ValueOutOfRangeException,
)


logger = logging.getLogger(__name__)

# Wire size of a serialized commitment: u64 sum + 32-byte digest
COMMITMENT_SIZE: int = U64_SIZE + DIGEST_SIZE


@dataclass(frozen=True)
class Commitment:
    """
    Public commitment to a node: the subtree sum and its digest.

    Never exposes subtree structure. Safe to publish, copy and compare.

    Attributes:
        sum: Sum of every leaf value beneath the node
        hash: 32-byte digest binding the sum and every leaf below
    """
    sum: int
    hash: bytes

    def __post_init__(self) -> None:
        if not is_u64(self.sum):
            raise ValueOutOfRangeException(self.sum)
        if not isinstance(self.hash, bytes) or len(self.hash) != DIGEST_SIZE:
            raise ValueError(f"Commitment hash must be {DIGEST_SIZE} bytes")

    @property
    def amount(self) -> int:
        return self.sum

    @property
    def digest(self) -> bytes:
        return self.hash

    def to_bytes(self) -> bytes:
        """Serialize as u64_be(sum) || hash (40 bytes)."""
        return encode_u64(self.sum) + self.hash

    @classmethod
    def from_bytes(cls, data: bytes) -> "Commitment":
        """
        Decode a 40-byte commitment.

        Raises:
            ProofDecodeException: If data is not exactly 40 bytes
        """
        if len(data) != COMMITMENT_SIZE:
            raise ProofDecodeException(
                f"Commitment must be {COMMITMENT_SIZE} bytes, got {len(data)}",
                details={"length": len(data)},
            )
        return cls(
            sum=int.from_bytes(data[:U64_SIZE], "big"),
            hash=bytes(data[U64_SIZE:]),
        )


@dataclass(frozen=True)
class SumLeaf:
    """A leaf holding one value. Always at height 0."""
    value: int
    digest: bytes

    @property
    def height(self) -> int:
        return 0

    @property
    def amount(self) -> int:
        return self.value

    @classmethod
    def from_value(cls, value: int) -> "SumLeaf":
        return cls(value=value, digest=hash_leaf(value))


@dataclass(frozen=True)
class SumBranch:
    """
    An internal node owning two subtrees of equal height.

    Invariants:
        left.height == right.height == height - 1
        sum == left.amount + right.amount
        digest == hash_branch(height, sum, left.digest, right.digest)
    """
    height: int
    sum: int
    digest: bytes
    left: "SumNode" = field(repr=False)
    right: "SumNode" = field(repr=False)

    @property
    def amount(self) -> int:
        return self.sum

    @classmethod
    def combine(cls, left: "SumNode", right: "SumNode") -> "SumBranch":
        """
        Build the parent of two equal-height nodes.

        Raises:
            ValueError: If the children have different heights
            SumOverflowException: If the combined sum exceeds 64 bits
        """
        if left.height != right.height:
            raise ValueError(
                f"Cannot combine nodes of height {left.height} and {right.height}"
            )
        height = left.height + 1
        total = left.amount + right.amount
        if total > U64_MAX:
            raise SumOverflowException(height)
        return cls(
            height=height,
            sum=total,
            digest=hash_branch(height, total, left.digest, right.digest),
            left=left,
            right=right,
        )


SumNode = Union[SumLeaf, SumBranch]


@dataclass(frozen=True)
class SumProof:
    """
    Exclusive allotment proof for a single leaf.

    Self-contained: holds copies of every commitment it needs and no
    reference to the tree it came from.

    Attributes:
        leaf: Commitment of the proven leaf (its value and leaf digest)
        siblings: Sibling commitments, leaf-to-root
        index: 0-based position of the leaf
    """
    leaf: Commitment
    siblings: tuple[Commitment, ...]
    index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "siblings", tuple(self.siblings))
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    @property
    def position(self) -> int:
        return self.index

    @property
    def height(self) -> int:
        """Height of the tree this proof was generated from."""
        return len(self.siblings)

    def sibling(self, level: int) -> Optional[Commitment]:
        """Return the sibling commitment at ``level`` (0 = next to the leaf), if any."""
        if 0 <= level < len(self.siblings):
            return self.siblings[level]
        return None

    def verify(self, root: Commitment) -> bool:
        return verify_sum_proof(self, root)


@dataclass(frozen=True)
class MerkleSumTree:
    """An immutable, perfectly balanced Merkle sum tree."""
    root: SumNode = field(repr=False)
    leaf_count: int

    @property
    def height(self) -> int:
        return self.root.height

    @property
    def total(self) -> int:
        return self.root.amount

    @classmethod
    def from_values(cls, values: Iterable[int]) -> "MerkleSumTree":
        return build_sum_tree(values)

    def commit(self) -> Commitment:
        return commit(self.root)

    def prove(self, position: int) -> SumProof:
        return build_sum_proof(self, position)


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return n > 0 and (n & (n - 1)) == 0


def build_sum_tree(values: Iterable[int]) -> MerkleSumTree:
    """
    Build a balanced Merkle sum tree from an ordered sequence of values.

    Algorithm (single pass, O(n) time, O(log n) pending stack):
    1. Turn each value into a leaf (height 0)
    2. While the top pending subtree has the same height as the current
       node, pop it and combine: popped = left, current = right
    3. Push the result
    4. Exactly one pending subtree remains: the root

    This behaves like incrementing a binary counter, so every leaf ends up
    at depth log2(n).

    Example: [a, b, c, d]
        a        -> pending [(0, a)]
        b        -> combine(a, b) -> pending [(1, ab)]
        c        -> pending [(1, ab), (0, c)]
        d        -> combine(c, d) = cd, combine(ab, cd) -> pending [(2, abcd)]

    Args:
        values: Unsigned 64-bit values; order is preserved

    Returns:
        MerkleSumTree over the values

    Raises:
        InvalidLeafCountException: If the count is zero or not a power of two
        ValueOutOfRangeException: If a value is not an unsigned 64-bit int
        SumOverflowException: If any subtree sum exceeds 64 bits
    """
    values = list(values)
    leaf_count = len(values)
    if not is_power_of_two(leaf_count):
        raise InvalidLeafCountException(leaf_count)

    pending: list[tuple[int, SumNode]] = []

    for position, value in enumerate(values):
        if not is_u64(value):
            raise ValueOutOfRangeException(value, position=position)

        node: SumNode = SumLeaf.from_value(value)
        height = 0
        # bubble up the new leaf
        while pending and pending[-1][0] == height:
            _, sibling = pending.pop()
            node = SumBranch.combine(sibling, node)
            height += 1
        pending.append((height, node))

    if len(pending) != 1:
        raise InvalidLeafCountException(leaf_count)

    root = pending.pop()[1]
    logger.debug(
        "Built sum tree: leaves=%d height=%d sum=%d",
        leaf_count, root.height, root.amount,
    )
    return MerkleSumTree(root=root, leaf_count=leaf_count)


def commit(node: Union[SumNode, MerkleSumTree]) -> Commitment:
    """
    Project a node (or a tree's root) onto its public commitment.

    O(1): reuses the stored sum and digest, never rehashes.
    """
    if isinstance(node, MerkleSumTree):
        node = node.root
    return Commitment(sum=node.amount, hash=node.digest)


def build_sum_proof(tree: MerkleSumTree, position: int) -> SumProof:
    """
    Generate an exclusive allotment proof for the leaf at ``position``.

    Algorithm:
    1. Start at the root
    2. At a branch of height h, read bit (h - 1) of position:
       - 0: descend left, record the right child's commitment
       - 1: descend right, record the left child's commitment
    3. Stop at the leaf and record its commitment
    4. Reverse the siblings so they run leaf-to-root

    Args:
        tree: A built MerkleSumTree
        position: 0-based leaf position

    Returns:
        SumProof with len(siblings) == tree.height

    Raises:
        IndexOutOfRangeException: If position is not an int or is outside
            [0, leaf_count)
    """
    if not isinstance(position, int) or isinstance(position, bool):
        raise IndexOutOfRangeException(position, tree.leaf_count)
    if position < 0 or position >= tree.leaf_count:
        raise IndexOutOfRangeException(position, tree.leaf_count)

    siblings: list[Commitment] = []
    current = tree.root

    while isinstance(current, SumBranch):
        mask = 1 << (current.height - 1)
        if position & mask == 0:
            # descend left, taking right sibling
            siblings.append(commit(current.right))
            current = current.left
        else:
            # descend right, taking left sibling
            siblings.append(commit(current.left))
            current = current.right

    siblings.reverse()

    return SumProof(
        leaf=commit(current),
        siblings=tuple(siblings),
        index=position,
    )


def _is_commitment(candidate: object) -> bool:
    return (
        isinstance(candidate, Commitment)
        and is_u64(candidate.sum)
        and isinstance(candidate.hash, bytes)
        and len(candidate.hash) == DIGEST_SIZE
    )


def verify_sum_proof(proof: SumProof, root: Commitment) -> bool:
    """
    Verify an exclusive allotment proof against a root commitment.

    Replays the branch hashing from the leaf upwards:
    1. current = proof.leaf, height = 0, key = proof.index
    2. For each sibling (leaf-to-root):
       - key bit 0 clear: (current, sibling); set: (sibling, current)
       - sum = current.sum + sibling.sum, height += 1, key >>= 1
       - current = Commitment(sum, hash_branch(height, sum, left, right))
    3. Valid iff current == root (sum AND hash)

    Never raises: malformed or hostile proofs yield False.

    Args:
        proof: SumProof to check
        root: Published root commitment

    Returns:
        True if the proof is valid, False otherwise
    """
    leaf = getattr(proof, "leaf", None)
    key = getattr(proof, "index", None)
    siblings = getattr(proof, "siblings", None)

    if not _is_commitment(leaf) or not _is_commitment(root):
        return False
    if not isinstance(siblings, Sequence):
        return False
    if not isinstance(key, int) or isinstance(key, bool) or key < 0:
        return False

    current: Commitment = leaf
    height = 0

    for sibling in siblings:
        if not _is_commitment(sibling):
            return False
        if key & 1 == 0:
            left, right = current, sibling
        else:
            left, right = sibling, current
        total = current.sum + sibling.sum
        if total > U64_MAX:
            return False
        height += 1
        key >>= 1

        current = Commitment(
            sum=total,
            hash=hash_branch(height, total, left.hash, right.hash),
        )

    if current != root:
        logger.debug("Sum proof rejected for index %d", proof.index)
        return False
    return True


__all__ = [
    "COMMITMENT_SIZE",
    "Commitment",
    "SumLeaf",
    "SumBranch",
    "SumNode",
    "SumProof",
    "MerkleSumTree",
    "is_power_of_two",
    "build_sum_tree",
    "commit",
    "build_sum_proof",
    "verify_sum_proof",
]
