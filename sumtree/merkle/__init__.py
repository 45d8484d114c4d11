"""
Module 03 - Merkle Sum Tree and Exclusive Allotment Proofs

This module provides:
- Commitment: public (sum, hash) pair for any node
- MerkleSumTree: immutable balanced tree over power-of-two value lists
- SumProof: self-contained inclusion proof for one leaf
- build_sum_tree / commit / build_sum_proof / verify_sum_proof

Usage:
    from sumtree.merkle import build_sum_tree, commit, build_sum_proof, verify_sum_proof

    tree = build_sum_tree([1, 2, 3, 4, 5, 6, 7, 8])
    root = commit(tree)              # Commitment(sum=36, hash=...)

    proof = build_sum_proof(tree, 2)
    assert verify_sum_proof(proof, root)
"""
from .sum_tree import (
    COMMITMENT_SIZE,
    Commitment,
    SumLeaf,
    SumBranch,
    SumNode,
    SumProof,
    MerkleSumTree,
    is_power_of_two,
    build_sum_tree,
    commit,
    build_sum_proof,
    verify_sum_proof,
)

from .sum_proofs import (
    SumTreeProver,
    SumTreeVerifier,
)


__all__ = [
    # Core types
    "COMMITMENT_SIZE",
    "Commitment",
    "SumLeaf",
    "SumBranch",
    "SumNode",
    "SumProof",
    "MerkleSumTree",
    # Core functions
    "is_power_of_two",
    "build_sum_tree",
    "commit",
    "build_sum_proof",
    "verify_sum_proof",
    # Convenience classes
    "SumTreeProver",
    "SumTreeVerifier",
]
