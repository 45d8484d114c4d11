"""
Merkle sum tree commitments and exclusive allotment proofs.

Public operations:
    build_sum_tree(values) -> MerkleSumTree
    commit(tree) -> Commitment
    build_sum_proof(tree, position) -> SumProof
    verify_sum_proof(proof, root) -> bool
"""

from .merkle import (
    Commitment,
    MerkleSumTree,
    SumProof,
    SumTreeProver,
    SumTreeVerifier,
    build_sum_proof,
    build_sum_tree,
    commit,
    verify_sum_proof,
)
from .schemas.errors import (
    IndexOutOfRangeException,
    InvalidLeafCountException,
    SumTreeException,
)

__version__ = "0.1.0"

__all__ = [
    "Commitment",
    "MerkleSumTree",
    "SumProof",
    "SumTreeProver",
    "SumTreeVerifier",
    "build_sum_proof",
    "build_sum_tree",
    "commit",
    "verify_sum_proof",
    "IndexOutOfRangeException",
    "InvalidLeafCountException",
    "SumTreeException",
]
