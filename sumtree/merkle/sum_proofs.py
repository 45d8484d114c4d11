"""
Module 03 - Sum Proof Convenience Wrappers
Class-based prover/verifier facades and batch (multi-position) operations.

Owner: Protocol/Crypto Engineer
Module ID: M03

This module provides:
- SumTreeProver: Generate proofs for one or many positions
- SumTreeVerifier: Verify one or many proofs, or a holder's raw value

Batch operations shard work across a thread pool. The tree and the proofs
are immutable, so workers share them without locking. Results keep the
order of the input.
"""
from __future__ import annotations

import concurrent.futures
import logging
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from sumtree.config.runtime import get_default_config
from sumtree.crypto.hashing import hash_leaf, is_u64
from sumtree.merkle.sum_tree import (
    Commitment,
    MerkleSumTree,
    SumProof,
    build_sum_proof,
    build_sum_tree,
    commit,
    verify_sum_proof,
)
from sumtree.schemas.errors import IndexOutOfRangeException


logger = logging.getLogger(__name__)

_T = TypeVar("_T")
_R = TypeVar("_R")

# Below this many items a thread pool costs more than it saves
_MIN_PARALLEL_BATCH = 64


def _map_ordered(
    func: Callable[[_T], _R],
    items: Sequence[_T],
    max_workers: Optional[int],
) -> list[_R]:
    workers = max_workers if max_workers is not None else get_default_config().proof_workers
    if workers <= 1 or len(items) < _MIN_PARALLEL_BATCH:
        return [func(item) for item in items]

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(func, items))


class SumTreeProver:
    """
    Convenience class for generating exclusive allotment proofs.

    Example:
        >>> tree = SumTreeProver.build([1, 2, 3, 4])
        >>> proof = SumTreeProver.prove(tree, 2)
        >>> proof.leaf.sum
        3
    """

    @staticmethod
    def build(values: Iterable[int]) -> MerkleSumTree:
        return build_sum_tree(values)

    @staticmethod
    def compute_root(values: Iterable[int]) -> Commitment:
        """Build a tree over ``values`` and return its root commitment."""
        return commit(build_sum_tree(values))

    @staticmethod
    def prove(tree: MerkleSumTree, position: int) -> SumProof:
        """
        Generate a proof for the leaf at ``position``.

        Raises:
            IndexOutOfRangeException: If position is out of range
        """
        return build_sum_proof(tree, position)

    @staticmethod
    def prove_many(
        tree: MerkleSumTree,
        positions: Optional[Iterable[int]] = None,
        max_workers: Optional[int] = None,
    ) -> list[SumProof]:
        """
        Generate proofs for many positions (every leaf when omitted).

        All positions are range-checked before any work starts, so a bad
        position fails the whole call.

        Args:
            tree: A built MerkleSumTree
            positions: Leaf positions; defaults to range(tree.leaf_count)
            max_workers: Thread count; defaults to RuntimeConfig.proof_workers

        Returns:
            Proofs in the order of ``positions``

        Raises:
            IndexOutOfRangeException: If any position is out of range
        """
        targets = list(range(tree.leaf_count) if positions is None else positions)
        for position in targets:
            if position < 0 or position >= tree.leaf_count:
                raise IndexOutOfRangeException(position, tree.leaf_count)

        logger.debug("Generating %d sum proofs", len(targets))
        return _map_ordered(lambda position: build_sum_proof(tree, position), targets, max_workers)


class SumTreeVerifier:
    """
    Convenience class for verifying exclusive allotment proofs.

    Example:
        >>> SumTreeVerifier.verify(proof, tree.commit())
        True
    """

    @staticmethod
    def verify(proof: SumProof, root: Commitment) -> bool:
        return verify_sum_proof(proof, root)

    @staticmethod
    def verify_many(
        proofs: Sequence[SumProof],
        root: Commitment,
        max_workers: Optional[int] = None,
    ) -> list[bool]:
        """
        Verify many proofs against one root.

        Returns:
            One bool per proof, in input order
        """
        return _map_ordered(lambda proof: verify_sum_proof(proof, root), list(proofs), max_workers)

    @staticmethod
    def verify_value_in_root(
        value: int,
        index: int,
        siblings: Sequence[Commitment],
        root: Commitment,
    ) -> bool:
        """
        Verify that a holder's own value sits at ``index`` under ``root``.

        The leaf commitment is rebuilt from the raw value, so a proof
        carrying a different leaf cannot be passed off for this value.

        Args:
            value: The holder's value
            index: The holder's claimed position
            siblings: Sibling commitments (leaf-to-root)
            root: Published root commitment

        Returns:
            True if the value is included, False otherwise
        """
        if not is_u64(value) or not isinstance(index, int) or index < 0:
            return False
        proof = SumProof(
            leaf=Commitment(sum=value, hash=hash_leaf(value)),
            siblings=tuple(siblings),
            index=index,
        )
        return verify_sum_proof(proof, root)


__all__ = [
    "SumTreeProver",
    "SumTreeVerifier",
]
