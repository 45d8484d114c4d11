"""
Sum Proof Convenience Class Tests
Tests for sumtree/merkle/sum_proofs.py

Tests:
- SumTreeProver build/compute_root/prove
- Batch proving keeps input order, serially and on a thread pool
- Batch verifying reports one verdict per proof
- Holder-side verification from a raw value
- Concurrent verification over one shared tree
"""
import concurrent.futures

import pytest

from fixtures import make_tampered_proof, make_values
from sumtree.config import RuntimeConfig, set_default_config
from sumtree.merkle import (
    SumTreeProver,
    SumTreeVerifier,
    build_sum_proof,
    build_sum_tree,
    commit,
)
from sumtree.schemas.errors import IndexOutOfRangeException


class TestSumTreeProver:
    """Tests for SumTreeProver."""

    def test_build_and_compute_root(self, scenario_values):
        tree = SumTreeProver.build(scenario_values)
        assert SumTreeProver.compute_root(scenario_values) == commit(tree)

    def test_prove_matches_function(self, scenario_tree):
        assert SumTreeProver.prove(scenario_tree, 3) == build_sum_proof(scenario_tree, 3)

    def test_prove_many_defaults_to_every_leaf(self, scenario_tree):
        proofs = SumTreeProver.prove_many(scenario_tree)

        assert [p.index for p in proofs] == list(range(8))

    def test_prove_many_keeps_requested_order(self, scenario_tree):
        proofs = SumTreeProver.prove_many(scenario_tree, [5, 1, 3])

        assert [p.index for p in proofs] == [5, 1, 3]
        assert [p.leaf.sum for p in proofs] == [6, 2, 4]

    def test_prove_many_thread_pool(self):
        """Large batches run on the pool and still come back in order."""
        tree = build_sum_tree(make_values(256))
        proofs = SumTreeProver.prove_many(tree, max_workers=4)

        assert [p.index for p in proofs] == list(range(256))
        assert all(SumTreeVerifier.verify_many(proofs, tree.commit(), max_workers=4))

    def test_prove_many_uses_default_config_workers(self):
        set_default_config(RuntimeConfig(proof_workers=1))
        tree = build_sum_tree(make_values(128))

        proofs = SumTreeProver.prove_many(tree)

        assert len(proofs) == 128

    def test_prove_many_rejects_bad_position_up_front(self, scenario_tree):
        with pytest.raises(IndexOutOfRangeException) as exc_info:
            SumTreeProver.prove_many(scenario_tree, [0, 1, 8])
        assert exc_info.value.position == 8


class TestSumTreeVerifier:
    """Tests for SumTreeVerifier."""

    def test_verify(self, scenario_tree, scenario_root):
        assert SumTreeVerifier.verify(scenario_tree.prove(0), scenario_root)

    def test_verify_many_mixed(self, scenario_tree, scenario_root):
        good = scenario_tree.prove(0)
        bad = make_tampered_proof(scenario_tree.prove(1), 0, new_sum=99)

        assert SumTreeVerifier.verify_many([good, bad, good], scenario_root) == [True, False, True]

    def test_verify_many_empty(self, scenario_root):
        assert SumTreeVerifier.verify_many([], scenario_root) == []

    def test_verify_value_in_root(self, scenario_tree, scenario_root):
        proof = scenario_tree.prove(4)

        assert SumTreeVerifier.verify_value_in_root(5, 4, proof.siblings, scenario_root)

    def test_verify_value_in_root_wrong_value(self, scenario_tree, scenario_root):
        proof = scenario_tree.prove(4)

        assert not SumTreeVerifier.verify_value_in_root(6, 4, proof.siblings, scenario_root)

    def test_verify_value_in_root_invalid_inputs(self, scenario_tree, scenario_root):
        proof = scenario_tree.prove(4)

        assert not SumTreeVerifier.verify_value_in_root(-5, 4, proof.siblings, scenario_root)
        assert not SumTreeVerifier.verify_value_in_root(5, -4, proof.siblings, scenario_root)


class TestConcurrentUse:
    """The built tree is shared read-only across threads."""

    def test_parallel_prove_and_verify(self):
        tree = build_sum_tree(make_values(64, start=100, step=3))
        root = tree.commit()

        def prove_and_verify(position: int) -> bool:
            return build_sum_proof(tree, position).verify(root)

        with concurrent.futures.ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(prove_and_verify, range(64)))

        assert all(results)
