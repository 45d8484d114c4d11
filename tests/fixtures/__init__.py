"""
Test fixtures package for Merkle sum tree tests.

This package provides factory functions for creating test objects:
- tree_fixtures.py: value lists, trees, tampered proofs, value files

Usage:
    from fixtures import make_tree, make_tampered_proof

    def test_something():
        tree = make_tree([1, 2, 3, 4])
"""

from .tree_fixtures import (
    SCENARIO_VALUES,
    make_values,
    make_tree,
    make_tampered_proof,
    flip_first_bit,
    write_values_file,
)

__all__ = [
    "SCENARIO_VALUES",
    "make_values",
    "make_tree",
    "make_tampered_proof",
    "flip_first_bit",
    "write_values_file",
]
