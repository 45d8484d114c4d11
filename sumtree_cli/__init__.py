"""
Merkle Sum Tree CLI

Command-line interface for building sum trees, generating proofs and
verifying them against a published root.

Usage:
    python -m sumtree_cli build values.txt --out root.json
    python -m sumtree_cli prove values.txt --index 3 --out proof.json
    python -m sumtree_cli verify proof.json --root root.json
"""

__version__ = "0.1.0"
