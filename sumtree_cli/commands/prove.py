"""
CLI Prove Command

Generate exclusive allotment proofs for one leaf or for every leaf.

Usage:
    sumtree prove values.txt --index 3 [--out proof.json]
    sumtree prove values.txt --all --out proofs.json
"""

from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path

from sumtree.merkle import SumTreeProver, build_sum_tree
from sumtree.schemas.commitments import dump_proof_json, dump_proofs_json
from sumtree_cli.io import load_values, write_text


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    values = load_values(Path(args.values))
    tree = build_sum_tree(values)

    if args.all:
        workers = args.cli_config.proof_workers
        proofs = SumTreeProver.prove_many(tree, max_workers=workers)
        document = dump_proofs_json(proofs)
        logger.info("Generated %d proofs", len(proofs))
    else:
        proof = SumTreeProver.prove(tree, args.index)
        document = dump_proof_json(proof)
        logger.info("Generated proof for leaf %d", args.index)

    if args.out:
        write_text(Path(args.out), document)
        print(f"proofs written to: {args.out}")
    else:
        print(document)

    return EXIT_SUCCESS
