"""
CLI Build Command

Build a Merkle sum tree over a value file and publish its root commitment.

Usage:
    sumtree build values.txt [--out root.json] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from sumtree.crypto.hashing import to_hex
from sumtree.merkle import build_sum_tree, commit
from sumtree.schemas.commitments import CommitmentModel, dump_commitment_json
from sumtree_cli.io import load_values, write_text


logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    values = load_values(Path(args.values))
    tree = build_sum_tree(values)
    root = commit(tree)
    logger.info("Root commitment: sum=%d hash=%s", root.sum, to_hex(root.hash)[:18])

    if args.out:
        write_text(Path(args.out), dump_commitment_json(root))

    if args.json:
        summary = CommitmentModel.from_commitment(root).model_dump(mode="json")
        summary["leaf_count"] = tree.leaf_count
        summary["height"] = tree.height
        print(json.dumps(summary, indent=2))
    else:
        print(f"leaves: {tree.leaf_count}")
        print(f"height: {tree.height}")
        print(f"sum: {root.sum}")
        print(f"hash: {to_hex(root.hash)}")
        print(f"commitment: {root.to_bytes().hex()}")
        if args.out:
            print(f"root written to: {args.out}")

    return EXIT_SUCCESS
