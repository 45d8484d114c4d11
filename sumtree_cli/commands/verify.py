"""
CLI Verify Command

Verify one or more exclusive allotment proofs against a published root.

Usage:
    sumtree verify proof.json --root root.json [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from sumtree.crypto.hashing import to_hex
from sumtree.merkle import SumTreeVerifier
from sumtree_cli.io import load_proofs, load_root


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    root_sum: int = 0
    root_hash: str = ""
    checked: int = 0
    valid: int = 0
    results: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["all_ok"] = self.all_ok
        return d

    @property
    def all_ok(self) -> bool:
        return self.checked > 0 and self.valid == self.checked


def print_summary_human(summary: VerifySummary) -> None:
    print(f"proofs: {summary.proof_path}")
    print(f"root_sum: {summary.root_sum}")
    print(f"root_hash: {summary.root_hash}")
    for result in summary.results:
        status = "✓" if result["ok"] else "✗"
        print(f"  {status} index={result['index']} value={result['value']}")
    print(f"valid: {summary.valid}/{summary.checked}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = every proof valid, 2 = at least one invalid)
    """
    proof_path = Path(args.proof)
    root = load_root(Path(args.root))
    proofs = load_proofs(proof_path)

    workers = args.cli_config.proof_workers
    verdicts = SumTreeVerifier.verify_many(proofs, root, max_workers=workers)

    summary = VerifySummary(
        proof_path=str(proof_path),
        root_sum=root.sum,
        root_hash=to_hex(root.hash),
        checked=len(proofs),
        valid=sum(1 for ok in verdicts if ok),
        results=[
            {"index": proof.index, "value": proof.leaf.sum, "ok": ok}
            for proof, ok in zip(proofs, verdicts)
        ],
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.all_ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed: %d of %d proofs invalid",
                   summary.checked - summary.valid, summary.checked)
    return EXIT_VERIFICATION_FAILED
