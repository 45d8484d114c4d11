"""
CLI file I/O

Reads value lists, root commitments and proofs from disk, and writes
JSON artifacts.

Value files are either a JSON array of integers or plain text with one
integer per line (blank lines and '#' comments are ignored).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from sumtree.merkle.sum_tree import Commitment, SumProof
from sumtree.schemas.commitments import load_commitment_json, load_proofs_json
from sumtree.schemas.errors import SumTreeException


logger = logging.getLogger(__name__)


class InputFileError(SumTreeException):
    """Raised when an input file is missing or unreadable."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message=message, code="INPUT_FILE_ERROR", details={"path": str(path)})


def _read_text(path: Path) -> str:
    if not path.exists():
        raise InputFileError(f"File not found: {path}", path)
    return path.read_text(encoding="utf-8")


def _parse_int(token: str, path: Path, line_no: int) -> int:
    try:
        return int(token, 10)
    except ValueError as e:
        raise InputFileError(f"{path}:{line_no}: not an integer: {token!r}", path) from e


def load_values(path: Path) -> list[int]:
    """Load an ordered list of leaf values."""
    text = _read_text(path)
    stripped = text.lstrip()

    if stripped.startswith("["):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InputFileError(f"{path}: invalid JSON: {e}", path) from e
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in data):
            raise InputFileError(f"{path}: JSON values must all be integers", path)
        values = list(data)
    else:
        values = []
        for line_no, line in enumerate(text.splitlines(), start=1):
            token = line.split("#", 1)[0].strip()
            if token:
                values.append(_parse_int(token, path, line_no))

    logger.info("Loaded %d values from %s", len(values), path)
    return values


def load_root(path: Path) -> Commitment:
    return load_commitment_json(_read_text(path))


def load_proofs(path: Path) -> list[SumProof]:
    return load_proofs_json(_read_text(path))


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content if content.endswith("\n") else content + "\n", encoding="utf-8")
    logger.info("Wrote %s", path)
