"""
Module 01 - Schemas & Error Taxonomy
File: commitments.py

Purpose: JSON wire schemas for publishing root commitments and handing
proofs to holders. Digests travel as 0x-prefixed hex.

Example commitment:
    {"schema_version": "v1", "sum": 36, "hash": "0x5f..."}

Example proof:
    {"schema_version": "v1", "index": 2,
     "leaf": {"sum": 3, "hash": "0x..."},
     "siblings": [{"sum": 4, "hash": "0x..."}, ...]}
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sumtree.crypto.hashing import DIGEST_SIZE, U64_MAX, from_hex, to_hex
from sumtree.merkle.sum_tree import Commitment, SumProof
from .errors import ProofDecodeException
from .versioning import SCHEMA_VERSION, validate_schema_version


class CommitmentEntry(BaseModel):
    """A (sum, hash) pair as it appears inside other documents."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sum: int = Field(..., ge=0, le=U64_MAX, strict=True, description="Subtree sum (u64)")
    hash: str = Field(..., description="0x-prefixed 32-byte hex digest")

    @field_validator("hash")
    @classmethod
    def validate_hash(cls, v: str) -> str:
        raw = from_hex(v)
        if len(raw) != DIGEST_SIZE:
            raise ValueError(f"hash must be {DIGEST_SIZE} bytes, got {len(raw)}")
        return to_hex(raw)

    @classmethod
    def from_commitment(cls, commitment: Commitment) -> "CommitmentEntry":
        return cls(sum=commitment.sum, hash=to_hex(commitment.hash))

    def to_commitment(self) -> Commitment:
        return Commitment(sum=self.sum, hash=from_hex(self.hash))


class CommitmentModel(CommitmentEntry):
    """A standalone, versioned root commitment document."""

    schema_version: str = Field(default=SCHEMA_VERSION)

    @field_validator("schema_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        return validate_schema_version(v)


class SumProofModel(BaseModel):
    """A versioned exclusive allotment proof document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    index: int = Field(..., ge=0, strict=True, description="0-based leaf position")
    leaf: CommitmentEntry
    siblings: list[CommitmentEntry] = Field(
        default_factory=list,
        description="Sibling commitments, leaf-to-root",
    )

    @field_validator("schema_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        return validate_schema_version(v)

    @classmethod
    def from_proof(cls, proof: SumProof) -> "SumProofModel":
        return cls(
            index=proof.index,
            leaf=CommitmentEntry.from_commitment(proof.leaf),
            siblings=[CommitmentEntry.from_commitment(s) for s in proof.siblings],
        )

    def to_proof(self) -> SumProof:
        return SumProof(
            leaf=self.leaf.to_commitment(),
            siblings=tuple(s.to_commitment() for s in self.siblings),
            index=self.index,
        )


# =============================================================================
# JSON helpers
# =============================================================================

def _parse_json(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProofDecodeException(f"Invalid JSON: {e}") from e


def dump_commitment_json(commitment: Commitment, indent: int | None = 2) -> str:
    return CommitmentModel.from_commitment(commitment).model_dump_json(indent=indent)


def load_commitment_json(text: str | bytes) -> Commitment:
    """
    Decode a root commitment document.

    Raises:
        ProofDecodeException: On invalid JSON or schema violations
    """
    data = _parse_json(text)
    try:
        return CommitmentModel.model_validate(data).to_commitment()
    except ValidationError as e:
        raise ProofDecodeException(
            f"Invalid commitment: {e.error_count()} validation error(s)",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


def dump_proof_json(proof: SumProof, indent: int | None = 2) -> str:
    return SumProofModel.from_proof(proof).model_dump_json(indent=indent)


def dump_proofs_json(proofs: list[SumProof], indent: int | None = 2) -> str:
    payload = [SumProofModel.from_proof(p).model_dump(mode="json") for p in proofs]
    return json.dumps(payload, indent=indent)


def load_proofs_json(text: str | bytes) -> list[SumProof]:
    """
    Decode one proof document or a JSON list of them.

    Raises:
        ProofDecodeException: On invalid JSON or schema violations
    """
    data = _parse_json(text)
    documents = data if isinstance(data, list) else [data]
    proofs: list[SumProof] = []
    for position, document in enumerate(documents):
        try:
            proofs.append(SumProofModel.model_validate(document).to_proof())
        except ValidationError as e:
            raise ProofDecodeException(
                f"Invalid proof at entry {position}: {e.error_count()} validation error(s)",
                details={
                    "entry": position,
                    "errors": e.errors(include_url=False, include_context=False),
                },
            ) from e
    return proofs


def load_proof_json(text: str | bytes) -> SumProof:
    """Decode exactly one proof document."""
    proofs = load_proofs_json(text)
    if len(proofs) != 1:
        raise ProofDecodeException(f"Expected one proof, got {len(proofs)}")
    return proofs[0]


__all__ = [
    "CommitmentEntry",
    "CommitmentModel",
    "SumProofModel",
    "dump_commitment_json",
    "load_commitment_json",
    "dump_proof_json",
    "dump_proofs_json",
    "load_proof_json",
    "load_proofs_json",
]
