"""
Module 01 - Schemas & Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for tree construction, proof generation
and proof decoding. Defines both Pydantic models for structured error
communication and Python exceptions for control flow.

Verification mismatches are deliberately absent: a verifier reports them
as a False result, never as an exception.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library and CLI."""

    # Construction Errors
    INVALID_LEAF_COUNT = "INVALID_LEAF_COUNT"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    SUM_OVERFLOW = "SUM_OVERFLOW"

    # Proof Generation Errors
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Wire & Schema Errors
    PROOF_DECODE_ERROR = "PROOF_DECODE_ERROR"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"

    # Verification (reporting only, never raised by the verifier)
    PROOF_INVALID = "PROOF_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class SumTreeError(BaseModel):
    """
    Base error model for structured error reporting.

    Used by the CLI to emit machine-readable errors with --json.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_LEAF_COUNT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried with the same input",
    )

    def to_exception(self) -> "SumTreeException":
        """Convert this error model to a raisable exception."""
        return SumTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class SumTreeException(Exception):
    """
    Base exception for all Merkle sum tree errors.

    Carries structured error information and can be converted
    to a SumTreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUMTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> SumTreeError:
        """Convert this exception to a SumTreeError model."""
        return SumTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidLeafCountException(SumTreeException):
    """Raised when the value count is zero or not a power of two."""

    def __init__(
        self,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf count must be a power of two, got {leaf_count}",
            code=ErrorCodes.INVALID_LEAF_COUNT,
            details=full_details,
            retryable=False,
        )
        self.leaf_count = leaf_count


class IndexOutOfRangeException(SumTreeException, IndexError):
    """Raised when a proof is requested for a position outside the tree."""

    def __init__(
        self,
        position: int,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["position"] = position
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf position {position} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )
        self.position = position
        self.leaf_count = leaf_count


class ValueOutOfRangeException(SumTreeException, ValueError):
    """Raised when a value is not an unsigned 64-bit integer."""

    def __init__(
        self,
        value: Any,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["value"] = repr(value)
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=f"Value must be an unsigned 64-bit integer, got {value!r}",
            code=ErrorCodes.VALUE_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class SumOverflowException(SumTreeException, OverflowError):
    """Raised when a subtree sum does not fit in an unsigned 64-bit integer."""

    def __init__(
        self,
        height: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["height"] = height
        super().__init__(
            message=f"Subtree sum at height {height} overflows 64 bits",
            code=ErrorCodes.SUM_OVERFLOW,
            details=full_details,
            retryable=False,
        )


class ProofDecodeException(SumTreeException):
    """Raised when a serialized commitment or proof cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_DECODE_ERROR,
            details=details,
            retryable=False,
        )
