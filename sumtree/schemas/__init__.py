"""
Module 01 - Schemas & Error Taxonomy

Error taxonomy and version constants. JSON wire schemas live in
sumtree.schemas.commitments (imported separately: they depend on the
tree types, which depend on this package).
"""

from .errors import (
    ErrorCodes,
    SumTreeError,
    SumTreeException,
    InvalidLeafCountException,
    IndexOutOfRangeException,
    ValueOutOfRangeException,
    SumOverflowException,
    ProofDecodeException,
)
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    validate_schema_version,
)

__all__ = [
    "ErrorCodes",
    "SumTreeError",
    "SumTreeException",
    "InvalidLeafCountException",
    "IndexOutOfRangeException",
    "ValueOutOfRangeException",
    "SumOverflowException",
    "ProofDecodeException",
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "validate_schema_version",
]
