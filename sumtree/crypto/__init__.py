"""
Core cryptographic utilities.

Module 02 provides the hash engine used by the Merkle sum tree.
"""
from .hashing import (
    DIGEST_SIZE,
    U64_MAX,
    sha256,
    is_u64,
    encode_u64,
    encode_word,
    hash_leaf,
    hash_branch,
    to_hex,
    from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "U64_MAX",
    "sha256",
    "is_u64",
    "encode_u64",
    "encode_word",
    "hash_leaf",
    "hash_branch",
    "to_hex",
    "from_hex",
]
