"""
Module 02 - Hashing Utilities
Hash engine for Merkle sum tree leaves and branches.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- SHA-256 hashing for raw bytes
- Leaf hashing: H_leaf(value) = sha256(u64_be(value))
- Branch hashing: H_branch(height, sum, left, right)
      = sha256(word_be(height) || u64_be(sum) || left || right)
- Hex encoding/decoding with 0x prefix

Byte Layout Rules (Hard Contracts):
1. Integers are big-endian, unsigned, fixed width
2. Leaf values and sums are 8 bytes (u64)
3. Heights are one 64-bit machine word (8 bytes)
4. Digests are exactly 32 bytes
5. There is no leaf/branch tag byte; the two encodings differ in length
   (8 bytes vs 80 bytes)

Construction and verification MUST both go through hash_branch(), or
proofs stop verifying.
"""
from __future__ import annotations

import hashlib

from sumtree.schemas.errors import ValueOutOfRangeException


DIGEST_SIZE: int = 32
U64_SIZE: int = 8
WORD_SIZE: int = 8
U64_MAX: int = 2**64 - 1


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def is_u64(value: object) -> bool:
    """True for ints (not bools) in [0, 2**64)."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX


def encode_u64(value: int) -> bytes:
    """
    Encode an unsigned 64-bit integer as 8 big-endian bytes.

    Raises:
        ValueOutOfRangeException: If value is not an int in [0, 2**64)
    """
    if not is_u64(value):
        raise ValueOutOfRangeException(value)
    return value.to_bytes(U64_SIZE, "big")


def encode_word(value: int) -> bytes:
    """Encode a tree height as one big-endian 64-bit machine word."""
    if not is_u64(value):
        raise ValueOutOfRangeException(value)
    return value.to_bytes(WORD_SIZE, "big")


def hash_leaf(value: int) -> bytes:
    """
    Compute the digest of a leaf holding ``value``.

    Rule: leaf = sha256(u64_be(value))

    Args:
        value: Unsigned 64-bit leaf value

    Returns:
        32-byte digest
    """
    return sha256(encode_u64(value))


def hash_branch(height: int, total: int, left: bytes, right: bytes) -> bytes:
    """
    Compute the digest of a branch node.

    Rule: branch = sha256(word_be(height) || u64_be(total) || left || right)

    Args:
        height: Branch height (1 for a parent of two leaves)
        total: Sum of both children, must fit in u64
        left: Left child digest (32 bytes)
        right: Right child digest (32 bytes)

    Returns:
        32-byte digest

    Raises:
        ValueOutOfRangeException: If height or total are not u64
        ValueError: If a child digest is not 32 bytes
    """
    if len(left) != DIGEST_SIZE or len(right) != DIGEST_SIZE:
        raise ValueError(
            f"Child digests must be {DIGEST_SIZE} bytes, "
            f"got {len(left)} and {len(right)}"
        )
    serialized = b"".join((
        encode_word(height),
        encode_u64(total),
        bytes(left),
        bytes(right),
    ))
    return sha256(serialized)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "DIGEST_SIZE",
    "U64_SIZE",
    "WORD_SIZE",
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
