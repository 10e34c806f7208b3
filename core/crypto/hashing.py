"""
Module 02 - Hashing Utilities
Commitment hashing compatible with the proving circuits.

Module ID: M02

This module provides:
- SHA-256 hashing for raw bytes
- Hex encoding/decoding with 0x prefix
- Concatenation and XOR of hex items
- The chained, bounded-input commitment hash

Chained Hash Rules (Hard Contracts):
1. Input is consumed from the right in chunks of hash_chunk_bits
   (432 bits / 54 bytes); the leftmost chunk may be shorter.
2. Each chunk is hashed with SHA-256 and the RIGHTMOST digest_length_bytes
   (27 bytes / 216 bits) of the output are kept.
3. Truncated digests are prepended, so the digest of the rightmost chunk
   ends up rightmost in the result.
4. While the result is longer than one digest, steps 1-3 are applied
   to the result itself.

The circuits compute exactly this reduction. It is not equivalent to
multi-round SHA-256; changing the chunk size, truncation side or the
termination rule produces commitments the circuits reject.

Determinism Notes:
- No randomness or state; the only random source is random_hex()
- Items are hashed in argument order
"""
from __future__ import annotations

import hashlib
import secrets
from itertools import zip_longest

from core.config.runtime import (
    DEFAULT_DIGEST_LENGTH_BYTES,
    DEFAULT_HASH_CHUNK_BITS,
    ShieldConfig,
)
from core.schemas.errors import ConfigurationException, InvalidEncodingException


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


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
    Convert a hexadecimal string (0x prefix optional) to bytes.

    Args:
        hex_string: Hex string with an even number of digits

    Returns:
        Decoded bytes

    Raises:
        InvalidEncodingException: If the string has odd length or contains
            invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not isinstance(hex_string, str):
        raise InvalidEncodingException(
            f"Expected a hex string, got {type(hex_string).__name__}",
            value=hex_string,
            base=16,
        )

    hex_content = hex_string[2:] if hex_string[:2] in ("0x", "0X") else hex_string

    if len(hex_content) % 2 != 0:
        raise InvalidEncodingException(
            f"Hex string must have even length, got length {len(hex_content)}",
            value=hex_string,
            base=16,
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise InvalidEncodingException(
            f"Invalid hex characters in string: {e}",
            value=hex_string,
            base=16,
        ) from e


def concat_items(*items: str) -> str:
    """Concatenate the bytes of several hex items, returned as 0x hex."""
    return to_hex(b"".join(from_hex(item) for item in items))


def xor_items(*items: str) -> str:
    """
    XOR several hex items byte by byte, aligned on their first byte.

    Shorter items are treated as zero-extended on the right, so the result
    is as long as the longest item.
    """
    if not items:
        raise ValueError("xor_items requires at least one item")
    acc = from_hex(items[0])
    for item in items[1:]:
        acc = bytes(a ^ b for a, b in zip_longest(acc, from_hex(item), fillvalue=0))
    return to_hex(acc)


def random_hex(n_bytes: int) -> str:
    """Return n_bytes of cryptographically secure randomness as 0x hex (e.g. a salt)."""
    if n_bytes <= 0:
        raise ValueError(f"n_bytes must be positive, got {n_bytes}")
    return "0x" + secrets.token_hex(n_bytes)


# =============================================================================
# Commitment Hashing
# =============================================================================

def _check_hash_parameters(chunk_bits: int, digest_length_bytes: int) -> int:
    if chunk_bits <= 0 or chunk_bits % 8 != 0:
        raise ConfigurationException(
            f"hash chunk size must be a positive multiple of 8 bits, got {chunk_bits}",
            field_name="hash_chunk_bits",
        )
    if not 1 <= digest_length_bytes <= 32:
        raise ConfigurationException(
            f"digest length must be between 1 and 32 bytes, got {digest_length_bytes}",
            field_name="digest_length_bytes",
        )
    chunk_bytes = chunk_bits // 8
    # A chunk must hold at least two digests or the reduction never shrinks.
    if chunk_bytes < 2 * digest_length_bytes:
        raise ConfigurationException(
            f"hash chunk ({chunk_bytes} bytes) must be at least twice the "
            f"digest length ({digest_length_bytes} bytes)",
            field_name="hash_chunk_bits",
        )
    return chunk_bytes


def _hash_chunks(data: bytes, chunk_bytes: int, digest_length_bytes: int) -> bytes:
    """One pass of the reduction: hash every chunk, right to left."""
    digest = b""
    remaining = data
    while remaining:
        chunk = remaining[-chunk_bytes:]
        remaining = remaining[:-chunk_bytes]
        digest = sha256(chunk)[-digest_length_bytes:] + digest
    return digest


def chained_hash(
    data: bytes,
    *,
    chunk_bits: int = DEFAULT_HASH_CHUNK_BITS,
    digest_length_bytes: int = DEFAULT_DIGEST_LENGTH_BYTES,
) -> bytes:
    """
    Reduce arbitrary-length input to a single truncated SHA-256 digest.

    Algorithm:
    1. Split data into chunk_bits chunks from the right
    2. Hash each chunk, keep its rightmost digest_length_bytes, prepend
    3. Repeat on the concatenated digests until one digest remains

    Input no longer than one chunk is hashed exactly once.

    Args:
        data: Raw input bytes (must not be empty)
        chunk_bits: Bits consumed per SHA-256 invocation
        digest_length_bytes: Length of the truncated digest

    Returns:
        digest_length_bytes bytes

    Raises:
        InvalidEncodingException: If data is empty
        ConfigurationException: If the chunk size cannot reduce the input
    """
    chunk_bytes = _check_hash_parameters(chunk_bits, digest_length_bytes)
    if not data:
        raise InvalidEncodingException("Cannot compute a commitment hash of empty input")

    digest = _hash_chunks(data, chunk_bytes, digest_length_bytes)
    while len(digest) > digest_length_bytes:
        digest = _hash_chunks(digest, chunk_bytes, digest_length_bytes)
    return digest


def hash_concatenation(
    *items: str,
    chunk_bits: int = DEFAULT_HASH_CHUNK_BITS,
    digest_length_bytes: int = DEFAULT_DIGEST_LENGTH_BYTES,
) -> str:
    """
    Commitment hash of the concatenation of several hex items.

    Each item's 0x marker is stripped and its bytes are concatenated in
    argument order before applying chained_hash.

    Returns:
        0x-prefixed hex digest of 2 * digest_length_bytes digits

    Example:
        >>> len(hash_concatenation("0x1234", "0xabcd", "0xffff"))
        56
    """
    data = b"".join(from_hex(item) for item in items)
    return to_hex(chained_hash(
        data,
        chunk_bits=chunk_bits,
        digest_length_bytes=digest_length_bytes,
    ))


def hash_concat(
    *items: str,
    digest_length_bytes: int = DEFAULT_DIGEST_LENGTH_BYTES,
) -> str:
    """
    Single-round hash of the concatenation of several hex items.

    SHA-256 is applied once to the whole concatenation and the rightmost
    digest_length_bytes are kept. Suitable only when the circuit that
    checks the value hashes it in one round as well.
    """
    if not 1 <= digest_length_bytes <= 32:
        raise ConfigurationException(
            f"digest length must be between 1 and 32 bytes, got {digest_length_bytes}",
            field_name="digest_length_bytes",
        )
    data = b"".join(from_hex(item) for item in items)
    return to_hex(sha256(data)[-digest_length_bytes:])


class CommitmentHasher:
    """
    Commitment hasher bound to a ShieldConfig.

    Usage:
        hasher = CommitmentHasher(ShieldConfig())
        z = hasher.hash_items(asset, public_key, salt)
    """

    def __init__(self, config: ShieldConfig | None = None) -> None:
        self.config = config or ShieldConfig()

    @property
    def digest_length_bytes(self) -> int:
        return self.config.digest_length_bytes

    def chained_hash(self, data: bytes) -> bytes:
        return chained_hash(
            data,
            chunk_bits=self.config.hash_chunk_bits,
            digest_length_bytes=self.config.digest_length_bytes,
        )

    def hash_items(self, *items: str) -> str:
        """Chained commitment hash of hex items, as 0x hex."""
        return hash_concatenation(
            *items,
            chunk_bits=self.config.hash_chunk_bits,
            digest_length_bytes=self.config.digest_length_bytes,
        )

    def hash_concat(self, *items: str) -> str:
        return hash_concat(*items, digest_length_bytes=self.config.digest_length_bytes)


__all__ = [
    "sha256",
    "to_hex",
    "from_hex",
    "concat_items",
    "xor_items",
    "random_hex",
    "chained_hash",
    "hash_concatenation",
    "hash_concat",
    "CommitmentHasher",
]
