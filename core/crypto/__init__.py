"""
Core cryptographic utilities.

Module 02 provides commitment hashing.
"""
from .hashing import (
    CommitmentHasher,
    chained_hash,
    concat_items,
    from_hex,
    hash_concat,
    hash_concatenation,
    random_hex,
    sha256,
    to_hex,
    xor_items,
)

__all__ = [
    "CommitmentHasher",
    "chained_hash",
    "concat_items",
    "from_hex",
    "hash_concat",
    "hash_concatenation",
    "random_hex",
    "sha256",
    "to_hex",
    "xor_items",
]
