"""
Module 02B - Commitment Tree Addressing

Module ID: M02B

The commitment tree itself lives on the ledger; this package only
resolves where a commitment is stored in it.

This module provides:
- leaf_index: sequential commitment count -> flat leaf index
- sequential_count_from_leaf_index: the inverse mapping
- leaf_capacity: number of leaves for a tree depth
- LeafIndexResolver: convenience wrapper bound to one depth

Usage:
    from core.merkle import leaf_index

    idx = leaf_index(0, 33)   # 2**32 - 1
"""
from .leaf_index import (
    LeafIndexResolver,
    leaf_capacity,
    leaf_index,
    sequential_count_from_leaf_index,
)


__all__ = [
    "LeafIndexResolver",
    "leaf_capacity",
    "leaf_index",
    "sequential_count_from_leaf_index",
]
