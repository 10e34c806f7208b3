"""
Module 02B - Leaf Index Resolver
Maps sequential commitment counts to leaf positions in the commitment tree.

Module ID: M02B

The commitment tree is a complete binary tree of fixed depth, stored as a
flat array in breadth-first order (root at index 0, children of node i at
2i+1 and 2i+2). Leaves occupy the last row and are filled in insertion
order, so the n-th commitment (counting from 0) lives at

    leaf_index = 2^(depth-1) - 1 + n

Capacity Rules:
- A tree of depth d has 2^(d-1) leaves
- The last addressable leaf is 2^d - 2
- Counts past the last leaf raise TreeFullException; indices never wrap
"""
from __future__ import annotations

from dataclasses import dataclass

from core.schemas.errors import TreeFullException


def leaf_capacity(tree_depth: int) -> int:
    """Number of leaves in a tree of the given depth."""
    if tree_depth < 1:
        raise ValueError(f"Tree depth must be at least 1, got {tree_depth}")
    return 1 << (tree_depth - 1)


def leaf_index(sequential_count: int, tree_depth: int) -> int:
    """
    Compute the flat-array index of the leaf holding a commitment.

    Args:
        sequential_count: 0-based position of the commitment in insertion order
        tree_depth: Depth of the commitment tree (33 for the token shield)

    Returns:
        The node index of the leaf

    Raises:
        ValueError: If sequential_count is negative
        TreeFullException: If the count does not fit in the last row

    Example:
        >>> leaf_index(0, 33)
        4294967295
        >>> leaf_index(3, 3)
        6
    """
    if sequential_count < 0:
        raise ValueError(f"Commitment count must be non-negative, got {sequential_count}")

    width = leaf_capacity(tree_depth)
    if sequential_count >= width:
        raise TreeFullException(
            f"Commitment count {sequential_count} exceeds the {width} leaves "
            f"of a depth-{tree_depth} tree",
            sequential_count=sequential_count,
            tree_depth=tree_depth,
        )
    return width - 1 + sequential_count


def sequential_count_from_leaf_index(index: int, tree_depth: int) -> int:
    """
    Inverse of leaf_index.

    Raises:
        ValueError: If index does not address a leaf of the tree
    """
    width = leaf_capacity(tree_depth)
    first_leaf = width - 1
    if not first_leaf <= index <= 2 * width - 2:
        raise ValueError(
            f"Index {index} is not a leaf of a depth-{tree_depth} tree "
            f"(leaves are {first_leaf}..{2 * width - 2})"
        )
    return index - first_leaf


@dataclass(frozen=True)
class LeafIndexResolver:
    """
    Leaf index resolver for one tree depth.

    Usage:
        resolver = LeafIndexResolver(tree_depth=33)
        idx = resolver.leaf_index(5)
    """
    tree_depth: int

    @property
    def capacity(self) -> int:
        return leaf_capacity(self.tree_depth)

    @property
    def first_leaf(self) -> int:
        return self.capacity - 1

    @property
    def last_leaf(self) -> int:
        return 2 * self.capacity - 2

    def leaf_index(self, sequential_count: int) -> int:
        return leaf_index(sequential_count, self.tree_depth)

    def sequential_count(self, index: int) -> int:
        return sequential_count_from_leaf_index(index, self.tree_depth)
