"""
Module 05 - Leaf Lookup Collaborators

Read access to commitment-tree leaves held by the external ledger.
"""
from .lookup import (
    CallableLeafLookup,
    HttpLeafLookup,
    InMemoryLeafLookup,
    LeafLookup,
    LeafLookupLike,
    as_leaf_lookup,
)

__all__ = [
    "CallableLeafLookup",
    "HttpLeafLookup",
    "InMemoryLeafLookup",
    "LeafLookup",
    "LeafLookupLike",
    "as_leaf_lookup",
]
