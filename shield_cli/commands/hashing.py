"""
Module 07 - CLI Hashing Commands

Usage:
    shield hash 0x1234 0xabcd 0xffff
    shield leaf-index 5 --depth 4
"""

from __future__ import annotations

import json
from argparse import Namespace

from core.crypto.hashing import CommitmentHasher
from core.merkle.leaf_index import leaf_index


EXIT_SUCCESS = 0


def hash_cmd(args: Namespace) -> int:
    """Execute the hash command."""
    digest = CommitmentHasher(args.runtime_config.shield).hash_items(*args.items)
    if args.json:
        print(json.dumps({"digest": digest}))
    else:
        print(digest)
    return EXIT_SUCCESS


def leaf_index_cmd(args: Namespace) -> int:
    """Execute the leaf-index command."""
    depth = args.depth or args.runtime_config.shield.tree_depth
    index = leaf_index(args.count, depth)
    if args.json:
        print(json.dumps({
            "sequential_count": args.count,
            "tree_depth": depth,
            "leaf_index": index,
        }))
    else:
        print(index)
    return EXIT_SUCCESS
