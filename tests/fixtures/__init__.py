"""
Test fixtures package for mpverify tests.

- trees.py: builds trees, sibling paths and multiproofs to verify

Usage:
    from fixtures.trees import make_leaves, make_tree, get_multi_proof

    def test_something():
        tree = make_tree(make_leaves(8))
        leaves, proof, flags = get_multi_proof(tree, [1, 4, 6])
"""

from .trees import (
    make_leaves,
    make_tree,
    leaf_tree_index,
    get_proof,
    get_multi_proof,
)

__all__ = [
    "make_leaves",
    "make_tree",
    "leaf_tree_index",
    "get_proof",
    "get_multi_proof",
]
