"""
Single-Leaf Proof Verification

Rebuilds a root from one leaf and its sibling path, then compares it
with the expected root.

Algorithm:
1. Start with the leaf
2. For each sibling in order: current = hash_fn(current, sibling)
3. The final value is the candidate root

With the default commutative hash the proof does not need to say
which side each sibling sits on. An empty proof returns the leaf
itself (single-node tree).

Proof sequences are read in place and never copied or mutated, so
tuples, lists and other read-only sequences are all accepted.
"""
from __future__ import annotations

from typing import Optional, Sequence

from mpverify.merkle.hashers import PairHashFn, resolve_hash_fn


def process_proof(
    proof: Sequence[bytes],
    leaf: bytes,
    hash_fn: Optional[PairHashFn] = None,
) -> bytes:
    """
    Compute the root implied by a leaf and its sibling path.

    Args:
        proof: Sibling digests from bottom to top of the tree
        leaf: The leaf digest being proven
        hash_fn: Optional pairwise hash function; defaults to
                 commutative SHA-256 (combine_ordered)

    Returns:
        Candidate root digest
    """
    hasher = resolve_hash_fn(hash_fn)
    computed_hash = leaf
    for sibling in proof:
        computed_hash = hasher(computed_hash, sibling)
    return computed_hash


def verify_proof(
    proof: Sequence[bytes],
    root: bytes,
    leaf: bytes,
    hash_fn: Optional[PairHashFn] = None,
) -> bool:
    """
    Check that a leaf belongs to the tree with the given root.

    Never raises for a wrong proof; a mismatch is simply False.

    Args:
        proof: Sibling digests from bottom to top of the tree
        root: Expected Merkle root
        leaf: The leaf digest being proven
        hash_fn: Optional pairwise hash function

    Returns:
        True if the rebuilt root equals root, False otherwise
    """
    return process_proof(proof, leaf, hash_fn) == root


__all__ = [
    "process_proof",
    "verify_proof",
]
