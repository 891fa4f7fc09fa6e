"""
Pair Hasher
Deterministic combination of two digests into one.

Hashing Rules (Hard Contracts):
1. combine(a, b) = H(a || b) over exactly the raw bytes, no length
   prefixes and no type tags
2. combine_ordered(a, b) = combine(min(a, b), max(a, b)) under
   big-endian digest ordering
3. combine_ordered is commutative, which lets a verifier rebuild a root
   without knowing whether a sibling sits on the left or the right

Both operands are fixed-size 32-byte digests, so a single concatenation
is all the encoding there is. There is no separate "packed" variant.
"""
from __future__ import annotations

from dataclasses import dataclass

from mpverify.crypto.hashing import DEFAULT_ALGORITHM, compare_digests, get_hash_function


def combine(a: bytes, b: bytes, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    """
    Hash the concatenation of two digests in the given order.

    Args:
        a: First (left) digest
        b: Second (right) digest
        algorithm: Hash algorithm name (see mpverify.crypto.HASH_ALGORITHMS)

    Returns:
        32-byte digest of a || b
    """
    return get_hash_function(algorithm)(a + b)


def combine_ordered(a: bytes, b: bytes, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    """
    Hash two digests after sorting them.

    combine_ordered(a, b) == combine_ordered(b, a) for every pair,
    including a == b.

    Args:
        a: First digest
        b: Second digest
        algorithm: Hash algorithm name

    Returns:
        32-byte digest of min(a, b) || max(a, b)
    """
    if compare_digests(a, b) < 0:
        return combine(a, b, algorithm)
    return combine(b, a, algorithm)


@dataclass(frozen=True)
class PairHasher:
    """
    Pair hashing bound to one algorithm.

    An instance is itself a valid pairwise hash function: calling it
    applies combine_ordered, so it can be handed straight to the
    verifiers as their hash_fn.

    Example:
        >>> hasher = PairHasher("keccak256")
        >>> hasher(a, b) == hasher(b, a)
        True
    """
    algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self) -> None:
        get_hash_function(self.algorithm)

    def combine(self, a: bytes, b: bytes) -> bytes:
        return combine(a, b, self.algorithm)

    def combine_ordered(self, a: bytes, b: bytes) -> bytes:
        return combine_ordered(a, b, self.algorithm)

    def __call__(self, a: bytes, b: bytes) -> bytes:
        return self.combine_ordered(a, b)


__all__ = [
    "combine",
    "combine_ordered",
    "PairHasher",
]
