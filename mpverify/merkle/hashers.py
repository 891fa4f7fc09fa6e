"""
Pluggable Pair Hash Functions

A pairwise hash function is any callable of shape
(bytes, bytes) -> bytes. Both verifiers accept one through their
hash_fn argument and call it exactly once per merge step, with the
operands in the order the algorithm picked. Nothing reorders them, so
commutativity is the caller's job when it is wanted.

The verifiers cannot sandbox a supplied function. Treat a verification
that runs with a custom hash_fn as one that may read external state.

This module provides:
- PairHashFn: type alias for the capability
- resolve_hash_fn: default selection
- Factories for common policies (keccak, domain tags, salted double hash)
- RecordingHasher: wrapper that logs every merge step
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from mpverify.crypto.hashing import DEFAULT_ALGORITHM, compare_digests, get_hash_function
from mpverify.merkle.pair_hasher import combine, combine_ordered


PairHashFn = Callable[[bytes, bytes], bytes]


def resolve_hash_fn(hash_fn: Optional[PairHashFn] = None) -> PairHashFn:
    """Return hash_fn, or the default commutative SHA-256 combiner."""
    if hash_fn is None:
        return combine_ordered
    return hash_fn


def commutative_hasher(algorithm: str = DEFAULT_ALGORITHM) -> PairHashFn:
    """
    Sorted-pair hashing with the named algorithm.

    commutative_hasher("keccak256") reproduces the node hashing used by
    Solidity Merkle libraries.
    """
    get_hash_function(algorithm)

    def _hash(a: bytes, b: bytes) -> bytes:
        return combine_ordered(a, b, algorithm)

    return _hash


def positional_hasher(algorithm: str = DEFAULT_ALGORITHM) -> PairHashFn:
    """Non-commutative H(a || b), for trees that keep left/right order."""
    get_hash_function(algorithm)

    def _hash(a: bytes, b: bytes) -> bytes:
        return combine(a, b, algorithm)

    return _hash


def domain_separated_hasher(
    tag: bytes,
    algorithm: str = DEFAULT_ALGORITHM,
    commutative: bool = True,
) -> PairHashFn:
    """
    H(tag || x || y) node hashing.

    Args:
        tag: Domain tag prepended to every node preimage
        algorithm: Hash algorithm name
        commutative: Sort the operands before hashing

    Returns:
        Pairwise hash function
    """
    digest = get_hash_function(algorithm)
    prefix = bytes(tag)

    def _hash(a: bytes, b: bytes) -> bytes:
        if commutative and compare_digests(b, a) < 0:
            a, b = b, a
        return digest(prefix + a + b)

    return _hash


def salted_double_hasher(
    salt: bytes,
    algorithm: str = DEFAULT_ALGORITHM,
    commutative: bool = True,
) -> PairHashFn:
    """
    H(H(salt || x || y)) node hashing.

    Args:
        salt: Salt prepended to every node preimage
        algorithm: Hash algorithm name
        commutative: Sort the operands before hashing

    Returns:
        Pairwise hash function
    """
    digest = get_hash_function(algorithm)
    prefix = bytes(salt)

    def _hash(a: bytes, b: bytes) -> bytes:
        if commutative and compare_digests(b, a) < 0:
            a, b = b, a
        return digest(digest(prefix + a + b))

    return _hash


@dataclass(frozen=True)
class MergeStep:
    """One recorded call to a pairwise hash function."""
    a: bytes
    b: bytes
    result: bytes


@dataclass
class RecordingHasher:
    """
    Wraps a pairwise hash function and records every call.

    Output is exactly the wrapped function's output; only the call log
    is added. Useful for tracing the order in which a multiproof is
    consumed.

    Example:
        >>> recorder = RecordingHasher()
        >>> verify_proof(proof, root, leaf, hash_fn=recorder)
        >>> len(recorder.steps) == len(proof)
        True
    """
    inner: PairHashFn = combine_ordered
    steps: list[MergeStep] = field(default_factory=list)

    def __call__(self, a: bytes, b: bytes) -> bytes:
        result = self.inner(a, b)
        self.steps.append(MergeStep(a=a, b=b, result=result))
        return result

    def operands(self) -> list[tuple[bytes, bytes]]:
        """Operand pairs in call order."""
        return [(step.a, step.b) for step in self.steps]

    def reset(self) -> None:
        self.steps.clear()


__all__ = [
    "PairHashFn",
    "resolve_hash_fn",
    "commutative_hasher",
    "positional_hasher",
    "domain_separated_hasher",
    "salted_double_hasher",
    "MergeStep",
    "RecordingHasher",
]
