"""
Merkle Proof Verification
Single-leaf and multi-leaf inclusion proof verification.

Hashing Rules:
1. Node hashing: H(min(a, b) || max(a, b)) by default (commutative)
2. Leaves are opaque 32-byte digests; hash them before calling
3. A caller-supplied pairwise hash function replaces rule 1 entirely

Usage:
    from mpverify.merkle import verify_proof, verify_multi_proof

    # Single leaf
    assert verify_proof([l2, node34], root, l1)

    # Several leaves at once
    assert verify_multi_proof([], [True, True, True], root, [l1, l2, l3, l4])
"""
from .pair_hasher import (
    combine,
    combine_ordered,
    PairHasher,
)

from .hashers import (
    PairHashFn,
    resolve_hash_fn,
    commutative_hasher,
    positional_hasher,
    domain_separated_hasher,
    salted_double_hasher,
    MergeStep,
    RecordingHasher,
)

from .single_proof import (
    process_proof,
    verify_proof,
)

from .multi_proof import (
    check_multiproof_shape,
    process_multi_proof,
    verify_multi_proof,
)

from .merkle_proofs import MerkleVerifier


__all__ = [
    # Pair hashing
    "combine",
    "combine_ordered",
    "PairHasher",
    # Hash capability
    "PairHashFn",
    "resolve_hash_fn",
    "commutative_hasher",
    "positional_hasher",
    "domain_separated_hasher",
    "salted_double_hasher",
    "MergeStep",
    "RecordingHasher",
    # Single-leaf proofs
    "process_proof",
    "verify_proof",
    # Multiproofs
    "check_multiproof_shape",
    "process_multi_proof",
    "verify_multi_proof",
    # Facade
    "MerkleVerifier",
]
