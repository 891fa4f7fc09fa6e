"""
mpverify - Merkle proof and multiproof verification.

Checks that one or more leaves belong to a Merkle tree with a known
root, from a compact proof. Tree construction is left to the caller.
"""
from mpverify.crypto import sha256, keccak256, to_hex, from_hex
from mpverify.merkle import (
    combine,
    combine_ordered,
    PairHasher,
    process_proof,
    verify_proof,
    process_multi_proof,
    verify_multi_proof,
    MerkleVerifier,
)
from mpverify.schemas import (
    InvalidMultiproofException,
    VerifierException,
)

__version__ = "0.1.0"

__all__ = [
    "sha256",
    "keccak256",
    "to_hex",
    "from_hex",
    "combine",
    "combine_ordered",
    "PairHasher",
    "process_proof",
    "verify_proof",
    "process_multi_proof",
    "verify_multi_proof",
    "MerkleVerifier",
    "InvalidMultiproofException",
    "VerifierException",
]
