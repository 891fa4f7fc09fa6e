"""
Digest hashing utilities used by the Merkle verifiers.
"""
from .hashing import (
    DIGEST_SIZE,
    DEFAULT_ALGORITHM,
    HASH_ALGORITHMS,
    sha256,
    keccak256,
    get_hash_function,
    hash_bytes,
    to_hex,
    from_hex,
    compare_digests,
)

__all__ = [
    "DIGEST_SIZE",
    "DEFAULT_ALGORITHM",
    "HASH_ALGORITHMS",
    "sha256",
    "keccak256",
    "get_hash_function",
    "hash_bytes",
    "to_hex",
    "from_hex",
    "compare_digests",
]
