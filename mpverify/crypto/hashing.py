"""
Digest Hashing Utilities
Raw digest functions and hex helpers shared by the Merkle verifiers.

This module provides:
- SHA-256 hashing for raw bytes (default algorithm)
- Keccak-256 hashing for trees built by Solidity contracts
- Algorithm lookup by name
- Hex encoding/decoding with 0x prefix
- Big-endian digest ordering

Determinism Notes:
- Always hash raw bytes exactly as given
- No length prefixes or type tags are added anywhere in this module
"""
from __future__ import annotations

import hashlib
from typing import Callable

from eth_utils import keccak

from mpverify.schemas.errors import UnsupportedHashAlgorithmException


# Size in bytes of every digest handled by the verifiers
DIGEST_SIZE: int = 32

DEFAULT_ALGORITHM: str = "sha256"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def keccak256(data: bytes) -> bytes:
    """
    Compute Ethereum Keccak-256 hash of raw bytes.

    This is the pre-standard Keccak padding used by the EVM, not the
    NIST SHA3-256 variant in hashlib.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=bytes(data))


HASH_ALGORITHMS: dict[str, Callable[[bytes], bytes]] = {
    "sha256": sha256,
    "keccak256": keccak256,
}


def get_hash_function(algorithm: str) -> Callable[[bytes], bytes]:
    """
    Look up a digest function by name.

    Args:
        algorithm: One of the names in HASH_ALGORITHMS

    Returns:
        Callable mapping raw bytes to a 32-byte digest

    Raises:
        UnsupportedHashAlgorithmException: If the name is not registered
    """
    try:
        return HASH_ALGORITHMS[algorithm]
    except KeyError:
        raise UnsupportedHashAlgorithmException(algorithm) from None


def hash_bytes(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    """Hash raw bytes with the named algorithm."""
    return get_hash_function(algorithm)(data)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def compare_digests(a: bytes, b: bytes) -> int:
    """
    Compare two digests as big-endian unsigned integers.

    For equal-length inputs this is plain lexicographic byte order,
    which is what Python's bytes comparison already does. Inputs of
    different lengths with the same integer value are ordered shorter
    first, so only identical byte strings compare equal.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b
    """
    if len(a) != len(b):
        a_int = int.from_bytes(a, "big")
        b_int = int.from_bytes(b, "big")
        if a_int != b_int:
            return (a_int > b_int) - (a_int < b_int)
        return (len(a) > len(b)) - (len(a) < len(b))
    return (a > b) - (a < b)


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
