"""
Proof Payload Schemas
File: proof.py

Purpose: Wire-level shapes for proofs handed to the verifier, e.g. the
JSON documents read by the CLI. Digests travel as 0x-prefixed hex and
are decoded to bytes on access.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mpverify.crypto.hashing import DIGEST_SIZE, from_hex


HashAlgorithmName = Literal["sha256", "keccak256"]


def _normalize_digest(value: str) -> str:
    """Validate a hex digest and return it lowercased."""
    if not isinstance(value, str):
        raise ValueError(f"Digest must be a hex string, got {type(value).__name__}")
    decoded = from_hex(value)
    if len(decoded) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(decoded)}"
        )
    return "0x" + decoded.hex()


class SingleProofPayload(BaseModel):
    """
    A single-leaf inclusion proof.

    The proof lists sibling digests from the leaf level upward.
    """

    model_config = ConfigDict(extra="forbid")

    leaf: str = Field(..., description="Leaf digest (0x hex, 32 bytes)")
    root: str = Field(..., description="Expected Merkle root (0x hex, 32 bytes)")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests, bottom to top",
    )
    algorithm: HashAlgorithmName | None = Field(
        default=None,
        description="Hash algorithm; falls back to the configured default",
    )

    @field_validator("leaf", "root", mode="before")
    @classmethod
    def validate_digest(cls, v: str) -> str:
        return _normalize_digest(v)

    @field_validator("proof", mode="before")
    @classmethod
    def validate_proof(cls, v: list[str]) -> list[str]:
        if not isinstance(v, list):
            raise ValueError("proof must be a list of hex digests")
        return [_normalize_digest(item) for item in v]

    @property
    def leaf_digest(self) -> bytes:
        return from_hex(self.leaf)

    @property
    def root_digest(self) -> bytes:
        return from_hex(self.root)

    @property
    def proof_digests(self) -> list[bytes]:
        return [from_hex(p) for p in self.proof]


class MultiProofPayload(BaseModel):
    """
    A multi-leaf inclusion proof.

    proof_flags must hold one entry per merge:
    len(proof_flags) == len(leaves) + len(proof) - 1. That relation is
    checked by the verifier, not here, so that a malformed multiproof
    surfaces as a structural verification failure.
    """

    model_config = ConfigDict(extra="forbid")

    leaves: list[str] = Field(
        default_factory=list,
        description="Leaf digests in tree-builder order",
    )
    root: str = Field(..., description="Expected Merkle root (0x hex, 32 bytes)")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests not derivable from the leaves",
    )
    proof_flags: list[bool] = Field(
        default_factory=list,
        description="Routing flags, one per merge",
    )
    algorithm: HashAlgorithmName | None = Field(
        default=None,
        description="Hash algorithm; falls back to the configured default",
    )

    @field_validator("root", mode="before")
    @classmethod
    def validate_root(cls, v: str) -> str:
        return _normalize_digest(v)

    @field_validator("leaves", "proof", mode="before")
    @classmethod
    def validate_digest_list(cls, v: list[str]) -> list[str]:
        if not isinstance(v, list):
            raise ValueError("Expected a list of hex digests")
        return [_normalize_digest(item) for item in v]

    @property
    def root_digest(self) -> bytes:
        return from_hex(self.root)

    @property
    def leaf_digests(self) -> list[bytes]:
        return [from_hex(leaf) for leaf in self.leaves]

    @property
    def proof_digests(self) -> list[bytes]:
        return [from_hex(p) for p in self.proof]
