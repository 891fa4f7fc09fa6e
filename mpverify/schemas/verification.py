"""
Verification Result Schema
File: verification.py

Purpose: Standard result format for a verification call reported as
data rather than raised.

ok=False covers two cases that callers must not confuse:
- structurally_valid=True: the proof was well-formed but rebuilt a
  different root (a normal "not a member" answer)
- structurally_valid=False: the input was malformed; error says why
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import VerifierError


ProofKind = Literal["single", "multi"]


class VerificationResult(BaseModel):
    """Outcome of verifying one proof."""

    model_config = ConfigDict(extra="forbid")

    kind: ProofKind = Field(..., description="Single-leaf or multi-leaf proof")
    ok: bool = Field(..., description="Whether the proof verified against the root")
    structurally_valid: bool = Field(
        default=True,
        description="False when the input was rejected before a root was computed",
    )
    computed_root: str | None = Field(
        default=None,
        description="Root rebuilt from the proof (0x hex), if any",
    )
    expected_root: str = Field(..., description="Root the caller expected (0x hex)")
    algorithm: str = Field(..., description="Hash algorithm used for merges")
    merge_steps: int = Field(default=0, ge=0, description="Number of pair hashes computed")
    error: VerifierError | None = Field(
        default=None,
        description="Structured error for structurally invalid input",
    )

    @property
    def is_mismatch(self) -> bool:
        """True for a well-formed proof that did not match the root."""
        return self.structurally_valid and not self.ok

    @classmethod
    def rejected(
        cls,
        kind: ProofKind,
        expected_root: str,
        algorithm: str,
        error: VerifierError,
    ) -> "VerificationResult":
        """Create a result for structurally invalid input."""
        return cls(
            kind=kind,
            ok=False,
            structurally_valid=False,
            expected_root=expected_root,
            algorithm=algorithm,
            error=error,
        )
