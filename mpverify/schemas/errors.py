"""
Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for proof verification.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Two failure categories are kept apart everywhere:
- Structural invalidity (malformed multiproof input) raises
  InvalidMultiproofException.
- Semantic mismatch (well-formed proof, wrong root) is a plain False
  from the verify functions and never raises.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the verifier."""

    # Schema & Input Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    DIGEST_INVALID = "DIGEST_INVALID"
    HASH_ALGORITHM_UNSUPPORTED = "HASH_ALGORITHM_UNSUPPORTED"

    # Structural Proof Errors
    MULTIPROOF_INVALID = "MULTIPROOF_INVALID"
    PROOF_LIMIT_EXCEEDED = "PROOF_LIMIT_EXCEEDED"


class MultiproofFailure:
    """Reasons carried by InvalidMultiproofException."""

    LENGTH_MISMATCH = "length_mismatch"
    EMPTY_INPUT = "empty_input"
    PROOF_UNDERRUN = "proof_underrun"
    HASH_UNDERRUN = "hash_underrun"
    PROOF_NOT_CONSUMED = "proof_not_consumed"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class VerifierError(BaseModel):
    """
    Base error model for structured error communication.

    Used when a verification outcome is reported as data (CLI output,
    VerificationResult) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MULTIPROOF_INVALID],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "VerifierException":
        """Convert this error model to a raised exception."""
        return VerifierException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class VerifierException(Exception):
    """
    Base exception for all verifier errors.

    This exception carries structured error information and can be
    converted to/from VerifierError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "VERIFIER_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> VerifierError:
        """Convert this exception to a VerifierError model."""
        return VerifierError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidMultiproofException(VerifierException):
    """
    Exception raised when a multiproof is structurally malformed.

    This signals caller error in building the multiproof, not a failed
    membership test.
    """

    def __init__(
        self,
        message: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["reason"] = reason
        super().__init__(
            message=message,
            code=ErrorCodes.MULTIPROOF_INVALID,
            details=full_details,
        )
        self.reason = reason


class ProofLimitExceededException(VerifierException):
    """Exception raised when a proof or leaf set exceeds the configured ceiling."""

    def __init__(
        self,
        message: str,
        limit_name: str,
        limit: int,
        actual: int,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_LIMIT_EXCEEDED,
            details={"limit_name": limit_name, "limit": limit, "actual": actual},
        )


class UnsupportedHashAlgorithmException(VerifierException):
    """Exception raised when an unknown hash algorithm name is requested."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm!r}",
            code=ErrorCodes.HASH_ALGORITHM_UNSUPPORTED,
            details={"algorithm": algorithm},
        )


class SchemaValidationException(VerifierException):
    """Exception raised when configuration or payload validation fails."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
        )
