"""
Error taxonomy and result schemas.

Payload models live in mpverify.schemas.proof and are imported from
there directly; that module depends on mpverify.crypto, which itself
depends on the error types exported here.
"""

from .errors import (
    ErrorCodes,
    MultiproofFailure,
    VerifierError,
    VerifierException,
    InvalidMultiproofException,
    ProofLimitExceededException,
    UnsupportedHashAlgorithmException,
    SchemaValidationException,
)
from .verification import ProofKind, VerificationResult

__all__ = [
    "ErrorCodes",
    "MultiproofFailure",
    "VerifierError",
    "VerifierException",
    "InvalidMultiproofException",
    "ProofLimitExceededException",
    "UnsupportedHashAlgorithmException",
    "SchemaValidationException",
    "ProofKind",
    "VerificationResult",
]
