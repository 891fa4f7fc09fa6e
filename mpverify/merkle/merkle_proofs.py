"""
Merkle Verifier Facade
Class-based interface over the proof functions, bound to a config.

This module provides:
- MerkleVerifier: verify single and multi proofs with the configured
  algorithm and input ceilings
- Payload checks that report structural failures as a
  VerificationResult instead of raising

These are convenience wrappers around single_proof.py and
multi_proof.py.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from mpverify.config.runtime import VerifierConfig, get_default_config
from mpverify.crypto.hashing import to_hex
from mpverify.merkle.hashers import PairHashFn, RecordingHasher, commutative_hasher
from mpverify.merkle.multi_proof import process_multi_proof
from mpverify.merkle.single_proof import process_proof
from mpverify.schemas.errors import (
    InvalidMultiproofException,
    ProofLimitExceededException,
    VerifierException,
)
from mpverify.schemas.proof import MultiProofPayload, SingleProofPayload
from mpverify.schemas.verification import VerificationResult


logger = logging.getLogger(__name__)


class MerkleVerifier:
    """
    Proof verifier bound to a VerifierConfig.

    Without an explicit hash_fn, merges use sorted-pair hashing with the
    configured algorithm. With one, the caller's function is used as is.

    Example:
        >>> verifier = MerkleVerifier()
        >>> verifier.verify([l2, node34], root, l1)
        True
    """

    def __init__(
        self,
        config: Optional[VerifierConfig] = None,
        hash_fn: Optional[PairHashFn] = None,
    ) -> None:
        self.config = config or get_default_config()
        self.hash_fn = hash_fn or commutative_hasher(self.config.hash_algorithm)

    def _check_limits(self, proof_len: int, leaves_len: int = 1) -> None:
        limits = self.config.limits
        if limits.max_proof_length and proof_len > limits.max_proof_length:
            raise ProofLimitExceededException(
                f"Proof has {proof_len} elements, limit is {limits.max_proof_length}",
                limit_name="max_proof_length",
                limit=limits.max_proof_length,
                actual=proof_len,
            )
        if limits.max_leaves and leaves_len > limits.max_leaves:
            raise ProofLimitExceededException(
                f"Multiproof has {leaves_len} leaves, limit is {limits.max_leaves}",
                limit_name="max_leaves",
                limit=limits.max_leaves,
                actual=leaves_len,
            )

    def _hash_fn_for(self, algorithm: Optional[str]) -> PairHashFn:
        if algorithm is None or algorithm == self.config.hash_algorithm:
            return self.hash_fn
        return commutative_hasher(algorithm)

    def verify(self, proof: Sequence[bytes], root: bytes, leaf: bytes) -> bool:
        """
        Verify a single-leaf proof.

        Raises:
            ProofLimitExceededException: If the proof exceeds the ceiling
        """
        self._check_limits(len(proof))
        ok = process_proof(proof, leaf, self.hash_fn) == root
        logger.debug(f"Single proof ({len(proof)} siblings) verified={ok}")
        return ok

    def verify_multi(
        self,
        proof: Sequence[bytes],
        proof_flags: Sequence[bool],
        root: bytes,
        leaves: Sequence[bytes],
    ) -> bool:
        """
        Verify a multiproof.

        Raises:
            ProofLimitExceededException: If the input exceeds a ceiling
            InvalidMultiproofException: If the multiproof is malformed
        """
        self._check_limits(len(proof), len(leaves))
        try:
            computed = process_multi_proof(proof, proof_flags, leaves, self.hash_fn)
        except InvalidMultiproofException as e:
            logger.warning(f"Invalid multiproof: {e.message}")
            raise
        ok = computed == root
        logger.debug(
            f"Multiproof ({len(leaves)} leaves, {len(proof)} proof elements) verified={ok}"
        )
        return ok

    def check_single(
        self,
        payload: SingleProofPayload,
        recorder: Optional[RecordingHasher] = None,
    ) -> VerificationResult:
        """Verify a single-proof payload and report the outcome as data."""
        algorithm = payload.algorithm or self.config.hash_algorithm
        if recorder is None:
            recorder = RecordingHasher(self._hash_fn_for(payload.algorithm))
        steps_before = len(recorder.steps)
        try:
            self._check_limits(len(payload.proof))
        except VerifierException as e:
            logger.warning(f"Rejected single proof: {e.message}")
            return VerificationResult.rejected(
                "single", payload.root, algorithm, e.to_error_model()
            )

        computed = process_proof(payload.proof_digests, payload.leaf_digest, recorder)
        return VerificationResult(
            kind="single",
            ok=computed == payload.root_digest,
            computed_root=to_hex(computed),
            expected_root=payload.root,
            algorithm=algorithm,
            merge_steps=len(recorder.steps) - steps_before,
        )

    def check_multi(
        self,
        payload: MultiProofPayload,
        recorder: Optional[RecordingHasher] = None,
    ) -> VerificationResult:
        """
        Verify a multiproof payload and report the outcome as data.

        Structural failures become ok=False, structurally_valid=False
        with the error attached; nothing is raised.
        """
        algorithm = payload.algorithm or self.config.hash_algorithm
        if recorder is None:
            recorder = RecordingHasher(self._hash_fn_for(payload.algorithm))
        steps_before = len(recorder.steps)
        try:
            self._check_limits(len(payload.proof), len(payload.leaves))
            computed = process_multi_proof(
                payload.proof_digests,
                payload.proof_flags,
                payload.leaf_digests,
                recorder,
            )
        except VerifierException as e:
            logger.warning(f"Rejected multiproof: {e.message}")
            return VerificationResult.rejected(
                "multi", payload.root, algorithm, e.to_error_model()
            )

        return VerificationResult(
            kind="multi",
            ok=computed == payload.root_digest,
            computed_root=to_hex(computed),
            expected_root=payload.root,
            algorithm=algorithm,
            merge_steps=len(recorder.steps) - steps_before,
        )


__all__ = [
    "MerkleVerifier",
]
