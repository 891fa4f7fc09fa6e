"""
CLI Verify Commands

Verify proof documents offline:
- single: one leaf, one sibling path
- multi: several leaves, shared sibling pool, routing flags
- combine: print the pair hash of two digests

Usage:
    mpverify single proof.json [--algorithm A] [--json] [--trace]
    mpverify multi multiproof.json [--algorithm A] [--json] [--trace]
    mpverify combine 0x.. 0x.. [--ordered] [--algorithm A]

Payload files are JSON documents matching SingleProofPayload or
MultiProofPayload, for example:

    {
      "leaves": ["0x...", "0x..."],
      "root": "0x...",
      "proof": ["0x..."],
      "proof_flags": [true, false]
    }
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mpverify.config.runtime import VerifierConfig
from mpverify.crypto.hashing import DIGEST_SIZE, from_hex, to_hex
from mpverify.merkle.hashers import RecordingHasher, commutative_hasher
from mpverify.merkle.merkle_proofs import MerkleVerifier
from mpverify.merkle.pair_hasher import combine, combine_ordered
from mpverify.schemas.errors import VerifierException
from mpverify.schemas.proof import MultiProofPayload, SingleProofPayload
from mpverify.schemas.verification import VerificationResult


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2
EXIT_INVALID_PROOF = 3


def load_payload(path: Path) -> dict[str, Any]:
    """Read a JSON payload document."""
    if not path.exists():
        raise FileNotFoundError(f"Payload not found: {path}")
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Payload must be a JSON object, got {type(data).__name__}")
    return data


def exit_code_for(result: VerificationResult) -> int:
    """Map a verification outcome to a process exit code."""
    if result.ok:
        return EXIT_SUCCESS
    if not result.structurally_valid:
        return EXIT_INVALID_PROOF
    return EXIT_VERIFICATION_FAILED


def print_result_human(result: VerificationResult, recorder: RecordingHasher | None = None) -> None:
    """Print a verification result in human-readable format."""
    print(f"kind: {result.kind}")
    print(f"algorithm: {result.algorithm}")
    print(f"expected_root: {result.expected_root}")
    if result.computed_root is not None:
        print(f"computed_root: {result.computed_root}")
    print(f"merge_steps: {result.merge_steps}")
    print(f"structurally_valid: {str(result.structurally_valid).lower()}")
    print(f"verified: {str(result.ok).lower()}")

    if result.error is not None:
        print(f"\nerror: [{result.error.code}] {result.error.message}")

    if recorder is not None and recorder.steps:
        print(f"\ntrace ({len(recorder.steps)} merges):")
        for i, step in enumerate(recorder.steps):
            print(f"  {i}: {to_hex(step.a)} + {to_hex(step.b)} -> {to_hex(step.result)}")


def print_result_json(result: VerificationResult, recorder: RecordingHasher | None = None) -> None:
    """Print a verification result as JSON."""
    data = result.model_dump(mode="json", exclude_none=True)
    if recorder is not None:
        data["trace"] = [
            {"a": to_hex(s.a), "b": to_hex(s.b), "result": to_hex(s.result)}
            for s in recorder.steps
        ]
    print(json.dumps(data, indent=2))


def _run_check(args: Namespace, config: VerifierConfig, multi: bool) -> int:
    payload_path = Path(args.payload)
    debug = getattr(args, "debug", False)

    try:
        data = load_payload(payload_path)
        if args.algorithm:
            data["algorithm"] = args.algorithm
        payload = MultiProofPayload(**data) if multi else SingleProofPayload(**data)
    except ValidationError as e:
        print(f"Error: invalid payload {payload_path}:\n{e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (OSError, ValueError) as e:
        if debug:
            raise
        print(f"Error reading payload: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    verifier = MerkleVerifier(config)
    algorithm = payload.algorithm or config.hash_algorithm
    recorder = RecordingHasher(commutative_hasher(algorithm)) if args.trace else None

    try:
        if multi:
            result = verifier.check_multi(payload, recorder)
        else:
            result = verifier.check_single(payload, recorder)
    except VerifierException as e:
        if debug:
            raise
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print_result_json(result, recorder)
    else:
        print_result_human(result, recorder)

    if result.ok:
        logger.info("Verification passed")
    elif result.structurally_valid:
        logger.warning("Proof did not match the expected root")
    else:
        logger.warning("Proof was structurally invalid")

    return exit_code_for(result)


def single_cmd(args: Namespace, config: VerifierConfig) -> int:
    """
    Execute the single command.

    Returns:
        Exit code
    """
    return _run_check(args, config, multi=False)


def multi_cmd(args: Namespace, config: VerifierConfig) -> int:
    """
    Execute the multi command.

    Returns:
        Exit code
    """
    return _run_check(args, config, multi=True)


def combine_cmd(args: Namespace, config: VerifierConfig) -> int:
    """Print the pair hash of two hex digests."""
    algorithm = args.algorithm or config.hash_algorithm
    try:
        a = from_hex(args.a)
        b = from_hex(args.b)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    for value in (a, b):
        if len(value) != DIGEST_SIZE:
            print(f"Error: digests must be {DIGEST_SIZE} bytes, got {len(value)}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    if args.ordered:
        digest = combine_ordered(a, b, algorithm)
    else:
        digest = combine(a, b, algorithm)
    print(to_hex(digest))
    return EXIT_SUCCESS
