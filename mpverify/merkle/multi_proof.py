"""
Multi-Leaf Proof Verification
Rebuilds one root from several leaves, a shared sibling pool and a
sequence of routing flags.

Queues:
- Pending queue: the leaves in order, followed by the hashes computed
  so far, in the order they were written
- Proof queue: the sibling digests in order

Algorithm, one merge per flag:
1. a = next item of the pending queue
2. b = next item of the pending queue if the flag is True,
   otherwise the next item of the proof queue
3. hashes[i] = hash_fn(a, b)

Structural checks (raise InvalidMultiproofException):
- len(proof_flags) == len(leaves) + len(proof) - 1, with the fully
  empty input (no leaves, no proof) rejected before the arithmetic
- the pending queue never reads a hash that has not been written yet
- the proof queue never runs dry
- every proof element is consumed once the flags are exhausted

Result selection:
- flags present: the last computed hash
- no flags, one leaf: that leaf
- no flags, no leaves: the single proof element

These checks only guarantee that both queues are consumed exactly.
They do not prove that the flags describe a real tree shape; that is
the job of whoever built the multiproof.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from mpverify.merkle.hashers import PairHashFn, resolve_hash_fn
from mpverify.schemas.errors import InvalidMultiproofException, MultiproofFailure


logger = logging.getLogger(__name__)


def check_multiproof_shape(
    proof_len: int,
    flags_len: int,
    leaves_len: int,
) -> None:
    """
    Validate the length relation between leaves, proof and flags.

    Args:
        proof_len: Number of proof elements
        flags_len: Number of routing flags
        leaves_len: Number of leaves

    Raises:
        InvalidMultiproofException: If the lengths cannot describe a
            multiproof
    """
    details = {
        "leaves": leaves_len,
        "proof": proof_len,
        "proof_flags": flags_len,
    }

    if leaves_len == 0 and proof_len == 0:
        raise InvalidMultiproofException(
            "Multiproof has neither leaves nor proof elements",
            reason=MultiproofFailure.EMPTY_INPUT,
            details=details,
        )

    if flags_len != leaves_len + proof_len - 1:
        raise InvalidMultiproofException(
            f"Expected {leaves_len + proof_len - 1} proof flags "
            f"for {leaves_len} leaves and {proof_len} proof elements, "
            f"got {flags_len}",
            reason=MultiproofFailure.LENGTH_MISMATCH,
            details=details,
        )


def process_multi_proof(
    proof: Sequence[bytes],
    proof_flags: Sequence[bool],
    leaves: Sequence[bytes],
    hash_fn: Optional[PairHashFn] = None,
) -> bytes:
    """
    Compute the root implied by a multiproof.

    Args:
        proof: Sibling digests not derivable from the leaves
        proof_flags: One flag per merge; True takes the second operand
                     from the pending queue, False from the proof
        leaves: Leaf digests in the order the tree builder emitted them
        hash_fn: Optional pairwise hash function; defaults to
                 commutative SHA-256 (combine_ordered)

    Returns:
        Candidate root digest

    Raises:
        InvalidMultiproofException: If the multiproof is structurally
            malformed
    """
    leaves_len = len(leaves)
    proof_len = len(proof)
    total_hashes = len(proof_flags)

    check_multiproof_shape(proof_len, total_hashes, leaves_len)

    hasher = resolve_hash_fn(hash_fn)
    hashes: list[bytes] = [b""] * total_hashes
    leaf_pos = 0
    hash_pos = 0
    proof_pos = 0

    def next_pending(step: int) -> bytes:
        nonlocal leaf_pos, hash_pos
        if leaf_pos < leaves_len:
            leaf_pos += 1
            return leaves[leaf_pos - 1]
        # hashes[0:step] have been written at this point
        if hash_pos >= step:
            raise InvalidMultiproofException(
                f"Merge {step} reads an intermediate hash that has not "
                f"been computed yet",
                reason=MultiproofFailure.HASH_UNDERRUN,
                details={"step": step, "hash_pos": hash_pos},
            )
        hash_pos += 1
        return hashes[hash_pos - 1]

    for i in range(total_hashes):
        a = next_pending(i)
        if proof_flags[i]:
            b = next_pending(i)
        else:
            if proof_pos >= proof_len:
                raise InvalidMultiproofException(
                    f"Merge {i} needs a proof element but all "
                    f"{proof_len} were used",
                    reason=MultiproofFailure.PROOF_UNDERRUN,
                    details={"step": i, "proof": proof_len},
                )
            b = proof[proof_pos]
            proof_pos += 1
        hashes[i] = hasher(a, b)

    if total_hashes > 0:
        if proof_pos != proof_len:
            raise InvalidMultiproofException(
                f"Multiproof left {proof_len - proof_pos} of "
                f"{proof_len} proof elements unused",
                reason=MultiproofFailure.PROOF_NOT_CONSUMED,
                details={"proof": proof_len, "consumed": proof_pos},
            )
        return hashes[total_hashes - 1]
    if leaves_len > 0:
        return leaves[0]
    return proof[0]


def verify_multi_proof(
    proof: Sequence[bytes],
    proof_flags: Sequence[bool],
    root: bytes,
    leaves: Sequence[bytes],
    hash_fn: Optional[PairHashFn] = None,
) -> bool:
    """
    Check that every leaf belongs to the tree with the given root.

    A structurally valid multiproof that rebuilds a different root
    returns False. A malformed one raises.

    Args:
        proof: Sibling digests not derivable from the leaves
        proof_flags: Routing flags, one per merge
        root: Expected Merkle root
        leaves: Leaf digests
        hash_fn: Optional pairwise hash function

    Returns:
        True if the rebuilt root equals root, False otherwise

    Raises:
        InvalidMultiproofException: If the multiproof is structurally
            malformed
    """
    try:
        computed = process_multi_proof(proof, proof_flags, leaves, hash_fn)
    except InvalidMultiproofException as e:
        logger.debug(f"Rejected multiproof: {e.message} ({e.reason})")
        raise
    return computed == root


__all__ = [
    "check_multiproof_shape",
    "process_multi_proof",
    "verify_multi_proof",
]
