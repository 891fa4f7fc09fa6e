"""
Merkle Verifier Facade Unit Tests
Tests for mpverify/merkle/merkle_proofs.py

Tests:
- configured algorithm and explicit hash_fn
- input ceilings
- payload checks keep structural failures apart from mismatches
"""
import logging

import pytest

from mpverify.config.runtime import LimitsConfig, VerifierConfig, set_default_config
from mpverify.crypto.hashing import sha256, to_hex
from mpverify.merkle.hashers import RecordingHasher, commutative_hasher
from mpverify.merkle.merkle_proofs import MerkleVerifier
from mpverify.schemas.errors import (
    ErrorCodes,
    InvalidMultiproofException,
    ProofLimitExceededException,
)
from mpverify.schemas.proof import MultiProofPayload, SingleProofPayload

from fixtures.trees import get_multi_proof, get_proof, make_leaves, make_tree


def _hex_list(digests):
    return [to_hex(d) for d in digests]


class TestVerify:

    def test_default_config(self, four_leaf_tree):
        t = four_leaf_tree
        verifier = MerkleVerifier(VerifierConfig())

        assert verifier.verify([t["l2"], t["node34"]], t["root"], t["l1"])
        assert not verifier.verify([t["l2"], sha256(b"random")], t["root"], t["l1"])

    def test_uses_process_default_config(self, four_leaf_tree):
        t = four_leaf_tree
        set_default_config(VerifierConfig(hash_algorithm="keccak256"))
        verifier = MerkleVerifier()

        assert verifier.config.hash_algorithm == "keccak256"
        assert not verifier.verify([t["l2"], t["node34"]], t["root"], t["l1"])

    def test_keccak_config(self):
        hasher = commutative_hasher("keccak256")
        leaves = make_leaves(5)
        tree = make_tree(leaves, hasher)
        verifier = MerkleVerifier(VerifierConfig(hash_algorithm="keccak256"))

        assert verifier.verify(get_proof(tree, 2), tree[0], leaves[2])

    def test_explicit_hash_fn(self, four_leaf_tree):
        t = four_leaf_tree
        recorder = RecordingHasher()
        verifier = MerkleVerifier(VerifierConfig(), hash_fn=recorder)

        assert verifier.verify([t["l2"], t["node34"]], t["root"], t["l1"])
        assert len(recorder.steps) == 2

    def test_verify_multi(self, eight_leaf_tree):
        _, tree = eight_leaf_tree
        leaves, proof, flags = get_multi_proof(tree, [1, 6])
        verifier = MerkleVerifier(VerifierConfig())

        assert verifier.verify_multi(proof, flags, tree[0], leaves)

    def test_verify_multi_invalid_raises_and_logs(self, four_leaf_tree, caplog):
        t = four_leaf_tree
        verifier = MerkleVerifier(VerifierConfig())

        with caplog.at_level(logging.WARNING, logger="mpverify.merkle.merkle_proofs"):
            with pytest.raises(InvalidMultiproofException):
                verifier.verify_multi([], [True], t["root"], [t["l1"], t["l2"], t["l3"]])

        assert "Invalid multiproof" in caplog.text


class TestLimits:

    def test_proof_length_limit(self, four_leaf_tree):
        t = four_leaf_tree
        config = VerifierConfig(limits=LimitsConfig(max_proof_length=1))
        verifier = MerkleVerifier(config)

        with pytest.raises(ProofLimitExceededException) as exc_info:
            verifier.verify([t["l2"], t["node34"]], t["root"], t["l1"])

        assert exc_info.value.code == ErrorCodes.PROOF_LIMIT_EXCEEDED
        assert exc_info.value.details == {
            "limit_name": "max_proof_length",
            "limit": 1,
            "actual": 2,
        }

    def test_leaf_limit(self, four_leaf_tree):
        t = four_leaf_tree
        verifier = MerkleVerifier(VerifierConfig(limits=LimitsConfig(max_leaves=3)))
        leaves = [t["l1"], t["l2"], t["l3"], t["l4"]]

        with pytest.raises(ProofLimitExceededException):
            verifier.verify_multi([], [True, True, True], t["root"], leaves)

    def test_zero_disables_limit(self):
        leaves = make_leaves(16)
        tree = make_tree(leaves)
        config = VerifierConfig(limits=LimitsConfig(max_proof_length=0, max_leaves=0))
        sub, proof, flags = get_multi_proof(tree, range(16))

        assert MerkleVerifier(config).verify_multi(proof, flags, tree[0], sub)


class TestCheckSingle:

    def test_verified(self, four_leaf_tree):
        t = four_leaf_tree
        payload = SingleProofPayload(
            leaf=to_hex(t["l1"]),
            root=to_hex(t["root"]),
            proof=_hex_list([t["l2"], t["node34"]]),
        )

        result = MerkleVerifier(VerifierConfig()).check_single(payload)

        assert result.ok
        assert result.structurally_valid
        assert result.computed_root == to_hex(t["root"])
        assert result.merge_steps == 2
        assert result.algorithm == "sha256"

    def test_mismatch(self, four_leaf_tree):
        t = four_leaf_tree
        payload = SingleProofPayload(
            leaf=to_hex(t["l1"]),
            root=to_hex(t["root"]),
            proof=_hex_list([t["l2"], sha256(b"random")]),
        )

        result = MerkleVerifier(VerifierConfig()).check_single(payload)

        assert not result.ok
        assert result.is_mismatch
        assert result.error is None

    def test_payload_algorithm_overrides_config(self):
        hasher = commutative_hasher("keccak256")
        leaves = make_leaves(4)
        tree = make_tree(leaves, hasher)
        payload = SingleProofPayload(
            leaf=to_hex(leaves[0]),
            root=to_hex(tree[0]),
            proof=_hex_list(get_proof(tree, 0)),
            algorithm="keccak256",
        )

        result = MerkleVerifier(VerifierConfig()).check_single(payload)

        assert result.ok
        assert result.algorithm == "keccak256"

    def test_limit_becomes_rejection(self, four_leaf_tree):
        t = four_leaf_tree
        payload = SingleProofPayload(
            leaf=to_hex(t["l1"]),
            root=to_hex(t["root"]),
            proof=_hex_list([t["l2"], t["node34"]]),
        )
        config = VerifierConfig(limits=LimitsConfig(max_proof_length=1))

        result = MerkleVerifier(config).check_single(payload)

        assert not result.ok
        assert not result.structurally_valid
        assert result.error.code == ErrorCodes.PROOF_LIMIT_EXCEEDED


class TestCheckMulti:

    def test_verified(self, eight_leaf_tree):
        _, tree = eight_leaf_tree
        leaves, proof, flags = get_multi_proof(tree, [0, 4, 7])
        payload = MultiProofPayload(
            leaves=_hex_list(leaves),
            root=to_hex(tree[0]),
            proof=_hex_list(proof),
            proof_flags=flags,
        )

        result = MerkleVerifier(VerifierConfig()).check_multi(payload)

        assert result.ok
        assert result.merge_steps == len(flags)

    def test_structural_failure_reported_not_raised(self, four_leaf_tree):
        t = four_leaf_tree
        payload = MultiProofPayload(
            leaves=_hex_list([t["l1"], t["l2"], t["l3"], t["l4"]]),
            root=to_hex(t["root"]),
            proof=[],
            proof_flags=[True, True],
        )

        result = MerkleVerifier(VerifierConfig()).check_multi(payload)

        assert not result.ok
        assert not result.structurally_valid
        assert not result.is_mismatch
        assert result.computed_root is None
        assert result.error.code == ErrorCodes.MULTIPROOF_INVALID
        assert result.error.details["reason"] == "length_mismatch"

    def test_mismatch_reported(self, four_leaf_tree):
        t = four_leaf_tree
        payload = MultiProofPayload(
            leaves=_hex_list([t["l1"], t["l2"], t["l3"], t["l4"]]),
            root=to_hex(sha256(b"not the root")),
            proof_flags=[True, True, True],
        )

        result = MerkleVerifier(VerifierConfig()).check_multi(payload)

        assert not result.ok
        assert result.structurally_valid
        assert result.computed_root == to_hex(t["root"])

    def test_external_recorder(self, four_leaf_tree):
        t = four_leaf_tree
        payload = MultiProofPayload(
            leaves=_hex_list([t["l1"], t["l2"], t["l3"], t["l4"]]),
            root=to_hex(t["root"]),
            proof_flags=[True, True, True],
        )
        recorder = RecordingHasher()

        result = MerkleVerifier(VerifierConfig()).check_multi(payload, recorder)

        assert result.ok
        assert len(recorder.steps) == 3

    def test_reused_recorder_counts_steps_per_call(self, four_leaf_tree):
        t = four_leaf_tree
        payload = MultiProofPayload(
            leaves=_hex_list([t["l1"], t["l2"], t["l3"], t["l4"]]),
            root=to_hex(t["root"]),
            proof_flags=[True, True, True],
        )
        recorder = RecordingHasher()
        verifier = MerkleVerifier(VerifierConfig())

        first = verifier.check_multi(payload, recorder)
        second = verifier.check_multi(payload, recorder)

        assert first.merge_steps == 3
        assert second.merge_steps == 3
        assert len(recorder.steps) == 6

    def test_reused_recorder_single_then_multi(self, four_leaf_tree):
        t = four_leaf_tree
        single = SingleProofPayload(
            leaf=to_hex(t["l1"]),
            root=to_hex(t["root"]),
            proof=_hex_list([t["l2"], t["node34"]]),
        )
        multi = MultiProofPayload(
            leaves=_hex_list([t["l1"], t["l2"], t["l3"], t["l4"]]),
            root=to_hex(t["root"]),
            proof_flags=[True, True, True],
        )
        recorder = RecordingHasher()
        verifier = MerkleVerifier(VerifierConfig())

        assert verifier.check_single(single, recorder).merge_steps == 2
        assert verifier.check_multi(multi, recorder).merge_steps == 3
