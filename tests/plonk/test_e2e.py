"""
PLONK 워크플로우 종단 간 테스트: generate-srs → export-verification-key → prove → verify

conftest의 plonk_dir 픽스처가 x³ + x + 5 = 35 회로의 SRS(2^4), 검증 키, 증명을
한 번 만들어 둔다. 증명 생성은 느리므로 각 테스트는 가능한 한 그 결과를 재사용한다.
"""

import os
import random

import pytest

from conftest import SRS_POW2, X3_CIRCUIT, build_r1cs_bin, write_json

from plonkit import codec, workflow
from plonkit.errors import FormatError, RangeViolation, UnsupportedCombination
from plonkit.plonk import circuit as plonk_circuit, preprocessor, prover
from plonkit.plonk.field import FR
from plonkit.policy import ProofSystem

PLONK = ProofSystem.PLONK

# out · 1 = out 한 개. 게이트 3개 → 도메인 4
TINY_CIRCUIT = {
    "nPubInputs": 0,
    "nOutputs": 1,
    "nVars": 2,
    "constraints": [
        [{"1": "1"}, {"0": "1"}, {"1": "1"}],
    ],
}
# 같은 제약 9개. 게이트 11개 → 도메인 16, SRS 2^4로는 부족
WIDE_CIRCUIT = dict(TINY_CIRCUIT, constraints=TINY_CIRCUIT["constraints"] * 9)
TINY_WITNESS = ["1", "5"]


def _tampered(plonk_dir, tmp_path, offset):
    with open(plonk_dir["proof"], "rb") as f:
        data = bytearray(f.read())
    data[offset] ^= 1
    path = tmp_path / "proof.bin"
    path.write_bytes(bytes(data))
    return str(path)


def _prove_x3(plonk_dir, proof_path, **kwargs):
    return workflow.prove(plonk_dir["srs"], kwargs.pop("lagrange", None), plonk_dir["circuit"],
                          plonk_dir["witness"], str(proof_path), PLONK,
                          rng=random.Random(5678), **kwargs)


@pytest.fixture
def engine_spy(monkeypatch):
    """엔진 함수가 호출되면 기록한다."""
    calls = []

    def spy(name):
        def fail(*args, **kwargs):
            calls.append(name)
            raise AssertionError(f"{name} must not be called")
        return fail

    monkeypatch.setattr(plonk_circuit, "synthesize", spy("synthesize"))
    monkeypatch.setattr(preprocessor, "setup_circuit", spy("setup_circuit"))
    monkeypatch.setattr(prover, "prove", spy("prove"))
    return calls


class TestVerify:

    def test_valid(self, plonk_dir):
        assert workflow.verify(plonk_dir["proof"], plonk_dir["vk"], PLONK)

    def test_valid_with_public_inputs(self, plonk_dir):
        assert codec.load_public_inputs(plonk_dir["public"]) == [FR(35)]
        assert workflow.verify(plonk_dir["proof"], plonk_dir["vk"], PLONK,
                               public_path=plonk_dir["public"])

    def test_tampered_evaluation(self, plonk_dir, tmp_path):
        size = os.path.getsize(plonk_dir["proof"])
        proof = _tampered(plonk_dir, tmp_path, size - 1)
        assert not workflow.verify(proof, plonk_dir["vk"], PLONK)

    def test_tampered_commitment(self, plonk_dir, tmp_path):
        # W_zeta_omega_comm의 y 좌표
        offset = 4 + 32 + 8 * 64 + 63
        proof = _tampered(plonk_dir, tmp_path, offset)
        assert not workflow.verify(proof, plonk_dir["vk"], PLONK)

    def test_truncated(self, plonk_dir, tmp_path):
        path = tmp_path / "proof.bin"
        with open(plonk_dir["proof"], "rb") as f:
            path.write_bytes(f.read()[:-10])
        assert not workflow.verify(str(path), plonk_dir["vk"], PLONK)

    def test_public_json_mismatch(self, plonk_dir, tmp_path):
        public = write_json(tmp_path / "public.json", ["36"])
        assert not workflow.verify(plonk_dir["proof"], plonk_dir["vk"], PLONK,
                                   public_path=public)

    def test_forged_public_input(self, plonk_dir, tmp_path):
        proof = codec.load_proof(plonk_dir["proof"])
        proof.public_inputs = [FR(36)]
        path = str(tmp_path / "proof.bin")
        codec.write_proof(path, proof)
        assert not workflow.verify(path, plonk_dir["vk"], PLONK)

    def test_wrong_public_input_count(self, plonk_dir, tmp_path):
        proof = codec.load_proof(plonk_dir["proof"])
        proof.public_inputs = [FR(35), FR(0)]
        path = str(tmp_path / "proof.bin")
        codec.write_proof(path, proof)
        assert not workflow.verify(path, plonk_dir["vk"], PLONK)

    def test_groth16_unsupported(self, plonk_dir):
        with pytest.raises(UnsupportedCombination):
            workflow.verify(plonk_dir["proof"], plonk_dir["vk"], ProofSystem.GROTH16)


class TestProve:

    def test_proof_is_deterministic_for_seeded_rng(self, plonk_dir, tmp_path):
        proof = _prove_x3(plonk_dir, tmp_path / "proof.bin", size_pow2=SRS_POW2)
        assert proof == codec.load_proof(plonk_dir["proof"])

    def test_lagrange_srs_gives_same_proof(self, plonk_dir, tmp_path):
        lagrange = str(tmp_path / "srs_lagrange.bin")
        workflow.dump_lagrange(plonk_dir["srs"], lagrange, plonk_dir["circuit"],
                               plonk_dir["witness"], PLONK)
        assert codec.load_srs_lagrange(lagrange).size == 8

        proof_path = tmp_path / "proof.bin"
        _prove_x3(plonk_dir, proof_path, lagrange=lagrange)
        with open(plonk_dir["proof"], "rb") as f:
            assert proof_path.read_bytes() == f.read()

    def test_missing_lagrange_file_is_derived(self, plonk_dir, tmp_path):
        proof = _prove_x3(plonk_dir, tmp_path / "proof.bin",
                          lagrange=str(tmp_path / "missing.bin"))
        assert proof == codec.load_proof(plonk_dir["proof"])

    @pytest.mark.parametrize("size_pow2", [3, 27])
    def test_size_out_of_range(self, plonk_dir, tmp_path, engine_spy, size_pow2):
        proof_path = tmp_path / "proof.bin"
        with pytest.raises(RangeViolation):
            _prove_x3(plonk_dir, proof_path, size_pow2=size_pow2)
        assert engine_spy == []
        assert not proof_path.exists()

    def test_size_boundaries_accepted(self):
        assert workflow.check_setup_power(4) == 4
        assert workflow.check_setup_power(26) == 26

    def test_size_does_not_match_srs(self, plonk_dir, tmp_path, engine_spy):
        with pytest.raises(FormatError):
            _prove_x3(plonk_dir, tmp_path / "proof.bin", size_pow2=5)
        assert engine_spy == []

    def test_lagrange_size_mismatch(self, plonk_dir, tmp_path):
        circuit = write_json(tmp_path / "tiny.json", TINY_CIRCUIT)
        witness = write_json(tmp_path / "tiny_witness.json", TINY_WITNESS)
        lagrange = str(tmp_path / "srs_lagrange.bin")
        workflow.dump_lagrange(plonk_dir["srs"], lagrange, circuit, witness, PLONK)

        proof_path = tmp_path / "proof.bin"
        with pytest.raises(FormatError, match="dump-lagrange"):
            _prove_x3(plonk_dir, proof_path, lagrange=lagrange)
        assert not proof_path.exists()

    def test_lagrange_from_other_setup(self, plonk_dir, tmp_path):
        """같은 크기라도 다른 τ로 만든 Lagrange SRS는 거부한다."""
        other = str(tmp_path / "other_srs.bin")
        workflow.generate_srs(other, SRS_POW2, PLONK, rng=random.Random(999))
        lagrange = str(tmp_path / "srs_lagrange.bin")
        workflow.dump_lagrange(other, lagrange, plonk_dir["circuit"], plonk_dir["witness"], PLONK)
        assert codec.load_srs_lagrange(lagrange).size == 8

        proof_path = tmp_path / "proof.bin"
        with pytest.raises(FormatError, match="dump-lagrange"):
            _prove_x3(plonk_dir, proof_path, lagrange=lagrange)
        assert not proof_path.exists()

    def test_srs_too_small(self, plonk_dir, tmp_path):
        circuit = write_json(tmp_path / "wide.json", WIDE_CIRCUIT)
        witness = write_json(tmp_path / "wide_witness.json", TINY_WITNESS)
        with pytest.raises(FormatError):
            workflow.prove(plonk_dir["srs"], None, circuit, witness,
                           str(tmp_path / "proof.bin"), PLONK)
        with pytest.raises(FormatError):
            workflow.export_verification_key(plonk_dir["srs"], circuit,
                                             str(tmp_path / "vk.bin"), PLONK)

    def test_unsatisfied_witness(self, plonk_dir, tmp_path):
        witness = write_json(tmp_path / "witness.json", ["1", "36", "3", "9", "27"])
        with pytest.raises(ValueError):
            workflow.prove(plonk_dir["srs"], None, plonk_dir["circuit"], witness,
                           str(tmp_path / "proof.bin"), PLONK)

    def test_groth16_unsupported(self, plonk_dir, tmp_path, engine_spy):
        with pytest.raises(UnsupportedCombination):
            workflow.prove(plonk_dir["srs"], None, plonk_dir["circuit"], plonk_dir["witness"],
                           str(tmp_path / "proof.bin"), ProofSystem.GROTH16)
        assert engine_spy == []


class TestOtherCircuit:

    def test_proof_does_not_verify_against_other_key(self, plonk_dir, tmp_path):
        circuit = write_json(tmp_path / "tiny.json", TINY_CIRCUIT)
        vk = str(tmp_path / "vk.bin")
        workflow.export_verification_key(plonk_dir["srs"], circuit, vk, PLONK)
        assert codec.load_verification_key(vk).n == 4
        assert not workflow.verify(plonk_dir["proof"], vk, PLONK)

    def test_binary_circuit_round_trip(self, plonk_dir, tmp_path):
        path = tmp_path / "circuit.r1cs"
        path.write_bytes(build_r1cs_bin(X3_CIRCUIT, n_pub_out=1, n_pub_in=0, n_prv_in=1))
        vk = str(tmp_path / "vk.bin")
        workflow.export_verification_key(plonk_dir["srs"], str(path), vk, PLONK)
        assert codec.load_verification_key(vk) == codec.load_verification_key(plonk_dir["vk"])


class TestGenerateSRS:

    def test_out_of_range(self, tmp_path):
        path = tmp_path / "srs.bin"
        with pytest.raises(RangeViolation):
            workflow.generate_srs(str(path), 27, PLONK)
        assert not path.exists()

    def test_size(self, plonk_dir):
        assert codec.load_srs_monomial(plonk_dir["srs"]).size == 2 ** SRS_POW2
