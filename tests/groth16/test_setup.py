"""
Groth16 setup / export-keys / generate-verifier 테스트
"""

import json
import os
import random

from conftest import MUL_CIRCUIT, X3_CIRCUIT, write_json

import pytest

from plonkit import codec, workflow
from plonkit.errors import FormatError, ResourceNotFound
from plonkit.groth16 import contract, keys
from plonkit.groth16.qap import eval_poly, r1cs_to_qap
from plonkit.groth16.setup import generate_random_parameters
from plonkit.plonk.field import CURVE_ORDER, FR, G1, ec_mul
from plonkit.policy import ProofSystem
from plonkit.r1cs import load_circuit


@pytest.fixture
def x3_descriptor(tmp_path):
    return load_circuit(write_json(tmp_path / "circuit.json", X3_CIRCUIT))


class TestParameters:

    def test_vector_lengths(self, x3_descriptor):
        params = generate_random_parameters(x3_descriptor, random.Random(7))
        assert len(params.ic) == 2
        assert len(params.l) == 3
        assert len(params.h) == 7
        assert len(params.a) == len(params.b_g1) == len(params.b_g2) == 5

    def test_matches_toxic_waste(self, x3_descriptor):
        params = generate_random_parameters(x3_descriptor, random.Random(7))

        rng = random.Random(7)
        alpha, beta, gamma, delta, tau = (FR(rng.randrange(1, CURVE_ORDER)) for _ in range(5))
        A, B, C, Z = r1cs_to_qap(x3_descriptor.r1cs)

        assert params.alpha_g1 == ec_mul(G1, alpha)
        ic0 = (beta * eval_poly(A[0], tau) + alpha * eval_poly(B[0], tau)
               + eval_poly(C[0], tau)) / gamma
        assert params.ic[0] == ec_mul(G1, ic0)
        l_last = (beta * eval_poly(A[4], tau) + alpha * eval_poly(B[4], tau)
                  + eval_poly(C[4], tau)) / delta
        assert params.l[2] == ec_mul(G1, l_last)
        assert params.h[0] == ec_mul(G1, eval_poly(Z, tau) / delta)

    def test_file_round_trip(self, x3_descriptor, tmp_path):
        params = generate_random_parameters(x3_descriptor, random.Random(7))
        path = str(tmp_path / "params.bin")
        codec.write_params(path, params)
        assert codec.load_params(path) == params

    def test_setup_writes_params(self, tmp_path):
        circuit = write_json(tmp_path / "circuit.json", X3_CIRCUIT)
        path = str(tmp_path / "params.bin")
        params = workflow.setup(path, circuit, ProofSystem.GROTH16, rng=random.Random(1))
        assert codec.load_params(path) == params


class TestExportKeys:

    @pytest.fixture
    def params_path(self, tmp_path):
        circuit = write_json(tmp_path / "circuit.json", X3_CIRCUIT)
        path = str(tmp_path / "params.bin")
        workflow.setup(path, circuit, ProofSystem.GROTH16, rng=random.Random(1))
        return path

    def test_snarkjs_shape(self, tmp_path, params_path):
        pk_path = str(tmp_path / "proving_key.json")
        vk_path = str(tmp_path / "verification_key.json")
        workflow.export_keys(params_path, str(tmp_path / "circuit.json"), pk_path, vk_path,
                             ProofSystem.GROTH16)

        with open(vk_path) as f:
            vk = json.load(f)
        assert vk["protocol"] == "groth16"
        assert vk["nPublic"] == 1
        assert len(vk["IC"]) == 2
        assert vk["IC"][0][2] == "1"

        with open(pk_path) as f:
            pk = json.load(f)
        assert pk["nVars"] == 5
        assert pk["domainSize"] == 8
        assert pk["C"][:2] == [None, None]
        assert all(c is not None for c in pk["C"][2:])
        assert pk["polsA"][2] == {"0": "1", "2": "1"}
        assert pk["polsA"][0] == {"2": "5", "3": "1"}
        assert pk["polsA"][1] == {"4": "1"}
        assert pk["polsC"][1] == {"2": "1"}
        assert len(pk["hExps"]) == 7

    def test_mismatched_circuit(self, tmp_path, params_path):
        other = write_json(tmp_path / "mul.json", MUL_CIRCUIT)
        pk_path = tmp_path / "proving_key.json"
        with pytest.raises(FormatError):
            workflow.export_keys(params_path, other, str(pk_path),
                                 str(tmp_path / "verification_key.json"), ProofSystem.GROTH16)
        assert not pk_path.exists()

    def test_missing_params(self, tmp_path):
        circuit = write_json(tmp_path / "circuit.json", X3_CIRCUIT)
        with pytest.raises(ResourceNotFound):
            workflow.export_keys(str(tmp_path / "params.bin"), circuit, "pk.json", "vk.json",
                                 ProofSystem.GROTH16)

    def test_params_mismatch_reason(self, x3_descriptor):
        params = generate_random_parameters(x3_descriptor, random.Random(7))
        assert keys.params_mismatch(params, x3_descriptor.r1cs) is None

    def test_params_with_short_h_rejected(self, x3_descriptor):
        params = generate_random_parameters(x3_descriptor, random.Random(7))
        params.h = params.h[:2]
        assert "h points" in keys.params_mismatch(params, x3_descriptor.r1cs)


class TestVerifierContract:

    def test_constants_embedded(self, x3_descriptor, tmp_path):
        params = generate_random_parameters(x3_descriptor, random.Random(7))
        path = str(tmp_path / "verifier.sol")
        codec.write_params(str(tmp_path / "params.bin"), params)
        workflow.generate_verifier(str(tmp_path / "params.bin"), path, ProofSystem.GROTH16)

        with open(path) as f:
            source = f.read()
        assert "contract Verifier" in source
        assert "<%" not in source
        assert str(int(params.alpha_g1[0])) in source
        assert "vk.IC[1]" in source
        assert "uint256[1] memory input" in source

    def test_g2_imaginary_part_first(self, x3_descriptor):
        params = generate_random_parameters(x3_descriptor, random.Random(7))
        x0, x1 = (int(c) for c in params.gamma_g2[0].coeffs)
        rendered = contract._g2(params.gamma_g2)
        assert rendered.index(str(x1)) < rendered.index(str(x0))

    def test_missing_params(self, tmp_path):
        with pytest.raises(ResourceNotFound):
            workflow.generate_verifier(str(tmp_path / "params.bin"),
                                       str(tmp_path / "verifier.sol"), ProofSystem.GROTH16)
        assert not os.path.exists(tmp_path / "verifier.sol")
