"""
ProofSystemPolicy 테스트: 지원 표, aux_offset, 조기 실패.
"""

import os

import pytest

from plonkit import workflow
from plonkit.errors import UnsupportedCombination
from plonkit.policy import Capability, Operation, ProofSystem, SUPPORTED, check

EXPECTED = {
    Operation.SETUP: {ProofSystem.GROTH16},
    Operation.PROVE: {ProofSystem.PLONK},
    Operation.VERIFY: {ProofSystem.PLONK},
    Operation.GENERATE_VERIFIER: {ProofSystem.GROTH16},
    Operation.EXPORT_KEYS: {ProofSystem.GROTH16},
    Operation.DUMP_LAGRANGE: {ProofSystem.PLONK},
    Operation.EXPORT_VERIFICATION_KEY: {ProofSystem.PLONK},
    Operation.GENERATE_SRS: {ProofSystem.PLONK},
}


class TestProofSystem:

    def test_aux_offsets(self):
        assert ProofSystem.GROTH16.aux_offset == 0
        assert ProofSystem.PLONK.aux_offset == 1

    @pytest.mark.parametrize("text", ["plonk", "PLONK", "Plonk"])
    def test_parse_case_insensitive(self, text):
        assert ProofSystem.parse(text) is ProofSystem.PLONK

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            ProofSystem.parse("marlin")


class TestPolicyTable:

    def test_table_covers_every_operation(self):
        assert set(EXPECTED) == set(Operation)

    @pytest.mark.parametrize("operation", list(Operation))
    @pytest.mark.parametrize("proof_system", list(ProofSystem))
    def test_check(self, proof_system, operation):
        if proof_system in EXPECTED[operation]:
            cap = check(proof_system, operation)
            assert cap == Capability(proof_system, operation, proof_system.aux_offset)
        else:
            with pytest.raises(UnsupportedCombination):
                check(proof_system, operation)

    def test_supported_pairs(self):
        expected = {(ps, op) for op, systems in EXPECTED.items() for ps in systems}
        assert SUPPORTED == expected

    def test_check_accepts_string(self):
        assert check("groth16", Operation.SETUP).aux_offset == 0


class TestUnsupportedFailsEarly:
    """지원하지 않는 조합은 파일을 읽거나 쓰기 전에 실패한다."""

    def test_workflows(self, tmp_path):
        p = lambda name: str(tmp_path / name)
        calls = [
            lambda: workflow.setup(p("params.bin"), p("missing.json"), ProofSystem.PLONK),
            lambda: workflow.prove(p("srs.bin"), None, p("missing.json"), p("w.json"),
                                   p("proof.bin"), ProofSystem.GROTH16, public_path=p("public.json")),
            lambda: workflow.verify(p("proof.bin"), p("vk.bin"), ProofSystem.GROTH16),
            lambda: workflow.generate_verifier(p("params.bin"), p("verifier.sol"), ProofSystem.PLONK),
            lambda: workflow.export_keys(p("params.bin"), p("missing.json"), p("pk.json"),
                                         p("vk.json"), ProofSystem.PLONK),
            lambda: workflow.dump_lagrange(p("srs.bin"), p("lagrange.bin"), p("missing.json"),
                                           p("w.json"), ProofSystem.GROTH16),
            lambda: workflow.export_verification_key(p("srs.bin"), p("missing.json"),
                                                     p("vk.bin"), ProofSystem.GROTH16),
            lambda: workflow.generate_srs(p("srs.bin"), 4, ProofSystem.GROTH16),
        ]
        for call in calls:
            with pytest.raises(UnsupportedCombination):
                call()
        assert os.listdir(tmp_path) == []
