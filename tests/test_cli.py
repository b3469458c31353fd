"""
CLI 테스트: 서브커맨드 파싱과 종료 코드 (0 성공, 400 유효하지 않은 증명, 1 오류).
"""

import logging
import os

import pytest

from conftest import X3_CIRCUIT, write_json

from plonkit import cli
from plonkit.policy import ProofSystem


@pytest.fixture(autouse=True)
def restore_logging():
    """main()이 바꾼 루트 로거 핸들러를 되돌린다."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _exit_code(argv):
    with pytest.raises(SystemExit) as info:
        cli.main(argv)
    return info.value.code


class TestParser:

    def test_default_proof_systems(self):
        parser = cli.build_parser()
        assert parser.parse_args(["setup"]).proof_system is ProofSystem.GROTH16
        assert parser.parse_args(["verify"]).proof_system is ProofSystem.PLONK
        assert parser.parse_args(["export-keys"]).proof_system is ProofSystem.GROTH16

    def test_proof_aliases(self):
        parser = cli.build_parser()
        for flag in ("-p", "-r"):
            args = parser.parse_args(["prove", "-m", "srs.bin", flag, "out.bin"])
            assert args.proof == "out.bin"

    def test_defaults(self):
        args = cli.build_parser().parse_args(["export-keys"])
        assert args.params == "params.bin"
        assert args.pk == "proving_key.json"
        assert args.vk == "verification_key.json"

    def test_proof_system_case_insensitive(self):
        args = cli.build_parser().parse_args(["verify", "-s", "Groth16"])
        assert args.proof_system is ProofSystem.GROTH16

    def test_unknown_proof_system(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["verify", "-s", "marlin"])

    def test_prove_requires_srs(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["prove"])

    def test_log_level_case_insensitive(self):
        args = cli.build_parser().parse_args(["--log-level", "debug", "verify"])
        assert args.log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--log-level", "verbose", "verify"])


class TestExitCodes:

    def test_unknown_log_level_is_usage_error(self):
        code = _exit_code(["--log-level", "verbose", "verify"])
        assert code == 2

    def test_unknown_log_level_in_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("PLONKIT_LOG_LEVEL", "verbose")
        code = _exit_code(["verify"])
        assert code == 2
        assert "PLONKIT_LOG_LEVEL" in capsys.readouterr().err

    def test_valid_proof(self, plonk_dir, capsys):
        code = _exit_code(["verify", "-p", plonk_dir["proof"], "-v", plonk_dir["vk"],
                           "-i", plonk_dir["public"]])
        assert code == cli.EXIT_OK
        assert "Proof is correct" in capsys.readouterr().out

    def test_invalid_proof(self, plonk_dir, tmp_path, capsys):
        public = write_json(tmp_path / "public.json", ["34"])
        code = _exit_code(["verify", "-p", plonk_dir["proof"], "-v", plonk_dir["vk"],
                           "-i", public])
        assert code == cli.EXIT_INVALID_PROOF
        assert "Proof is invalid!" in capsys.readouterr().out

    def test_unsupported_combination(self, tmp_path):
        circuit = write_json(tmp_path / "circuit.json", X3_CIRCUIT)
        params = tmp_path / "params.bin"
        code = _exit_code(["setup", "-s", "plonk", "-c", circuit, "-p", str(params)])
        assert code == cli.EXIT_ERROR
        assert not params.exists()

    def test_range_violation(self, tmp_path):
        srs = tmp_path / "srs.bin"
        assert _exit_code(["generate-srs", "-m", str(srs), "-o", "27"]) == cli.EXIT_ERROR
        assert not srs.exists()

    def test_missing_verification_key(self, plonk_dir, tmp_path):
        code = _exit_code(["verify", "-p", plonk_dir["proof"], "-v", str(tmp_path / "vk.bin")])
        assert code == cli.EXIT_ERROR

    def test_missing_default_circuit(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert _exit_code(["setup"]) == cli.EXIT_ERROR
        assert not os.path.exists("params.bin")

    def test_setup_and_export(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        write_json(tmp_path / "circuit.json", X3_CIRCUIT)
        assert _exit_code(["--log-level", "WARNING", "setup"]) == cli.EXIT_OK
        assert _exit_code(["export-keys"]) == cli.EXIT_OK
        assert _exit_code(["generate-verifier"]) == cli.EXIT_OK
        for name in ("params.bin", "proving_key.json", "verification_key.json", "verifier.sol"):
            assert (tmp_path / name).exists()
