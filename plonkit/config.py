from dataclasses import dataclass
import os
from typing import Optional

# --log-level, PLONKIT_LOG_LEVEL 허용 값
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# 범용 SRS 크기 (2의 거듭제곱 지수) 허용 범위
SETUP_MIN_POW2 = 4
SETUP_MAX_POW2 = 26


@dataclass(frozen=True)
class Defaults:
    params: str = "params.bin"
    circuit_binary: str = "circuit.r1cs"
    circuit_json: str = "circuit.json"
    witness: str = "witness.json"
    proof_json: str = "proof.json"
    proof_bin: str = "proof.bin"
    public: str = "public.json"
    verifier: str = "verifier.sol"
    proving_key: str = "proving_key.json"
    verification_key: str = "verification_key.json"
    vk_bin: str = "vk.bin"


DEFAULTS = Defaults()


@dataclass
class Settings:
    log_level: str = "INFO"
    log_file: Optional[str] = None


def load_settings(environ=None):
    """PLONKIT_LOG_LEVEL, PLONKIT_LOG_FILE 환경 변수에서 설정을 읽는다.

    Raises:
        ValueError: PLONKIT_LOG_LEVEL이 LOG_LEVELS에 없을 때
    """
    if environ is None:
        environ = os.environ
    log_level = environ.get("PLONKIT_LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"PLONKIT_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")
    return Settings(
        log_level=log_level,
        log_file=environ.get("PLONKIT_LOG_FILE") or None,
    )
