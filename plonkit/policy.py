"""
증명 시스템 정책 (ProofSystemPolicy)
====================================

증명 시스템마다 지원하는 연산과 보조 변수 오프셋(aux_offset)을 한 표에 모은다.

  | 연산                     | Groth16 | Plonk |
  |--------------------------|---------|-------|
  | setup                    |    O    |       |
  | prove                    |         |   O   |
  | verify                   |         |   O   |
  | generate-verifier        |    O    |       |
  | export-keys              |    O    |       |
  | dump-lagrange            |         |   O   |
  | export-verification-key  |         |   O   |
  | generate-srs             |         |   O   |

모든 워크플로우는 파일을 건드리기 전에 check()를 한 번 호출한다.
"""

import enum
from collections import namedtuple

from plonkit.errors import UnsupportedCombination


class ProofSystem(enum.Enum):
    GROTH16 = "groth16"
    PLONK = "plonk"

    @property
    def aux_offset(self):
        """보조 배선 인덱스에 더하는 오프셋. Plonk는 보조 변수 0을 예약한다."""
        return _AUX_OFFSETS[self]

    @classmethod
    def parse(cls, value):
        """대소문자를 구분하지 않고 이름을 해석한다."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"unknown proof system {value!r} (choose from {choices})") from None

    def __str__(self):
        return self.value


_AUX_OFFSETS = {
    ProofSystem.GROTH16: 0,
    ProofSystem.PLONK: 1,
}


class Operation(enum.Enum):
    SETUP = "setup"
    PROVE = "prove"
    VERIFY = "verify"
    GENERATE_VERIFIER = "generate-verifier"
    EXPORT_KEYS = "export-keys"
    DUMP_LAGRANGE = "dump-lagrange"
    EXPORT_VERIFICATION_KEY = "export-verification-key"
    GENERATE_SRS = "generate-srs"


SUPPORTED = frozenset([
    (ProofSystem.GROTH16, Operation.SETUP),
    (ProofSystem.GROTH16, Operation.GENERATE_VERIFIER),
    (ProofSystem.GROTH16, Operation.EXPORT_KEYS),
    (ProofSystem.PLONK, Operation.PROVE),
    (ProofSystem.PLONK, Operation.VERIFY),
    (ProofSystem.PLONK, Operation.DUMP_LAGRANGE),
    (ProofSystem.PLONK, Operation.EXPORT_VERIFICATION_KEY),
    (ProofSystem.PLONK, Operation.GENERATE_SRS),
])


Capability = namedtuple("Capability", "proof_system operation aux_offset")


def is_supported(proof_system, operation):
    return (proof_system, operation) in SUPPORTED


def check(proof_system, operation):
    """지원하는 조합이면 Capability를, 아니면 UnsupportedCombination을 던진다."""
    proof_system = ProofSystem.parse(proof_system)
    if not is_supported(proof_system, operation):
        raise UnsupportedCombination(proof_system, operation)
    return Capability(proof_system, operation, proof_system.aux_offset)
