"""
회로 파일 위치 결정 (CircuitLocator)
====================================

--circuit가 없을 때의 기본 경로 규칙:
  1. circuit.r1cs 가 있으면 그것
  2. 아니면 circuit.json 이 있으면 그것
  3. 둘 다 없으면 circuit.r1cs (없다는 오류는 읽는 단계에서 난다)

명시한 경로는 존재 여부와 관계없이 그대로 돌려준다.
파일 존재 검사는 주입 가능한 함수로 분리되어 있다.
"""

import enum
import os

from plonkit.config import DEFAULTS

BINARY_DEFAULT = DEFAULTS.circuit_binary
JSON_DEFAULT = DEFAULTS.circuit_json


class CircuitFormat(enum.Enum):
    JSON = "json"
    BINARY = "binary"

    @classmethod
    def of(cls, path):
        """확장자가 .json이면 JSON, 그 외에는 모두 바이너리 R1CS."""
        if str(path).lower().endswith(".json"):
            return cls.JSON
        return cls.BINARY


class CircuitLocator:

    def __init__(self, exists=os.path.exists, binary_default=BINARY_DEFAULT,
                 json_default=JSON_DEFAULT):
        self.exists = exists
        self.binary_default = binary_default
        self.json_default = json_default

    def resolve(self, explicit_path=None):
        if explicit_path is not None:
            return explicit_path
        if self.exists(self.binary_default):
            return self.binary_default
        if self.exists(self.json_default):
            return self.json_default
        return self.binary_default


def resolve_circuit_file(path=None):
    return CircuitLocator().resolve(path)
