"""
plonkit 예외 계층
=================

  PlonkitError
  ├── UnsupportedCombination  선택한 증명 시스템이 지원하지 않는 연산
  ├── ResourceNotFound        필요한 입력 파일이 없음
  ├── FormatError             입력 파일을 기대한 형식으로 읽을 수 없음
  └── RangeViolation          설정 크기 파라미터가 지원 범위를 벗어남

검증 실패(증명이 유효하지 않음)는 예외가 아니다. workflow.verify()가 False를
반환하고 CLI가 종료 코드 400으로 알린다.
"""


class PlonkitError(Exception):
    """CLI가 종료 코드 1로 보고하는 모든 치명적 오류의 기반 클래스."""


class UnsupportedCombination(PlonkitError):

    def __init__(self, proof_system, operation):
        self.proof_system = proof_system
        self.operation = operation
        super().__init__(
            f"{operation.value} is not supported for the {proof_system.value} proof system"
        )


class ResourceNotFound(PlonkitError):

    def __init__(self, path, what="file"):
        self.path = path
        super().__init__(f"{what} not found: {path}")


class FormatError(PlonkitError):

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class RangeViolation(PlonkitError):

    def __init__(self, name, value, low, high):
        self.value = value
        self.low = low
        self.high = high
        super().__init__(f"{name} must be within [{low}, {high}], got {value}")
