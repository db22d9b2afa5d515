"""
예외 분류
=========

  DeserializationError          레지스트리 바이너리 손상 (치명적)
  PoKVerificationFailure        레지스트리 항목의 PoK 검증 실패 (치명적)
  SignatureVerificationFailure  집계 서명 검증 실패 (체크포인트에서 복구)
  ScalarInversionError          FR의 0 역원 요청
  InvalidPointError             곡선 밖의 점 (DeserializationError의 하위)
  ConfigError                   잘못된 환경 변수
"""


class RogueKeyError(Exception):
    """이 패키지에서 발생하는 모든 예외의 기반 클래스."""


class DeserializationError(RogueKeyError, ValueError):
    """레지스트리 바이너리를 점으로 복원할 수 없을 때."""


class PoKVerificationFailure(RogueKeyError):
    """인덱스 i의 PoK가 공개키와 같은 이산로그를 공유하지 않을 때.

    속성:
        index: 검증에 실패한 레지스트리 인덱스
    """

    def __init__(self, index, message=None):
        self.index = index
        if message is None:
            message = f"PoK 검증 실패: 인덱스 {index}"
        super().__init__(message)


class SignatureVerificationFailure(RogueKeyError):
    """BLS 서명이 공개키/메시지와 맞지 않을 때."""


class ScalarInversionError(RogueKeyError, ZeroDivisionError):
    """FR(0)의 역원을 요구했을 때."""


class InvalidPointError(DeserializationError):
    """곡선 위에 있지 않은 점을 만났을 때.

    check=True 로드에서는 즉시, unchecked 로드로 받아들인 점은
    페어링 단계에서 드러난다.
    """


class ConfigError(RogueKeyError, ValueError):
    """환경 변수 값을 해석할 수 없을 때."""
