"""
KZG 챌린지 예외 계층
====================

  ChallengeError
  ├── DecodeError            클라이언트 입력 오류 (4xx)
  ├── ProviderError          KZG 연산 실패
  │   ├── CommitmentError    관리자 커밋먼트 계산 실패 (5xx)
  │   └── EvaluationError    관리자 블롭 열기 실패 (4xx)
  ├── ScalarGenerationError  결정론적 난수 생성 실패
  └── StartupError           시작 단계의 치명적 오류 (진입점만 종료를 결정)

"Invalid" 판정과 동일 값 거부는 예외가 아니라 정상적인 결과값이다.
"""


class ChallengeError(Exception):
    """모든 챌린지 예외의 기반 클래스."""


class DecodeError(ChallengeError):
    """텍스트 입력(점, 평가값, 증명, 블롭)을 디코딩할 수 없을 때."""


class ProviderError(ChallengeError):
    """KZG 제공자(provider) 내부 연산이 실패했을 때."""


class ScalarGenerationError(ChallengeError):
    """시드로부터 32바이트를 뽑지 못했을 때."""


class StartupError(ChallengeError):
    """설정 누락, 신뢰 설정 로드 실패, 관리자 블롭 유도 실패."""


class CommitmentError(ProviderError):
    """관리자 블롭의 커밋먼트를 계산하지 못했을 때 (서버 측 오류)."""


class EvaluationError(ProviderError):
    """관리자 블롭을 point에서 열지 못했을 때 (클라이언트에 보이는 평가 오류)."""
