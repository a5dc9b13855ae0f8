"""
EIP-4844 KZG 위조 챌린지
=========================

  field      BLS12-381 스칼라 필드, 블롭 도메인, G1 직렬화
  blob       시드 기반 결정론적 블롭 생성
  provider   KZGProvider 인터페이스와 ckzg 백엔드
  srs / kzg  τ를 보관하는 시드 기반 py_ecc 백엔드
  challenge  evaluate / verify / claim_flag 판정
"""

from zkp.kzg4844.blob import Blob, build_blob, random_field_element
from zkp.kzg4844.challenge import (
    ChallengeContext,
    ChallengeService,
    ClaimOutcome,
    ClaimResult,
    Verdict,
)
from zkp.kzg4844.errors import (
    ChallengeError,
    CommitmentError,
    DecodeError,
    EvaluationError,
    ProviderError,
    ScalarGenerationError,
    StartupError,
)
from zkp.kzg4844.provider import CKZGProvider, KZGProvider
