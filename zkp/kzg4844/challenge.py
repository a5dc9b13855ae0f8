"""
KZG 위조 챌린지: 판정 핵심
=============================

비밀 관리자 블롭 하나를 두고 세 가지 연산을 제공한다.

  evaluate(point)                    → 실제 평가값 (오라클)
  verify(point, value, proof)        → VALID / INVALID
  claim_flag(point, value, proof)    → FLAG_ISSUED / REJECTED_*

**claim_flag 상태 흐름**:

  Start → CommitComputed → TrueValueComputed
        ├─ value == 실제값 → REJECTED_SAME_VALUE
        └─ ProofChecked
             ├─ 검증 실패 → REJECTED_INVALID_PROOF
             └─ 검증 성공 → FLAG_ISSUED

  정직하게 계산한 열기 증명은 언제나 검증을 통과하므로, 같은 값을 제출하면
  곧바로 거부한다. 거짓 값에 대한 증명이 통과하는 것은 건전성이 깨졌다는
  뜻이며 그것이 승리 조건이다. 호출 사이에 시도 상태는 남지 않는다.

사용 예시:
    >>> context = ChallengeContext(admin_blob=Blob.generate(42), provider=p, flag="flag{...}")
    >>> service = ChallengeService(context)
    >>> value = service.evaluate(point)
    >>> service.claim_flag(point, value, proof).outcome  # ClaimOutcome.REJECTED_SAME_VALUE
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from zkp.kzg4844.blob import Blob
from zkp.kzg4844.errors import CommitmentError, EvaluationError, ProviderError
from zkp.kzg4844.provider import KZGProvider


logger = logging.getLogger(__name__)


class Verdict(enum.Enum):
    VALID = "Valid"
    INVALID = "Invalid"


class ClaimOutcome(enum.Enum):
    FLAG_ISSUED = "flag_issued"
    REJECTED_SAME_VALUE = "rejected_same_value"
    REJECTED_INVALID_PROOF = "rejected_invalid_proof"


@dataclass(frozen=True)
class ClaimResult:
    outcome: ClaimOutcome
    flag: Optional[str] = None

    @property
    def issued(self):
        return self.outcome is ClaimOutcome.FLAG_ISSUED


@dataclass(frozen=True)
class ChallengeContext:
    """시작 시 한 번 만들어지는 읽기 전용 컨텍스트.

    속성:
        admin_blob: 비밀 관리자 블롭 (클라이언트에 원본으로 노출되지 않음)
        provider: KZGProvider 구현
        flag: 위조에 성공했을 때 돌려줄 문자열
    """
    admin_blob: Blob
    provider: KZGProvider
    flag: str

    def __repr__(self):
        return f"ChallengeContext(provider={type(self.provider).__name__})"


class ChallengeService:
    """관리자 블롭에 대한 evaluate / verify / claim_flag."""

    def __init__(self, context):
        self.context = context

    @property
    def ready(self):
        context = self.context
        return (
            context is not None
            and context.admin_blob is not None
            and context.provider is not None
        )

    def _commitment(self):
        # 캐시하지 않는다: 매 호출마다 새로 계산
        try:
            return self.context.provider.commit(self.context.admin_blob)
        except ProviderError as exc:
            logger.exception("Admin blob commitment failed")
            raise CommitmentError(str(exc)) from exc

    def _open(self, point):
        try:
            return self.context.provider.open(self.context.admin_blob, point)
        except ProviderError as exc:
            logger.exception("Admin blob opening failed")
            raise EvaluationError(str(exc)) from exc

    def evaluate(self, point):
        """관리자 다항식의 point에서의 실제 값을 돌려준다 (증명은 버린다).

        Raises:
            EvaluationError: 제공자 계산 실패
        """
        _, value = self._open(point)
        return value

    def verify(self, point, claimed_value, proof):
        """커밋먼트를 매번 새로 계산하여 증명을 검증한다.

        Raises:
            CommitmentError: 커밋먼트 계산 실패 (INVALID 판정과는 별개)
        """
        commitment = self._commitment()
        if self.context.provider.verify(commitment, point, claimed_value, proof):
            return Verdict.VALID
        return Verdict.INVALID

    def claim_flag(self, point, claimed_value, proof):
        """거짓 값에 대한 유효한 증명이면 플래그를 발급한다.

        Raises:
            CommitmentError: 커밋먼트 계산 실패
            EvaluationError: 실제 값 계산 실패
        """
        commitment = self._commitment()
        _, true_value = self._open(point)

        # must be different
        if bytes(claimed_value) == bytes(true_value):
            logger.info("Flag claim rejected: claimed value equals the true evaluation")
            return ClaimResult(ClaimOutcome.REJECTED_SAME_VALUE)

        if not self.context.provider.verify(commitment, point, claimed_value, proof):
            logger.info("Flag claim rejected: proof did not verify")
            return ClaimResult(ClaimOutcome.REJECTED_INVALID_PROOF)

        logger.warning("Flag issued for point %s", bytes(point).hex())
        return ClaimResult(ClaimOutcome.FLAG_ISSUED, flag=self.context.flag)
