"""
KZG 제공자(Provider) 인터페이스와 c-kzg-4844 백엔드
====================================================

챌린지 로직은 타원곡선/페어링 연산을 직접 하지 않고 세 가지 연산에만 의존한다.

  commit(blob)                          → 48바이트 커밋먼트
  open(blob, point)                     → (48바이트 증명, 32바이트 평가값)
  verify(commitment, point, value, proof) → bool

**오류 규약**:
  - 계산 자체가 실패하면 ProviderError를 던진다.
  - 증명이 맞지 않는 경우는 False를 돌려준다. 길이는 맞지만 곡선 위의 점이
    아니거나 정규 스칼라가 아닌 입력도 "유효하지 않은 증명"으로 취급한다.

사용 예시:
    >>> provider = CKZGProvider.from_trusted_setup("trusted_setup.txt")
    >>> commitment = provider.commit(blob)
    >>> proof, value = provider.open(blob, point)
    >>> provider.verify(commitment, point, value, proof)  # True
"""

import abc
import logging
import os

import ckzg

from zkp.kzg4844.errors import ProviderError


logger = logging.getLogger(__name__)


class KZGProvider(abc.ABC):
    """KZG commit/open/verify 연산의 추상 인터페이스."""

    @abc.abstractmethod
    def commit(self, blob):
        """블롭의 커밋먼트(48바이트)를 계산한다."""

    @abc.abstractmethod
    def open(self, blob, point):
        """point에서의 (증명, 실제 평가값)을 계산한다."""

    @abc.abstractmethod
    def verify(self, commitment, point, value, proof):
        """증명이 commitment에 대해 point에서 value를 증명하는지 확인한다."""


class CKZGProvider(KZGProvider):
    """c-kzg-4844 (ckzg) 바인딩 기반 제공자.

    속성:
        settings: ckzg.load_trusted_setup이 돌려준 KZGSettings 객체.
                  시작 후에는 읽기 전용으로 여러 스레드가 공유한다.
    """

    def __init__(self, settings):
        self.settings = settings

    @classmethod
    def from_trusted_setup(cls, path, precompute=0):
        """신뢰 설정 파일을 한 번 로드하여 제공자를 만든다.

        Raises:
            ProviderError: 파일이 없거나 ckzg가 설정을 거부할 때
        """
        if not os.path.isfile(path):
            raise ProviderError(f"trusted setup not found: {path}")
        try:
            settings = ckzg.load_trusted_setup(path, precompute)
        except (RuntimeError, ValueError, OSError) as exc:
            raise ProviderError(f"failed to load trusted setup: {exc}") from exc
        logger.info("Loaded trusted setup from %s", path)
        return cls(settings)

    def commit(self, blob):
        try:
            return bytes(ckzg.blob_to_kzg_commitment(bytes(blob), self.settings))
        except (RuntimeError, ValueError) as exc:
            raise ProviderError(f"blob commitment failed: {exc}") from exc

    def open(self, blob, point):
        try:
            proof, value = ckzg.compute_kzg_proof(bytes(blob), bytes(point), self.settings)
        except (RuntimeError, ValueError) as exc:
            raise ProviderError(f"KZG proof computation failed: {exc}") from exc
        return bytes(proof), bytes(value)

    def verify(self, commitment, point, value, proof):
        try:
            return bool(ckzg.verify_kzg_proof(
                bytes(commitment), bytes(point), bytes(value), bytes(proof),
                self.settings,
            ))
        except (RuntimeError, ValueError) as exc:
            # C_KZG_BADARGS: 점/스칼라 인코딩 불량
            logger.debug("ckzg rejected proof encoding: %s", exc)
            return False
