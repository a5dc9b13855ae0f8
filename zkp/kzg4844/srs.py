"""
시드 기반 구조화 참조 문자열 (Seeded SRS)
==========================================

개발/테스트용 BLS12-381 KZG 공개 파라미터를 seed에서 결정론적으로 만든다.

**무엇이 다른가?**
  실제 EIP-4844 신뢰 설정은 MPC 세리머니로 만들어지고 비밀 τ는 아무도 모른다.
  여기서는 τ ("toxic waste")를 seed의 해시로 정하고 **보관한다**.
  τ를 아는 사람은 어떤 거짓 평가값에 대해서도 검증을 통과하는 증명을 만들 수 있다.
  즉 이 SRS는 "잘못된 신뢰 설정"의 예이며, 챌린지의 승리 조건을
  재현하는 데 쓰인다.

  SRS = {
      tau: 비밀 값 (보관됨)
      g2_powers: [G2, τ·G2]   (검증에 필요한 공개 값)
  }

사용 예시:
    >>> srs = SRS.generate(seed=1337)
    >>> srs.g2_powers[0] == G2  # True
"""

import hashlib
import secrets

from zkp.kzg4844.field import FR, G2, CURVE_ORDER, ec_mul


class SRS:
    """시드 기반 KZG 파라미터.

    속성:
        tau: 비밀 평가 점 τ (FR)
        g2_powers: [G2, τ·G2]
    """

    def __init__(self, tau, g2_powers):
        self.tau = tau
        self.g2_powers = g2_powers

    @classmethod
    def generate(cls, seed=None):
        """SRS를 생성한다.

        Args:
            seed: 결정론적 생성을 위한 시드. None이면 임의의 τ를 쓴다.

        Returns:
            SRS
        """
        if seed is not None:
            h = hashlib.sha256(b"kzg4844-seeded-srs" + str(seed).encode()).digest()
            tau_int = int.from_bytes(h, "big") % CURVE_ORDER
        else:
            tau_int = secrets.randbelow(CURVE_ORDER - 1) + 1
        tau = FR(tau_int)

        g2_powers = [G2, ec_mul(G2, tau)]
        return cls(tau, g2_powers)
