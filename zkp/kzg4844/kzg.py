"""
KZG 커밋먼트 (시드 기반 SRS, 평가 형식 블롭)
=============================================

EIP-4844 블롭에 대한 KZG 연산을 py_ecc의 BLS12-381 위에서 수행한다.

**평가 형식 (Evaluation Form)**:
  블롭의 i번째 스칼라 yᵢ는 p(ωᵢ) 값이다 (ωᵢ는 비트 역순 단위근).
  임의의 점 z에서의 값은 무게중심(barycentric) 공식으로 계산한다:

      p(z) = (zⁿ - 1)/n · Σᵢ yᵢ·ωᵢ / (z - ωᵢ)

**커밋먼트와 열기 증명**:
  SRS가 τ를 보관하므로 다중 스칼라 곱 대신 스칼라 하나로 계산한다.
  - 커밋먼트: C = p(τ)·G1
  - 증명:     π = q(τ)·G1,  q(τ) = (p(τ) - y) / (τ - z)

**검증 (페어링)**:
      e(C - y·G1, G2) == e(π, τ·G2 - z·G2)
  검증은 공개 값 [G2, τ·G2]만 사용한다.

사용 예시:
    >>> provider = SeededKZGProvider(SRS.generate(seed=1337))
    >>> C = provider.commit(blob)
    >>> proof, y = provider.open(blob, point)
    >>> provider.verify(C, point, y, proof)  # True
"""

from zkp.kzg4844.errors import ProviderError
from zkp.kzg4844.field import (
    FR, G1,
    ec_mul, ec_add, ec_neg, ec_pairing,
    bytes_to_field, serialize_scalar,
    g1_to_bytes, bytes_to_g1,
    get_blob_domain,
)
from zkp.kzg4844.provider import KZGProvider


def blob_to_polynomial(blob):
    """블롭 → 평가값 리스트 [FR; 4096].

    Raises:
        ValueError: 정규 형식이 아닌 스칼라가 있을 때
    """
    return [bytes_to_field(scalar) for scalar in blob.scalars()]


def evaluate_polynomial_in_evaluation_form(poly, z, domain):
    """평가 형식 다항식의 z에서의 값을 무게중심 공식으로 계산한다.

    Args:
        poly: 도메인 위의 평가값 리스트 (FR)
        z: 평가 점 (FR)
        domain: 비트 역순 단위근 리스트 (FR)

    Returns:
        FR: p(z)

    예시:
        >>> domain = get_blob_domain(4)
        >>> evaluate_polynomial_in_evaluation_form([FR(5)] * 4, FR(9), domain)  # FR(5)
    """
    width = len(poly)

    # z가 도메인 위의 점이면 그 자리의 값을 그대로 돌려준다
    for i, root in enumerate(domain):
        if z == root:
            return poly[i]

    result = FR(0)
    for value, root in zip(poly, domain):
        result = result + value * root / (z - root)
    return result * (z ** width - FR(1)) / FR(width)


class SeededKZGProvider(KZGProvider):
    """τ를 아는 SRS 위의 KZG 제공자 (개발/테스트용).

    속성:
        srs: zkp.kzg4844.srs.SRS
        domain: 비트 역순 4096차 단위근
    """

    def __init__(self, srs):
        self.srs = srs
        self.domain = get_blob_domain()

    def _poly(self, blob):
        try:
            return blob_to_polynomial(blob)
        except ValueError as exc:
            raise ProviderError(f"invalid blob: {exc}") from exc

    def _point(self, point):
        try:
            return bytes_to_field(point)
        except ValueError as exc:
            raise ProviderError(f"invalid evaluation point: {exc}") from exc

    def _quotient_at_tau(self, poly, z, y):
        """q(τ) = (p(τ) - y) / (τ - z)."""
        tau = self.srs.tau
        if tau == z:
            raise ProviderError("evaluation point collides with the setup secret")
        p_tau = evaluate_polynomial_in_evaluation_form(poly, tau, self.domain)
        return (p_tau - y) / (tau - z)

    def commit(self, blob):
        poly = self._poly(blob)
        p_tau = evaluate_polynomial_in_evaluation_form(poly, self.srs.tau, self.domain)
        return g1_to_bytes(ec_mul(G1, p_tau))

    def open(self, blob, point):
        poly = self._poly(blob)
        z = self._point(point)
        y = evaluate_polynomial_in_evaluation_form(poly, z, self.domain)
        proof = ec_mul(G1, self._quotient_at_tau(poly, z, y))
        return g1_to_bytes(proof), serialize_scalar(y)

    def forge_opening(self, blob, point, value):
        """τ를 이용해 임의의 (거짓) 평가값에 대한 증명을 만든다.

        건전성(soundness)이 깨진 설정에서 무엇이 가능한지 보여준다.

        Returns:
            bytes: value를 "증명"하는 48바이트 증명
        """
        poly = self._poly(blob)
        z = self._point(point)
        try:
            y = bytes_to_field(value)
        except ValueError as exc:
            raise ProviderError(f"invalid claimed value: {exc}") from exc
        return g1_to_bytes(ec_mul(G1, self._quotient_at_tau(poly, z, y)))

    def verify(self, commitment, point, value, proof):
        try:
            z = bytes_to_field(point)
            y = bytes_to_field(value)
            c = bytes_to_g1(commitment)
            pi = bytes_to_g1(proof)
        except ValueError:
            return False

        g2, tau_g2 = self.srs.g2_powers

        # [τ-z]₂
        tau_minus_z_g2 = ec_add(tau_g2, ec_neg(ec_mul(g2, z)))

        # C - y·G1
        c_minus_y = ec_add(c, ec_neg(ec_mul(G1, y)))

        # e(C - y·G1, G2) == e(π, [τ-z]₂)
        lhs = ec_pairing(g2, c_minus_y)
        rhs = ec_pairing(tau_minus_z_g2, pi)
        return lhs == rhs
