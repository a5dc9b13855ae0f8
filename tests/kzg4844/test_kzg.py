"""
Tests for the seeded py_ecc KZG backend.

Covers:
- barycentric evaluation of evaluation-form polynomials
- commit / open / verify round trip with a real pairing check
- rejection of wrong values and malformed proofs
- forge_opening: a known setup secret breaks soundness
"""

import pytest

from zkp.kzg4844.blob import Blob
from zkp.kzg4844.errors import ProviderError
from zkp.kzg4844.field import (
    FR, CURVE_ORDER, BYTES_PER_BLOB, get_blob_domain, serialize_scalar,
)
from zkp.kzg4844.kzg import (
    SeededKZGProvider, blob_to_polynomial, evaluate_polynomial_in_evaluation_form,
)
from zkp.kzg4844.provider import KZGProvider
from zkp.kzg4844.srs import SRS


POINT_ONE = serialize_scalar(1)
POINT_FIVE = serialize_scalar(5)


class TestBarycentric:
    """무게중심 공식 평가 테스트 (작은 도메인)."""

    def test_constant(self):
        domain = get_blob_domain(4)
        assert evaluate_polynomial_in_evaluation_form([FR(5)] * 4, FR(9), domain) == FR(5)

    def test_identity_polynomial(self):
        """p(x) = x 의 평가값은 도메인 자체이다."""
        domain = get_blob_domain(8)
        assert evaluate_polynomial_in_evaluation_form(list(domain), FR(9), domain) == FR(9)

    def test_quadratic(self):
        domain = get_blob_domain(8)
        poly = [root * root + FR(3) for root in domain]
        assert evaluate_polynomial_in_evaluation_form(poly, FR(11), domain) == FR(124)

    def test_point_in_domain(self):
        domain = get_blob_domain(8)
        poly = [FR(i * 10) for i in range(8)]
        assert evaluate_polynomial_in_evaluation_form(poly, domain[3], domain) == FR(30)

    def test_blob_to_polynomial_rejects_non_canonical(self):
        blob = Blob(b"\xff" * BYTES_PER_BLOB)
        with pytest.raises(ValueError):
            blob_to_polynomial(blob)


class TestSRS:
    """시드 기반 SRS 테스트."""

    def test_deterministic_with_same_seed(self):
        assert SRS.generate(seed=7).tau == SRS.generate(seed=7).tau

    def test_different_seed(self):
        assert SRS.generate(seed=7).tau != SRS.generate(seed=8).tau

    def test_g2_powers_length(self):
        assert len(SRS.generate(seed=7).g2_powers) == 2

    def test_random_tau_is_nonzero(self):
        assert SRS.generate().tau != FR(0)


class TestSeededProvider:
    """SeededKZGProvider commit / open / verify 테스트."""

    def test_is_provider(self, seeded_provider):
        assert isinstance(seeded_provider, KZGProvider)

    def test_commit_deterministic(self, seeded_provider, admin_blob):
        c1 = seeded_provider.commit(admin_blob)
        c2 = seeded_provider.commit(admin_blob)
        assert c1 == c2
        assert len(c1) == 48

    def test_zero_blob_commits_to_infinity(self, seeded_provider):
        commitment = seeded_provider.commit(Blob(bytes(BYTES_PER_BLOB)))
        assert commitment == b"\xc0" + b"\x00" * 47

    def test_open_in_domain_returns_slot(self, seeded_provider, admin_blob):
        """z = 1 = ω^0 에서의 값은 0번째 스칼라이다."""
        _, value = seeded_provider.open(admin_blob, POINT_ONE)
        assert value == admin_blob.scalar(0)

    def test_roundtrip_verifies(self, seeded_provider, admin_blob):
        commitment = seeded_provider.commit(admin_blob)
        proof, value = seeded_provider.open(admin_blob, POINT_FIVE)
        assert len(proof) == 48
        assert seeded_provider.verify(commitment, POINT_FIVE, value, proof)

    def test_wrong_value_rejected(self, seeded_provider, admin_blob):
        commitment = seeded_provider.commit(admin_blob)
        proof, value = seeded_provider.open(admin_blob, POINT_FIVE)
        wrong = serialize_scalar((int.from_bytes(value, "big") + 1) % CURVE_ORDER)
        assert not seeded_provider.verify(commitment, POINT_FIVE, wrong, proof)

    def test_forged_opening_verifies(self, seeded_provider, admin_blob):
        """τ를 알면 거짓 값도 검증을 통과한다."""
        commitment = seeded_provider.commit(admin_blob)
        _, value = seeded_provider.open(admin_blob, POINT_ONE)
        fake = serialize_scalar((int.from_bytes(value, "big") + 1) % CURVE_ORDER)
        proof = seeded_provider.forge_opening(admin_blob, POINT_ONE, fake)
        assert seeded_provider.verify(commitment, POINT_ONE, fake, proof)

    def test_malformed_proof_rejected(self, seeded_provider, admin_blob):
        commitment = seeded_provider.commit(admin_blob)
        _, value = seeded_provider.open(admin_blob, POINT_ONE)
        assert not seeded_provider.verify(commitment, POINT_ONE, value, b"\x00" * 48)
        assert not seeded_provider.verify(commitment, POINT_ONE, value, b"\xff" * 48)

    def test_non_canonical_value_rejected(self, seeded_provider, admin_blob):
        commitment = seeded_provider.commit(admin_blob)
        proof, _ = seeded_provider.open(admin_blob, POINT_ONE)
        assert not seeded_provider.verify(commitment, POINT_ONE, b"\xff" * 32, proof)

    def test_open_non_canonical_point(self, seeded_provider, admin_blob):
        with pytest.raises(ProviderError):
            seeded_provider.open(admin_blob, b"\xff" * 32)

    def test_open_at_setup_secret(self, seeded_provider, admin_blob):
        point = serialize_scalar(seeded_provider.srs.tau)
        with pytest.raises(ProviderError):
            seeded_provider.open(admin_blob, point)

    def test_commit_rejects_non_canonical_blob(self, seeded_provider):
        with pytest.raises(ProviderError):
            seeded_provider.commit(Blob(b"\xff" * BYTES_PER_BLOB))

    def test_independent_instances_agree(self, admin_blob):
        a = SeededKZGProvider(SRS.generate(seed=99))
        b = SeededKZGProvider(SRS.generate(seed=99))
        assert a.commit(admin_blob) == b.commit(admin_blob)
