import hashlib

import pytest

from zkp.kzg4844.blob import Blob
from zkp.kzg4844.challenge import ChallengeContext, ChallengeService
from zkp.kzg4844.errors import ProviderError
from zkp.kzg4844.field import reduce_scalar_bytes
from zkp.kzg4844.kzg import SeededKZGProvider
from zkp.kzg4844.provider import KZGProvider
from zkp.kzg4844.srs import SRS


# ── 테스트 상수 ──
ADMIN_SEED = 42
TEST_FLAG = "flag{test-kzg-forgery}"
SETUP_SEED = 1337


class FakeKZGProvider(KZGProvider):
    """해시로 흉내 낸 비암호학적 제공자.

    commit  = sha384(blob)
    open    = (sha384("proof" | C | z | y), y = H(blob | z) mod r)
    verify  = proof == sha384("proof" | C | z | y)

    스킴이 공개되어 있으므로 테스트는 임의의 값에 대한 "위조" 증명을
    직접 만들 수 있다.
    """

    def __init__(self):
        self.commit_calls = 0
        self.fail_commit = False
        self.fail_open = False

    def commit(self, blob):
        self.commit_calls += 1
        if self.fail_commit:
            raise ProviderError("commit failure injected")
        return hashlib.sha384(bytes(blob)).digest()

    def proof_for(self, commitment, point, value):
        return hashlib.sha384(b"proof" + commitment + bytes(point) + bytes(value)).digest()

    def open(self, blob, point):
        if self.fail_open:
            raise ProviderError("open failure injected")
        value = reduce_scalar_bytes(hashlib.sha256(bytes(blob) + bytes(point)).digest())
        commitment = hashlib.sha384(bytes(blob)).digest()
        return self.proof_for(commitment, point, value), value

    def verify(self, commitment, point, value, proof):
        return bytes(proof) == self.proof_for(commitment, point, value)


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def admin_blob():
    """seed 42로 만든 관리자 블롭."""
    return Blob.generate(ADMIN_SEED)


@pytest.fixture
def fake_provider():
    return FakeKZGProvider()


@pytest.fixture
def fake_service(admin_blob, fake_provider):
    context = ChallengeContext(admin_blob=admin_blob, provider=fake_provider, flag=TEST_FLAG)
    return ChallengeService(context)


@pytest.fixture(scope="session")
def seeded_provider():
    """τ를 아는 py_ecc 제공자 (실제 페어링 검증)."""
    return SeededKZGProvider(SRS.generate(seed=SETUP_SEED))


@pytest.fixture(scope="session")
def seeded_service(admin_blob, seeded_provider):
    context = ChallengeContext(admin_blob=admin_blob, provider=seeded_provider, flag=TEST_FLAG)
    return ChallengeService(context)


@pytest.fixture
def app(fake_service):
    from app import create_app
    app = create_app(fake_service)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
