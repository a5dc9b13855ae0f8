"""
결정론적 블롭(Blob) 생성
========================

시드 하나로부터 4096개의 스칼라로 이루어진 블롭을 만든다.

**스칼라 생성 (random_field_element)**:
  호출할 때마다 새 로컬 난수 생성기를 seed로 초기화하고 32바이트를 뽑아
  필드 원소로 축소한다. 같은 seed는 언제나 같은 스칼라를 만든다.
  전역 생성기를 재시드하여 공유하지 않으므로 동시 호출에도 결정론이 깨지지 않는다.

**블롭 조립 (Blob.generate)**:
  i번째 슬롯의 시드는 base_seed + 32·i 이다 (스칼라 직렬화 크기만큼 이동).
  시드 연산은 부호 있는 64비트 정수처럼 오버플로 시 순환한다.

  ┌───────────┬────────────────────────────┐
  │ slot 0    │ random_field_element(s)     │
  │ slot 1    │ random_field_element(s+32)  │
  │ ...       │ ...                         │
  │ slot 4095 │ random_field_element(s+131040) │
  └───────────┴────────────────────────────┘

사용 예시:
    >>> blob = Blob.generate(42)
    >>> len(bytes(blob))  # 131072
"""

import random

from zkp.kzg4844.errors import ScalarGenerationError
from zkp.kzg4844.field import (
    SERIALIZED_SCALAR_SIZE,
    SCALARS_PER_BLOB,
    BYTES_PER_BLOB,
    reduce_scalar_bytes,
)


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
_UINT64_MASK = (1 << 64) - 1


def wrap_int64(value):
    """정수를 부호 있는 64비트 범위로 순환시킨다."""
    value &= _UINT64_MASK
    if value > INT64_MAX:
        value -= 1 << 64
    return value


def random_field_element(seed):
    """seed로부터 정규 32바이트 스칼라를 결정론적으로 생성한다.

    Args:
        seed: 부호 있는 64비트 정수. 음수는 2의 보수 표현으로 시드하므로
              seed와 -seed는 서로 다른 스칼라를 만든다.

    Returns:
        bytes: 32바이트 빅엔디안 스칼라 (r 미만)

    Raises:
        ScalarGenerationError: 생성기가 32바이트를 내놓지 못했을 때
    """
    rng = random.Random(seed & _UINT64_MASK)
    raw = rng.randbytes(SERIALIZED_SCALAR_SIZE)
    if len(raw) != SERIALIZED_SCALAR_SIZE:
        raise ScalarGenerationError(
            f"failed to get random field element: got {len(raw)} bytes"
        )
    return reduce_scalar_bytes(raw)


class Blob:
    """4096개의 스칼라(131072바이트)로 이루어진 불변 블롭.

    차수 4095 다항식의 평가 형식(evaluation form) 인코딩이다.

    속성:
        data: 원시 131072바이트
    """

    __slots__ = ("_data",)

    def __init__(self, data):
        data = bytes(data)
        if len(data) != BYTES_PER_BLOB:
            raise ValueError(
                f"blob must be {BYTES_PER_BLOB} bytes, got {len(data)}"
            )
        self._data = data

    @classmethod
    def generate(cls, base_seed):
        """base_seed + 32·i 시드 규칙으로 블롭을 만든다.

        Raises:
            ScalarGenerationError: 어느 한 슬롯이라도 생성에 실패하면 중단
        """
        chunks = []
        for offset in range(0, BYTES_PER_BLOB, SERIALIZED_SCALAR_SIZE):
            chunks.append(random_field_element(wrap_int64(base_seed + offset)))
        return cls(b"".join(chunks))

    @property
    def data(self):
        return self._data

    def scalar(self, index):
        """index번째 스칼라의 32바이트."""
        if not 0 <= index < SCALARS_PER_BLOB:
            raise IndexError(f"scalar index out of range: {index}")
        start = index * SERIALIZED_SCALAR_SIZE
        return self._data[start:start + SERIALIZED_SCALAR_SIZE]

    def scalars(self):
        for i in range(SCALARS_PER_BLOB):
            yield self.scalar(i)

    def __bytes__(self):
        return self._data

    def __len__(self):
        return len(self._data)

    def __eq__(self, other):
        if not isinstance(other, Blob):
            return NotImplemented
        return self._data == other._data

    def __hash__(self):
        return hash(self._data)

    def __repr__(self):
        return f"Blob({self._data[:8].hex()}...)"


def build_blob(base_seed):
    """Blob.generate의 함수형 별칭."""
    return Blob.generate(base_seed)
