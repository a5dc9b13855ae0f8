"""
KZG 4844 기반 모듈: BLS12-381 스칼라 필드 및 직렬화
====================================================

EIP-4844 블롭(blob)과 KZG 증명에서 쓰이는 기본 대수적 도구를 정의한다.

**유한체 FR**:
  BLS12-381 곡선의 스칼라 필드. 블롭의 각 원소(scalar), 평가 점 z,
  평가값 y가 모두 이 필드의 원소이다.
  - 위수 r ≈ 2^255, 32바이트 빅엔디안으로 직렬화한다.
  - r - 1 = 2^32 × m → 4096차 단위근이 존재한다.

**블롭 도메인**:
  블롭은 4096개의 평가값이다. i번째 값은 비트 역순(bit-reversal)으로
  배열된 단위근 ω^brp(i)에서의 다항식 값이다.

**G1 점 직렬화**:
  커밋먼트와 증명은 48바이트 압축 G1 점이다 (py_ecc의 압축 형식).

사용 예시:
    >>> from zkp.kzg4844.field import FR, serialize_scalar, bytes_to_field
    >>> x = FR(7)
    >>> bytes_to_field(serialize_scalar(x)) == x  # True
"""

from py_ecc.fields import bls12_381_FQ as FQ
from py_ecc import optimized_bls12_381 as bls12_381
from py_ecc.bls.g2_primitives import G1_to_pubkey, pubkey_to_G1


# ─────────────────────────────────────────────────────────────────────
# 상수
# ─────────────────────────────────────────────────────────────────────

SERIALIZED_SCALAR_SIZE = 32
SCALARS_PER_BLOB = 4096
BYTES_PER_BLOB = SCALARS_PER_BLOB * SERIALIZED_SCALAR_SIZE  # 131072
COMMITMENT_SIZE = 48
PROOF_SIZE = 48

# EIP-4844 PRIMITIVE_ROOT_OF_UNITY
PRIMITIVE_ROOT_OF_UNITY = 7

CURVE_ORDER = bls12_381.curve_order


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """BLS12-381 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 연산을 제공한다.

    예시:
        >>> FR(CURVE_ORDER + 3) == FR(3)  # True
    """
    field_modulus = CURVE_ORDER


def serialize_scalar(value):
    """FR (또는 정수) → 32바이트 빅엔디안 정규(canonical) 직렬화."""
    return (int(value) % CURVE_ORDER).to_bytes(SERIALIZED_SCALAR_SIZE, "big")


def reduce_scalar_bytes(raw):
    """임의의 32바이트를 r로 축소하여 정규 스칼라 바이트로 만든다.

    빅엔디안 정수로 해석한 뒤 모듈러 축소를 수행한다.
    난수 바이트를 필드 원소로 바꿀 때 사용한다.

    Args:
        raw: 길이 32의 bytes

    Returns:
        bytes: 32바이트 정규 직렬화

    Raises:
        ValueError: 길이가 32가 아닐 때
    """
    if len(raw) != SERIALIZED_SCALAR_SIZE:
        raise ValueError(
            f"scalar must be {SERIALIZED_SCALAR_SIZE} bytes, got {len(raw)}"
        )
    return serialize_scalar(int.from_bytes(raw, "big"))


def bytes_to_field(raw):
    """32바이트 → FR. 정규 형식(< r)이 아니면 거부한다.

    EIP-4844의 bytes_to_bls_field와 같은 규칙이다.

    Raises:
        ValueError: 길이가 틀리거나 값이 r 이상일 때
    """
    if len(raw) != SERIALIZED_SCALAR_SIZE:
        raise ValueError(
            f"scalar must be {SERIALIZED_SCALAR_SIZE} bytes, got {len(raw)}"
        )
    value = int.from_bytes(raw, "big")
    if value >= CURVE_ORDER:
        raise ValueError("scalar is not canonical (>= curve order)")
    return FR(value)


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

def get_root_of_unity(n):
    """n차 원시 단위근 ω = 7^((r-1)/n)을 반환한다.

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 2^32를 초과할 때
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"n must be a power of two: {n}")
    if n > (1 << 32):
        raise ValueError(f"n must be at most 2^32: {n}")
    return FR(PRIMITIVE_ROOT_OF_UNITY) ** ((CURVE_ORDER - 1) // n)


def reverse_bits(index, order):
    """index의 하위 log2(order) 비트를 뒤집는다."""
    width = order.bit_length() - 1
    return int(format(index, f"0{width}b")[::-1], 2) if width else index


def bit_reversal_permutation(values):
    """리스트를 비트 역순으로 재배열한다 (길이는 2의 거듭제곱)."""
    n = len(values)
    return [values[reverse_bits(i, n)] for i in range(n)]


def get_blob_domain(n=SCALARS_PER_BLOB):
    """블롭 평가 도메인 [ω^brp(0), ω^brp(1), ...]을 반환한다.

    예시:
        >>> domain = get_blob_domain(4)
        >>> domain[0] == FR(1)  # True
    """
    omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return bit_reversal_permutation(roots)


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 연산 (optimized BLS12-381, 사영 좌표)
# ─────────────────────────────────────────────────────────────────────

G1 = bls12_381.G1
G2 = bls12_381.G2
Z1 = bls12_381.Z1


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point."""
    return bls12_381.multiply(point, int(scalar) % CURVE_ORDER)


def ec_add(p1, p2):
    return bls12_381.add(p1, p2)


def ec_neg(point):
    return bls12_381.neg(point)


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2).

    주의:
        py_ecc pairing의 인자 순서는 (G2, G1)이다.
    """
    return bls12_381.pairing(g2_point, g1_point)


def g1_to_bytes(point):
    """G1 점 → 48바이트 압축 직렬화."""
    return bytes(G1_to_pubkey(point))


def bytes_to_g1(raw):
    """48바이트 압축 직렬화 → G1 점.

    곡선 위의 점이면서 위수 r의 부분군(subgroup)에 속해야 한다.

    Raises:
        ValueError: 길이, 플래그, 좌표, 부분군 검사 중 하나라도 실패할 때
    """
    if len(raw) != COMMITMENT_SIZE:
        raise ValueError(f"G1 point must be {COMMITMENT_SIZE} bytes, got {len(raw)}")
    point = pubkey_to_G1(raw)
    if not bls12_381.is_inf(bls12_381.multiply(point, CURVE_ORDER)):
        raise ValueError("G1 point is not in the prime-order subgroup")
    return point
