"""
챌린지 입출력 코덱
==================

HTTP 요청의 텍스트 필드를 고정 길이 바이트로 엄격하게 디코딩한다.

  input         64자 hex        → 32바이트 평가 점
  claimedValue  base64          → 32바이트 평가값
  proof         base64          → 48바이트 증명
  blob          base64          ↔ 131072바이트 블롭

모든 실패는 DecodeError이며, 메시지로 원인(알파벳 오류 / 길이 오류)을 구분한다.
"""

import base64
import binascii

from zkp.kzg4844.blob import Blob
from zkp.kzg4844.errors import DecodeError
from zkp.kzg4844.field import SERIALIZED_SCALAR_SIZE, BYTES_PER_BLOB, PROOF_SIZE


POINT_HEX_LENGTH = 2 * SERIALIZED_SCALAR_SIZE


# ─── base64 ───

def _b64decode(text):
    if not isinstance(text, str):
        raise DecodeError("failed to decode base64")
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("failed to decode base64") from exc


def _b64decode_exact(text, size):
    raw = _b64decode(text)
    if len(raw) != size:
        raise DecodeError("input length mismatch")
    return raw


# ─── Blob ───

def encode_blob(blob):
    """Blob → base64 문자열"""
    return base64.b64encode(bytes(blob)).decode("ascii")


def decode_blob(text):
    """base64 문자열 → Blob (정확히 131072바이트)"""
    return Blob(_b64decode_exact(text, BYTES_PER_BLOB))


# ─── Challenge fields ───

def decode_point(text):
    """64자 hex → 32바이트 평가 점.

    디코딩 전에 문자열 길이를 먼저 검사한다.
    """
    if not isinstance(text, str) or len(text) != POINT_HEX_LENGTH:
        raise DecodeError("input should be a 32-byte hex string")
    try:
        raw = binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("invalid hex string") from exc
    if len(raw) != SERIALIZED_SCALAR_SIZE:
        raise DecodeError("input should be a 32-byte hex string")
    return raw


def decode_claimed_value(text):
    """base64 → 32바이트 평가값"""
    return _b64decode_exact(text, SERIALIZED_SCALAR_SIZE)


def decode_proof(text):
    """base64 → 48바이트 증명"""
    return _b64decode_exact(text, PROOF_SIZE)


def encode_scalar(raw):
    """32바이트 → base64 (JSON 응답용)"""
    return base64.b64encode(bytes(raw)).decode("ascii")
