"""
KZG 챌린지 Flask Blueprint
==========================

  GET  /alive          생존 확인
  GET  /random/blob    현재 시각을 시드로 한 공개 랜덤 블롭
  POST /admin/eval     관리자 다항식의 실제 평가값
  POST /admin/verify   열기 증명 검증 (Valid / Invalid)
  POST /admin/flag     거짓 값에 대한 위조 증명 → 플래그

ChallengeService는 app.extensions["kzg_challenge"]에서 가져온다.
"""

import time

from flask import Blueprint, current_app, jsonify, request

from challenge_serializers import (
    encode_blob, encode_scalar,
    decode_point, decode_claimed_value, decode_proof,
)
from zkp.kzg4844.blob import Blob, wrap_int64
from zkp.kzg4844.challenge import ClaimOutcome, Verdict
from zkp.kzg4844.errors import (
    DecodeError, EvaluationError, ProviderError, ScalarGenerationError,
)

challenge_bp = Blueprint("challenge", __name__)

EXTENSION_KEY = "kzg_challenge"

ALIVE_MESSAGE = "https://www.youtube.com/watch?v=Y6ljFaKRTrI"
SAME_VALUE_MESSAGE = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
NOT_READY_MESSAGE = "Something went wrong. Ping admin!"
BAD_JSON_MESSAGE = "Failed to decode JSON request"
PROOF_FAILURE_MESSAGE = "KZG proof computation failure"

TEXT = {"Content-Type": "text/plain; charset=utf-8"}


class _NotReady(Exception):
    pass


# ─── 헬퍼 ───

def get_service():
    """준비된 ChallengeService를 돌려준다. 없으면 _NotReady."""
    service = current_app.extensions.get(EXTENSION_KEY)
    if service is None or not service.ready:
        raise _NotReady()
    return service


def _json_body():
    # Content-Type 헤더와 무관하게 본문을 JSON으로 해석한다
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise DecodeError(BAD_JSON_MESSAGE)
    return body


def _text_field(body, name):
    """없는 필드와 null은 빈 문자열, 문자열이 아닌 값은 JSON 디코딩 오류."""
    value = body.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(BAD_JSON_MESSAGE)
    return value


def _proof_fields(body):
    """verify/flag 요청의 세 필드를 디코딩한다."""
    point = decode_point(_text_field(body, "input"))
    claimed_value = decode_claimed_value(_text_field(body, "claimedValue"))
    proof = decode_proof(_text_field(body, "proof"))
    return point, claimed_value, proof


@challenge_bp.app_errorhandler(_NotReady)
def handle_not_ready(_exc):
    return NOT_READY_MESSAGE, 503, TEXT


@challenge_bp.app_errorhandler(DecodeError)
def handle_decode_error(exc):
    return str(exc), 400, TEXT


@challenge_bp.app_errorhandler(EvaluationError)
def handle_evaluation_error(exc):
    current_app.logger.info("Evaluation failed: %s", exc)
    return PROOF_FAILURE_MESSAGE, 400, TEXT


@challenge_bp.app_errorhandler(ProviderError)
def handle_provider_error(exc):
    current_app.logger.exception("KZG provider failure: %s", exc)
    return NOT_READY_MESSAGE, 500, TEXT


# ──────────────────────────────────────────────────────────────
# 공개 엔드포인트
# ──────────────────────────────────────────────────────────────

@challenge_bp.route("/alive", methods=["GET"])
def alive():
    """서비스가 초기화되었는지 확인한다."""
    get_service()
    return ALIVE_MESSAGE, 200, TEXT


@challenge_bp.route("/random/blob", methods=["GET"])
def random_blob():
    """현재 Unix 시각(초)을 시드로 한 블롭 (비밀 아님)."""
    seed = wrap_int64(int(time.time()))
    try:
        blob = Blob.generate(seed)
    except ScalarGenerationError:
        current_app.logger.exception("Random blob generation failed")
        return "", 500
    return encode_blob(blob), 200, TEXT


# ──────────────────────────────────────────────────────────────
# 관리자 블롭 엔드포인트
# ──────────────────────────────────────────────────────────────

@challenge_bp.route("/admin/eval", methods=["POST"])
def admin_eval():
    """{"input": hex} → {"claimedValue": base64}"""
    service = get_service()
    body = _json_body()
    point = decode_point(_text_field(body, "input"))
    value = service.evaluate(point)
    return jsonify({"claimedValue": encode_scalar(value)}), 200


@challenge_bp.route("/admin/verify", methods=["POST"])
def admin_verify():
    """열기 증명을 검증한다. 커밋먼트 계산 실패는 500."""
    service = get_service()
    point, claimed_value, proof = _proof_fields(_json_body())

    verdict = service.verify(point, claimed_value, proof)
    if verdict is Verdict.VALID:
        return verdict.value, 200, TEXT
    return verdict.value, 400, TEXT


@challenge_bp.route("/admin/flag", methods=["POST"])
def admin_flag():
    """거짓 값에 대한 위조 증명이면 플래그를 돌려준다."""
    service = get_service()
    point, claimed_value, proof = _proof_fields(_json_body())

    result = service.claim_flag(point, claimed_value, proof)
    if result.outcome is ClaimOutcome.REJECTED_SAME_VALUE:
        return SAME_VALUE_MESSAGE, 400, TEXT
    if result.outcome is ClaimOutcome.REJECTED_INVALID_PROOF:
        return Verdict.INVALID.value, 400, TEXT
    return result.flag, 200, TEXT
