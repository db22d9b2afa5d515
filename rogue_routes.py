"""
Rogue-key Flask Blueprint
=========================

레지스트리 → PoK 검증 → 위조 → 집계 서명 검증을 단계별로 실행한다.
각 단계의 결과는 TinyDB에 저장되고 JSON으로 돌려준다.

  GET  /rogue/state
  POST /rogue/registry/demo      (form: secrets="2,3,5")
  POST /rogue/registry/upload    (file: registry)
  POST /rogue/registry/verify
  POST /rogue/forge              (form: secret=100, message=intldds)
  POST /rogue/verify
  POST /rogue/clear
"""

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from roguekey.config import config
from roguekey.errors import DeserializationError, PoKVerificationFailure
from roguekey.aggregate import aggregate_public_keys, forge_registry_entry
from roguekey.pok import pok_verify
from roguekey.puzzle import check_aggregate_signature
from roguekey.registry import Registry

from rogue_serializers import (
    serialize_registry, deserialize_registry,
    serialize_forgery, deserialize_forgery,
    g1_short, g2_short,
)

rogue_bp = Blueprint('rogue', __name__, url_prefix='/rogue')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_rogue_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


def _store_registry(registry):
    db_set("rogue.registry.raw", serialize_registry(registry))
    db_set("rogue.registry.info", {
        "size": len(registry),
        "entries": [
            {"index": i, "public_key": g1_short(pk), "proof": g2_short(proof)}
            for i, (pk, proof) in enumerate(registry)
        ],
    })

    # 레지스트리 변경 시 하위 데이터 클리어
    db_remove_prefix("rogue.registry.verified")
    db_remove_prefix("rogue.forge.")
    db_remove_prefix("rogue.verify.")


def _load_registry():
    raw = db_get("rogue.registry.raw")
    if raw is None:
        return None
    return deserialize_registry(raw)


def _error(message, status, **extra):
    body = {"error": message}
    body.update(extra)
    return jsonify(body), status


def _require_verified_registry():
    """PoK 검증을 통과한 레지스트리를 돌려준다.

    Returns:
        (Registry, None) 또는 (None, 오류 응답)
    """
    registry = _load_registry()
    if registry is None:
        return None, _error("레지스트리가 없습니다", 409)

    verified = db_get("rogue.registry.verified")
    if verified is None:
        return None, _error("레지스트리 PoK 검증이 먼저 필요합니다", 409)
    if not verified["ok"]:
        extra = {"index": verified["index"]} if "index" in verified else {}
        return None, _error("PoK 검증에 실패한 레지스트리는 사용할 수 없습니다", 422, **extra)
    return registry, None


# ──────────────────────────────────────────────────────────────
# 상태
# ──────────────────────────────────────────────────────────────

@rogue_bp.route("/state")
def state():
    """저장된 단계별 결과를 모두 돌려준다."""
    return jsonify({
        "registry": db_get("rogue.registry.info"),
        "registry_verified": db_get("rogue.registry.verified"),
        "forgery": db_get("rogue.forge.info"),
        "result": db_get("rogue.verify.result"),
    })


# ──────────────────────────────────────────────────────────────
# 레지스트리
# ──────────────────────────────────────────────────────────────

@rogue_bp.route("/registry/demo", methods=["POST"])
def registry_demo():
    """정직한 비밀 목록으로 레지스트리를 만든다."""
    secrets_str = request.form.get("secrets", "2,3,5")
    try:
        secrets = [int(s) for s in secrets_str.split(",") if s.strip()]
    except ValueError:
        return _error(f"비밀 목록을 읽을 수 없습니다: {secrets_str}", 400)

    registry = Registry.build(secrets, seed=config.pok_seed)
    _store_registry(registry)
    return jsonify(db_get("rogue.registry.info"))


@rogue_bp.route("/registry/upload", methods=["POST"])
def registry_upload():
    """public_keys.bin 형식의 바이너리를 업로드한다."""
    upload = request.files.get("registry")
    if upload is None:
        return _error("registry 파일이 없습니다", 400)

    try:
        registry = Registry.from_bytes(upload.read(), check=True, seed=config.pok_seed)
    except DeserializationError as e:
        current_app.logger.warning("registry upload rejected: %s", e)
        return _error(str(e), 400)

    _store_registry(registry)
    return jsonify(db_get("rogue.registry.info"))


@rogue_bp.route("/registry/verify", methods=["POST"])
def registry_verify():
    """모든 항목의 PoK를 검증한다."""
    registry = _load_registry()
    if registry is None:
        return _error("레지스트리가 없습니다", 409)

    try:
        registry.verify_all()
    except DeserializationError as e:
        current_app.logger.warning("registry contains an invalid point: %s", e)
        db_set("rogue.registry.verified", {"ok": False, "error": str(e)})
        return _error(str(e), 400)
    except PoKVerificationFailure as e:
        current_app.logger.warning("PoK check failed at index %d", e.index)
        db_set("rogue.registry.verified", {"ok": False, "index": e.index})
        return _error(str(e), 422, index=e.index)

    db_set("rogue.registry.verified", {"ok": True, "size": len(registry)})
    return jsonify(db_get("rogue.registry.verified"))


# ──────────────────────────────────────────────────────────────
# 위조
# ──────────────────────────────────────────────────────────────

@rogue_bp.route("/forge", methods=["POST"])
def forge():
    """공격자 비밀 하나로 새 항목과 집계 서명을 만든다."""
    registry, error = _require_verified_registry()
    if error is not None:
        return error

    secret_str = request.form.get("secret")
    if secret_str is None:
        secret = config.attacker_secret
    else:
        try:
            secret = int(secret_str)
        except ValueError:
            return _error("secret은 정수여야 합니다", 400)
    message = request.form.get("message", config.message.decode())

    forgery = forge_registry_entry(registry, secret, message, seed=config.pok_seed)
    pok_ok = pok_verify(forgery.public_key, forgery.index, forgery.proof, config.pok_seed)

    db_set("rogue.forge.raw", serialize_forgery(forgery))
    db_set("rogue.forge.info", {
        "index": forgery.index,
        "message": message,
        "secret_key": g1_short(forgery.secret_key),
        "public_key": g1_short(forgery.public_key),
        "proof": g2_short(forgery.proof),
        "aggregate_signature": g2_short(forgery.aggregate_signature),
        "pok_ok": pok_ok,
    })
    db_remove_prefix("rogue.verify.")
    return jsonify(db_get("rogue.forge.info"))


# ──────────────────────────────────────────────────────────────
# 집계 서명 검증
# ──────────────────────────────────────────────────────────────

@rogue_bp.route("/verify", methods=["POST"])
def verify():
    """집계 키 = Σ pk + new_key 로 집계 서명을 검증한다."""
    registry, error = _require_verified_registry()
    if error is not None:
        return error
    forgery_raw = db_get("rogue.forge.raw")
    if forgery_raw is None:
        return _error("위조 결과가 필요합니다", 409)

    forgery = deserialize_forgery(forgery_raw)
    aggregate_key = aggregate_public_keys(registry.public_keys + [forgery.public_key])
    ok, text = check_aggregate_signature(
        aggregate_key, forgery.aggregate_signature, forgery.message
    )
    current_app.logger.info("aggregate signature check: %s", text)

    result = {
        "ok": ok,
        "text": text,
        "aggregate_key": g1_short(aggregate_key),
    }
    db_set("rogue.verify.result", result)
    return jsonify(result)


@rogue_bp.route("/clear", methods=["POST"])
def clear():
    """모든 rogue 데이터를 클리어한다."""
    db_remove_prefix("rogue.")
    return jsonify({"cleared": True})
