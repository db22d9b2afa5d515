"""
Rogue-key 데이터 직렬화/역직렬화 헬퍼
======================================

TinyDB에 저장 가능한 형태로 점, 레지스트리, 위조 결과를 변환한다.
점은 레지스트리 바이너리 포맷의 hex 문자열로 저장한다.
"""

from roguekey.registry import (
    Registry,
    serialize_g1 as _g1_bytes,
    deserialize_g1 as _g1_from_bytes,
    serialize_g2 as _g2_bytes,
    deserialize_g2 as _g2_from_bytes,
)
from roguekey.aggregate import Forgery


# ─── G1 / G2 point ───

def serialize_g1(point):
    """G1 point → hex (96 bytes)"""
    return _g1_bytes(point).hex()


def deserialize_g1(data):
    """hex → G1 point"""
    return _g1_from_bytes(bytes.fromhex(data))


def serialize_g2(point):
    """G2 point → hex (192 bytes)"""
    return _g2_bytes(point).hex()


def deserialize_g2(data):
    """hex → G2 point"""
    return _g2_from_bytes(bytes.fromhex(data))


# ─── Registry ───

def serialize_registry(registry):
    """Registry → dict"""
    return {
        "seed": registry.seed,
        "blob": registry.to_bytes().hex(),
    }


def deserialize_registry(data):
    """dict → Registry"""
    return Registry.from_bytes(bytes.fromhex(data["blob"]), seed=data["seed"])


# ─── Forgery ───

def serialize_forgery(forgery):
    """Forgery → dict"""
    return {
        "index": forgery.index,
        "secret_key": serialize_g1(forgery.secret_key),
        "public_key": serialize_g1(forgery.public_key),
        "proof": serialize_g2(forgery.proof),
        "message": forgery.message.hex(),
        "signature": serialize_g2(forgery.signature),
        "signature_share": serialize_g2(forgery.signature_share),
        "aggregate_signature": serialize_g2(forgery.aggregate_signature),
    }


def deserialize_forgery(data):
    """dict → Forgery"""
    return Forgery(
        data["index"],
        deserialize_g1(data["secret_key"]),
        deserialize_g1(data["public_key"]),
        deserialize_g2(data["proof"]),
        bytes.fromhex(data["message"]),
        deserialize_g2(data["signature"]),
        deserialize_g2(data["signature_share"]),
        deserialize_g2(data["aggregate_signature"]),
    )


# ─── display helpers ───

def _shorten(s):
    if len(s) <= 8:
        return s
    return s[:4] + "..." + s[-4:]


def g1_short(point):
    """G1 point → 축약 문자열 (UI 표시용)"""
    raw = _g1_bytes(point)
    if raw[0] & 0x40:
        return "∞"
    x = str(int.from_bytes(raw[:48], "big"))
    y = str(int.from_bytes(raw[48:], "big"))
    return f"({_shorten(x)}, {_shorten(y)})"


def g2_short(point):
    """G2 point → 축약 문자열 (UI 표시용)"""
    raw = _g2_bytes(point)
    if raw[0] & 0x40:
        return "∞"
    x1 = str(int.from_bytes(raw[:48], "big"))
    x0 = str(int.from_bytes(raw[48:96], "big"))
    return f"({_shorten(x0)}+{_shorten(x1)}i, ...)"
