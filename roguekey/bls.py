"""
BLS 서명
========

공개키는 G1, 서명은 G2에 둔다 (py_ecc의 G2ProofOfPossession과 같은 배치).

  키 생성:  pk = s · G1
  서명:     σ = s · H(m)
  검증:     e(pk, -H(m)) · e(G1, σ) == 1

**가법 준동형성**:
  같은 메시지에 대해
    Σ σ_k = (Σ s_k) · H(m),   Σ pk_k = (Σ s_k) · G1
  이므로 합산 서명은 합산 공개키로 검증된다.
"""

from roguekey.config import HASH_DST
from roguekey.errors import SignatureVerificationFailure
from roguekey.field import G1, ec_mul, ec_neg, multi_pairing_is_identity
from roguekey.hash_to_curve import hash_to_g2


def secret_to_public_key(secret):
    return ec_mul(G1, secret)


def bls_sign(secret, message, dst=HASH_DST):
    """σ = secret · H(message)."""
    return ec_mul(hash_to_g2(message, dst), secret)


def bls_verify(public_key, signature, message, dst=HASH_DST):
    """BLS 서명을 검증한다.

    Args:
        public_key: G1 점
        signature: G2 점
        message: bytes 또는 str

    Returns:
        bool: 서명이 공개키의 비밀로 message에 대해 만들어졌으면 True
    """
    return multi_pairing_is_identity(
        [public_key, G1],
        [ec_neg(hash_to_g2(message, dst)), signature],
    )


def require_valid_signature(public_key, signature, message, dst=HASH_DST):
    """bls_verify가 실패하면 SignatureVerificationFailure를 던진다."""
    if not bls_verify(public_key, signature, message, dst):
        raise SignatureVerificationFailure("BLS 서명 검증 실패")
