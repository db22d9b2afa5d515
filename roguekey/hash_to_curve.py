"""
Hash-to-Curve: 메시지 → G2 점
=============================

BLS 서명은 메시지를 G2 위의 점 H(m)으로 보낸 뒤 비밀키를 곱한다.
표준 구성 (BLS12381G2_XMD:SHA-256_SSWU_RO_)을 그대로 사용한다.

  1. expand_message_xmd(SHA-256)로 DST를 섞어 두 개의 FQ2 원소를 얻고
  2. SSWU 사상 + 3-isogeny로 각각 곡선 위 점으로 보낸 뒤 더하고
  3. 보조인자(cofactor)를 제거하여 위수 r의 부분군에 넣는다.

도메인 분리 태그(DST)는 다른 프로토콜의 해시 출력과 섞이지 않도록 한다.
"""

import hashlib

from py_ecc.bls.hash_to_curve import hash_to_G2

from roguekey.config import HASH_DST


def hash_to_g2(message, dst=HASH_DST):
    """메시지를 G2 점으로 인코딩한다.

    Args:
        message: bytes 또는 str (str은 UTF-8로 인코딩)
        dst: 도메인 분리 태그

    Returns:
        G2 점 (같은 메시지는 항상 같은 점)
    """
    if isinstance(message, str):
        message = message.encode()
    return hash_to_G2(bytes(message), dst, hashlib.sha256)
