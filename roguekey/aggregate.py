"""
집계(Aggregation)와 rogue-key 위조
==================================

공개키, PoK, 서명은 모두 그룹 원소이므로 더해서 하나로 합칠 수 있다.
검증자는 레지스트리의 모든 공개키를 더한 집계 키로 집계 서명을 검증한다.

**Rogue-key 공격** (기존 항목 0..n-1, 공격자 비밀 s, 새 인덱스 n):

  1. Rogue key
       my_key  = s · G1
       new_key = my_key - Σ pk_k
     → 집계 키 = new_key + Σ pk_k = s · G1  (공격자만 아는 키)

  2. new_key에 대한 PoK 위조
       proof_k = s_k · (k+1)·G2_0  이므로
       (n+1)·(k+1)⁻¹ · proof_k = s_k · generator_for(n)
       new_proof = pok_prove(s, n) - Σ (n+1)·(k+1)⁻¹ · proof_k
                 = (s - Σ s_k) · generator_for(n)
     → new_key = (s - Σ s_k)·G1 과 같은 이산로그이므로 검증을 통과한다.
       정직한 참여자의 비밀 s_k는 한 번도 쓰이지 않는다.

  3. 집계 서명 위조
       my_sig = s · H(m)
     집계 키가 이미 s·G1로 붕괴했으므로 my_sig 자체가 유효한 집계 서명이다.
     다른 항목들이 G2 값(share)을 공개해 두었다면, 공격자의 몫을
       share_n = my_sig - Σ share_k
     로 정해 합산 결과가 다시 my_sig가 되도록 맞출 수 있다.

2번은 전적으로 generators 모듈의 공선성에 의존한다.
"""

from roguekey.config import HASH_DST, POK_SEED
from roguekey.field import FR, G1, Z1, Z2, ec_mul, ec_sub, ec_sum, fr_inverse
from roguekey.bls import bls_sign
from roguekey.pok import pok_prove


# ─────────────────────────────────────────────────────────────────────
# 합산
# ─────────────────────────────────────────────────────────────────────

def aggregate_public_keys(public_keys):
    """Σ pk_k (G1). 빈 목록이면 무한원점."""
    return ec_sum(public_keys, Z1)


def aggregate_proofs(proofs):
    """Σ π_k (G2)."""
    return ec_sum(proofs, Z2)


def aggregate_signatures(signatures):
    """Σ σ_k (G2)."""
    return ec_sum(signatures, Z2)


# ─────────────────────────────────────────────────────────────────────
# 위조 단계
# ─────────────────────────────────────────────────────────────────────

def rescale_proof(proof, from_index, to_index):
    """인덱스 from_index의 PoK를 to_index의 생성자 위로 옮긴다.

    (to+1)·(from+1)⁻¹ · proof

    Raises:
        ScalarInversionError: from_index + 1 이 0일 때 (from_index = -1)
    """
    ratio = FR(to_index + 1) * fr_inverse(FR(from_index + 1))
    return ec_mul(proof, ratio)


def rogue_public_key(my_key, public_keys):
    """new_key = my_key - Σ pk_k."""
    return ec_sub(my_key, aggregate_public_keys(public_keys))


def forge_pok(secret, proofs, new_index, seed=POK_SEED):
    """new_key에 대한 인덱스 new_index의 PoK를 만든다.

    Args:
        secret: 공격자 비밀 s
        proofs: 기존 레지스트리의 PoK 목록 (인덱스 순서)
        new_index: 새 항목의 인덱스 n

    Returns:
        G2 점: pok_prove(s, n) - Σ rescale_proof(proof_k, k, n)
    """
    rescaled = [rescale_proof(proof, k, new_index) for k, proof in enumerate(proofs)]
    return ec_sub(pok_prove(secret, new_index, seed), aggregate_proofs(rescaled))


def forge_signature_share(my_signature, published_shares):
    """share_n = my_sig - Σ share_k.

    published_shares와 함께 더하면 my_signature가 된다.
    """
    return ec_sub(my_signature, aggregate_signatures(published_shares))


class Forgery:
    """위조된 레지스트리 항목과 집계 서명.

    속성:
        index: 새 항목의 인덱스 n
        secret_key: 공격자가 통제하는 키 my_key = s·G1 (= 집계 키)
        public_key: 레지스트리에 추가할 new_key
        proof: new_key의 PoK
        message: 서명한 메시지 (bytes)
        signature: my_sig = s·H(m) (공개할 집계 서명)
        signature_share: 다른 항목의 공개 G2 값과 더하면 my_sig가 되는 몫
        aggregate_signature: signature_share + Σ 공개 G2 값
    """

    def __init__(self, index, secret_key, public_key, proof, message,
                 signature, signature_share, aggregate_signature):
        self.index = index
        self.secret_key = secret_key
        self.public_key = public_key
        self.proof = proof
        self.message = message
        self.signature = signature
        self.signature_share = signature_share
        self.aggregate_signature = aggregate_signature


def forge_registry_entry(entries, secret, message, seed=POK_SEED, dst=HASH_DST,
                         published_shares=None):
    """기존 레지스트리에 덧붙일 rogue 항목과 집계 서명을 만든다.

    Args:
        entries: (pk, proof) 쌍의 시퀀스 (Registry 포함)
        secret: 공격자 비밀 s (정수 또는 FR)
        message: 서명할 메시지
        published_shares: 다른 항목들이 공개한 G2 값.
                          None이면 레지스트리에 기록된 PoK를 사용한다.

    Returns:
        Forgery
    """
    if isinstance(message, str):
        message = message.encode()
    entries = list(entries)
    public_keys = [pk for pk, _ in entries]
    proofs = [proof for _, proof in entries]
    new_index = len(entries)

    # 1. rogue key
    my_key = ec_mul(G1, secret)
    new_key = rogue_public_key(my_key, public_keys)

    # 2. PoK
    new_proof = forge_pok(secret, proofs, new_index, seed)

    # 3. 서명
    my_sig = bls_sign(secret, message, dst)
    if published_shares is None:
        published_shares = proofs
    share = forge_signature_share(my_sig, published_shares)
    aggregate_signature = aggregate_signatures([share] + list(published_shares))

    return Forgery(new_index, my_key, new_key, new_proof, message,
                   my_sig, share, aggregate_signature)
