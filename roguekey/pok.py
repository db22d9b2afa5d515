"""
소유 증명 (Proof of Knowledge, PoK)
====================================

공개키 pk = s·G1을 등록하는 참여자가 같은 비밀 s를 알고 있음을
레지스트리 인덱스 i에 묶어서 보인다.

  증명:  π = s · generator_for(i)
  검증:  e(pk, -generator_for(i)) · e(G1, π) == 1

두 번째 식은 e(G1, G2_i)^(s·1) 과 e(G1, G2_i)^(1·s) 가 같다는 것,
즉 pk와 π가 각각 G1, G2_i에 대해 같은 이산로그를 가진다는 뜻이다.

사용 예시:
    >>> from roguekey.pok import pok_prove, pok_verify
    >>> proof = pok_prove(FR(7), 2)
    >>> pok_verify(ec_mul(G1, 7), 2, proof)  # True
"""

from roguekey.config import POK_SEED
from roguekey.errors import PoKVerificationFailure
from roguekey.field import G1, ec_mul, ec_neg, multi_pairing_is_identity
from roguekey.generators import generator_for


def pok_prove(secret, index, seed=POK_SEED):
    """인덱스 index에 묶인 PoK π = secret · generator_for(index)."""
    return ec_mul(generator_for(index, seed), secret)


def pok_verify(public_key, index, proof, seed=POK_SEED):
    """PoK를 검증한다.

    Args:
        public_key: G1 점 pk
        index: 증명이 주장하는 레지스트리 인덱스
        proof: G2 점 π

    Returns:
        bool: pk와 π가 같은 비밀을 공유하면 True
    """
    return multi_pairing_is_identity(
        [public_key, G1],
        [ec_neg(generator_for(index, seed)), proof],
    )


def require_valid_pok(public_key, index, proof, seed=POK_SEED):
    """pok_verify가 실패하면 PoKVerificationFailure를 던진다."""
    if not pok_verify(public_key, index, proof, seed):
        raise PoKVerificationFailure(index)
