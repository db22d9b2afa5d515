"""
인덱스별 PoK 생성자 (Per-Index Generator)
==========================================

레지스트리의 i번째 항목은 자신의 인덱스에 묶인 G2 생성자를 기준으로
소유 증명(PoK)을 만든다. 검증자는 인덱스 i만으로 같은 점을 재현할 수 있어야
하므로, 생성자는 비밀 상태 없이 결정론적으로 유도된다.

**유도 방식**:
  1. 고정 시드에서 스칼라 t를 얻는다:  t = SHA-256(str(seed)) mod r
  2. 기준점 G2_0 = t · G2
  3. generator_for(i) = (i+1) · G2_0

**공선성(collinearity)**:
  모든 생성자는 같은 기준점의 스칼라 배이다.

    generator_for(n) = (n+1)·(k+1)⁻¹ · generator_for(k)

  이 비율은 공개된 인덱스만으로 계산되므로, 인덱스 k의 PoK를
  인덱스 n의 PoK로 옮길 수 있다. aggregate.forge_pok가 바로 이 성질을
  이용한다. 인덱스마다 hash-to-curve로 독립적인 생성자를 뽑으면 막을 수 있는
  약점이지만, 공격을 재현하기 위해 이 구성을 그대로 유지한다.

사용 예시:
    >>> from roguekey.generators import generator_for
    >>> g3 = generator_for(3)
    >>> ec_eq(g3, ec_mul(generator_for(0), 4))  # True
"""

import hashlib

from roguekey.config import POK_SEED
from roguekey.field import FR, G2, CURVE_ORDER, ec_mul


def seed_to_scalar(seed):
    """시드에서 0이 아닌 FR 스칼라를 결정론적으로 만든다.

    Raises:
        ValueError: 해시가 0으로 축소될 때 (사실상 발생하지 않음)
    """
    h = hashlib.sha256(str(seed).encode()).digest()
    scalar = int.from_bytes(h, "big") % CURVE_ORDER
    if scalar == 0:
        raise ValueError(f"시드 {seed}가 0 스칼라로 축소되었습니다")
    return FR(scalar)


def derive_base_point(seed=POK_SEED):
    """기준점 G2_0 = seed_to_scalar(seed) · G2."""
    return ec_mul(G2, seed_to_scalar(seed))


def generator_for(index, seed=POK_SEED):
    """인덱스 i의 PoK 생성자 (i+1) · G2_0를 반환한다.

    Args:
        index: 레지스트리 인덱스 (0 이상)
        seed: 기준점 시드

    Raises:
        ValueError: index가 음수일 때
    """
    if index < 0:
        raise ValueError(f"인덱스는 0 이상이어야 합니다: {index}")
    return ec_mul(derive_base_point(seed), index + 1)
