"""
기반 모듈: 스칼라 필드와 BLS12-381 그룹 연산
==============================================

프로토콜 전체에서 사용하는 대수적 도구를 정의한다.

**스칼라 필드 FR**:
  BLS12-381 곡선의 위수 r (≈ 2^255) 위의 소수체. 비밀키, 블라인딩 값,
  인덱스 비율 (n+1)·(k+1)⁻¹ 등 모든 스칼라가 여기에 속한다.

**그룹 G1 / G2 / GT**:
  - 공개키는 G1, 서명과 PoK는 G2에 있다.
  - 점은 py_ecc의 optimized 사영 좌표 (x, y, z)로 표현한다.
    같은 점이 여러 좌표로 표현될 수 있으므로 비교는 반드시 ec_eq를 쓴다.

**다중 페어링 검사**:
  ∏ e(A_k, B_k) == 1 (GT의 항등원)
  Miller loop만 곱한 뒤 최종 거듭제곱(final exponentiation)을 한 번 수행한다.
  PoK 검증과 서명 검증 모두 두 쌍짜리 다중 페어링 검사로 환원된다.

사용 예시:
    >>> from roguekey.field import FR, G1, G2, ec_mul, ec_neg
    >>> P = ec_mul(G1, FR(5))
    >>> multi_pairing_is_identity([P, G1], [ec_neg(G2), ec_mul(G2, 5)])  # True
"""

from py_ecc.fields import bls12_381_FQ as FQ
from py_ecc.fields import optimized_bls12_381_FQ12 as FQ12
from py_ecc import optimized_bls12_381 as bls12_381

from roguekey.errors import InvalidPointError, ScalarInversionError


# ─────────────────────────────────────────────────────────────────────
# 스칼라 필드 FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """BLS12-381 스칼라 필드 위의 원소.

    py_ecc의 FQ를 상속하여 +, -, *, /, ** 연산을 제공한다.

    주의:
        py_ecc의 나눗셈은 0으로 나누면 조용히 0을 돌려준다.
        역원이 필요하면 fr_inverse를 사용한다.
    """
    field_modulus = bls12_381.curve_order


# 곡선 위수 (스칼라 필드 크기)
CURVE_ORDER = bls12_381.curve_order


def fr_inverse(value):
    """FR 원소의 곱셈 역원을 반환한다.

    Raises:
        ScalarInversionError: value가 0일 때
    """
    if not isinstance(value, FR):
        value = FR(value)
    if value == FR(0):
        raise ScalarInversionError("FR(0)의 역원은 존재하지 않습니다")
    return FR(1) / value


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

# G1, G2 생성자
G1 = bls12_381.G1
G2 = bls12_381.G2

# 무한원점 (항등원)
Z1 = bls12_381.Z1
Z2 = bls12_381.Z2


def ec_mul(point, scalar):
    """스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점
        scalar: 정수 또는 FR 원소 (음수는 r로 축소)
    """
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bls12_381.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """점 덧셈: p1 + p2."""
    return bls12_381.add(p1, p2)


def ec_neg(point):
    """점의 역원: -point."""
    return bls12_381.neg(point)


def ec_sub(p1, p2):
    """점 뺄셈: p1 - p2."""
    return bls12_381.add(p1, bls12_381.neg(p2))


def ec_sum(points, zero):
    """점들의 합 Σ points. 빈 시퀀스면 zero (Z1 또는 Z2)를 반환한다."""
    result = zero
    for point in points:
        result = bls12_381.add(result, point)
    return result


def ec_eq(p1, p2):
    """사영 좌표를 고려한 점 비교."""
    return bls12_381.eq(p1, p2)


def is_identity(point):
    return bls12_381.is_inf(point)


# ─────────────────────────────────────────────────────────────────────
# 다중 페어링 검사
# ─────────────────────────────────────────────────────────────────────

def multi_pairing_is_identity(g1_points, g2_points):
    """∏ e(A_k, B_k)가 GT의 항등원인지 검사한다.

    각 쌍에 대해 최종 거듭제곱 없이 Miller loop만 계산하여 곱한 후,
    마지막에 한 번만 final exponentiation을 수행한다.

    Args:
        g1_points: G1 점 시퀀스 [A_0, A_1, ...]
        g2_points: G2 점 시퀀스 [B_0, B_1, ...] (g1_points와 같은 길이)

    Returns:
        bool: 곱이 1이면 True

    Raises:
        ValueError: 두 시퀀스의 길이가 다를 때
        InvalidPointError: 곡선 위에 있지 않은 점이 있을 때

    주의:
        py_ecc의 pairing 인자 순서는 (G2, G1)이다.
    """
    g1_points = list(g1_points)
    g2_points = list(g2_points)
    if len(g1_points) != len(g2_points):
        raise ValueError(
            f"G1 점 {len(g1_points)}개와 G2 점 {len(g2_points)}개의 개수가 다릅니다"
        )
    for k, (a, b) in enumerate(zip(g1_points, g2_points)):
        if not bls12_381.is_on_curve(a, bls12_381.b):
            raise InvalidPointError(f"{k}번째 G1 점이 곡선 위에 있지 않습니다")
        if not bls12_381.is_on_curve(b, bls12_381.b2):
            raise InvalidPointError(f"{k}번째 G2 점이 곡선 위에 있지 않습니다")

    product = FQ12.one()
    for a, b in zip(g1_points, g2_points):
        product = product * bls12_381.pairing(b, a, final_exponentiate=False)

    return bls12_381.final_exponentiate(product) == FQ12.one()
