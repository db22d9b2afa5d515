"""
Tests for the group and pairing layer.

Covers:
- FR arithmetic and checked inversion
- G1/G2 addition, subtraction, sums, projective equality
- Multi-pairing product check (bilinearity, mismatched lengths, off-curve points)
"""

import pytest
from py_ecc import optimized_bls12_381 as bls12_381

from roguekey.errors import DeserializationError, InvalidPointError, ScalarInversionError
from roguekey.field import (
    FR, CURVE_ORDER, G1, G2, Z1, Z2,
    ec_mul, ec_add, ec_neg, ec_sub, ec_sum, ec_eq, fr_inverse,
    is_identity, multi_pairing_is_identity,
)


# ─────────────────────────────────────────────────────────────────────
# FR
# ─────────────────────────────────────────────────────────────────────

class TestFR:
    """스칼라 필드 FR 테스트."""

    def test_modulus_is_curve_order(self):
        assert FR.field_modulus == CURVE_ORDER

    def test_wraps_at_curve_order(self):
        assert FR(CURVE_ORDER + 3) == FR(3)

    def test_inverse(self):
        """fr_inverse(x) * x == 1."""
        x = FR(4)
        assert fr_inverse(x) * x == FR(1)

    def test_inverse_accepts_int(self):
        assert fr_inverse(7) * FR(7) == FR(1)

    def test_inverse_of_zero_raises(self):
        """0의 역원은 조용히 0이 되지 않고 예외를 던진다."""
        with pytest.raises(ScalarInversionError):
            fr_inverse(FR(0))

    def test_inverse_of_modulus_raises(self):
        with pytest.raises(ZeroDivisionError):
            fr_inverse(CURVE_ORDER)


# ─────────────────────────────────────────────────────────────────────
# 그룹 연산
# ─────────────────────────────────────────────────────────────────────

class TestGroupOps:
    """G1/G2 점 연산 테스트."""

    def test_mul_matches_repeated_add(self):
        assert ec_eq(ec_mul(G1, 3), ec_add(ec_add(G1, G1), G1))

    def test_mul_accepts_fr(self):
        assert ec_eq(ec_mul(G2, FR(5)), ec_mul(G2, 5))

    def test_generator_has_curve_order(self):
        """r·G1 == ∞ (py_ecc multiply를 직접 사용, ec_mul은 r로 축소하므로)."""
        assert is_identity(bls12_381.multiply(G1, CURVE_ORDER))

    def test_negative_scalar(self):
        """(-1)·P == -P."""
        assert ec_eq(ec_mul(G1, -1), ec_neg(G1))

    def test_sub_self_is_identity(self):
        P = ec_mul(G2, 9)
        assert is_identity(ec_sub(P, P))

    def test_sum(self):
        points = [ec_mul(G1, k) for k in (2, 3, 5)]
        assert ec_eq(ec_sum(points, Z1), ec_mul(G1, 10))

    def test_empty_sum_is_zero(self):
        assert is_identity(ec_sum([], Z2))

    def test_eq_ignores_projective_representation(self):
        """같은 점의 서로 다른 사영 좌표 표현도 같다고 판단한다."""
        a = ec_add(ec_mul(G1, 2), G1)
        b = ec_mul(G1, 3)
        assert ec_eq(a, b)


# ─────────────────────────────────────────────────────────────────────
# 다중 페어링
# ─────────────────────────────────────────────────────────────────────

class TestMultiPairing:
    """multi_pairing_is_identity 테스트."""

    def test_bilinearity(self):
        """e(a·G1, -G2) · e(G1, a·G2) == 1."""
        assert multi_pairing_is_identity(
            [ec_mul(G1, 6), G1],
            [ec_neg(G2), ec_mul(G2, 6)],
        )

    def test_scalar_moves_between_groups(self):
        """e(2·G1, 3·G2) · e(-6·G1, G2) == 1."""
        assert multi_pairing_is_identity(
            [ec_mul(G1, 2), ec_mul(G1, -6)],
            [ec_mul(G2, 3), G2],
        )

    def test_mismatched_exponents(self):
        assert not multi_pairing_is_identity(
            [ec_mul(G1, 6), G1],
            [ec_neg(G2), ec_mul(G2, 7)],
        )

    def test_identity_terms(self):
        """무한원점이 섞인 항은 1을 곱한 것과 같다."""
        assert multi_pairing_is_identity([Z1, G1], [G2, Z2])

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            multi_pairing_is_identity([G1, G1], [G2])

    def test_off_curve_g1_raises(self):
        """(1, 1)은 y² = x³ + 4 를 만족하지 않는다. 페어링 전에 거부한다."""
        bad = (bls12_381.FQ(1), bls12_381.FQ(1), bls12_381.FQ.one())
        with pytest.raises(InvalidPointError) as exc_info:
            multi_pairing_is_identity([G1, bad], [G2, G2])
        assert "1번째 G1" in str(exc_info.value)

    def test_off_curve_g2_raises(self):
        one = bls12_381.FQ2.one()
        bad = (one, one, one)
        with pytest.raises(InvalidPointError):
            multi_pairing_is_identity([G1], [bad])

    def test_off_curve_is_a_deserialization_error(self):
        """unchecked 로드에서 온 점이므로 로드 실패와 같은 경로로 처리된다."""
        bad = (bls12_381.FQ(1), bls12_381.FQ(1), bls12_381.FQ.one())
        with pytest.raises(DeserializationError):
            multi_pairing_is_identity([bad], [G2])
