"""
Tests for the message → G2 encoder.
"""

from py_ecc import optimized_bls12_381 as bls12_381

from roguekey.config import HASH_DST
from roguekey.field import CURVE_ORDER, ec_eq, is_identity
from roguekey.hash_to_curve import hash_to_g2


class TestHashToG2:
    """hash_to_g2 테스트."""

    def test_deterministic(self):
        assert ec_eq(hash_to_g2(b"intldds"), hash_to_g2(b"intldds"))

    def test_str_and_bytes_agree(self):
        assert ec_eq(hash_to_g2("intldds"), hash_to_g2(b"intldds"))

    def test_distinct_messages(self):
        assert not ec_eq(hash_to_g2(b"intldds"), hash_to_g2(b"intldd"))

    def test_domain_separation(self):
        """DST가 다르면 같은 메시지도 다른 점."""
        assert not ec_eq(hash_to_g2(b"m", HASH_DST), hash_to_g2(b"m", b"other-dst"))

    def test_on_curve_and_in_subgroup(self):
        point = hash_to_g2(b"intldds")
        assert bls12_381.is_on_curve(point, bls12_381.b2)
        assert is_identity(bls12_381.multiply(point, CURVE_ORDER))

    def test_empty_message(self):
        assert not is_identity(hash_to_g2(b""))
