"""
Tests for per-index PoK generators.

The generators are scalar multiples of one base point; these tests pin down
that collinearity, since the rogue-key forgery depends on it.
"""

import pytest
from roguekey.config import POK_SEED
from roguekey.field import FR, G2, ec_mul, ec_eq, is_identity
from roguekey.generators import seed_to_scalar, derive_base_point, generator_for


class TestGenerators:
    """generator_for 테스트."""

    def test_deterministic(self):
        """같은 인덱스는 항상 같은 점."""
        assert ec_eq(generator_for(2), generator_for(2))

    def test_index_zero_is_base_point(self):
        assert ec_eq(generator_for(0), derive_base_point())

    @pytest.mark.parametrize("index", [1, 2, 3, 7])
    def test_collinear_with_index_zero(self, index):
        """generator_for(i) == (i+1) · generator_for(0)."""
        assert ec_eq(generator_for(index), ec_mul(generator_for(0), index + 1))

    def test_distinct_indices_distinct_points(self):
        assert not ec_eq(generator_for(1), generator_for(2))

    def test_not_identity(self):
        assert not is_identity(generator_for(0))

    def test_base_point_from_seed(self):
        assert ec_eq(derive_base_point(POK_SEED), ec_mul(G2, seed_to_scalar(POK_SEED)))

    def test_seed_changes_base_point(self):
        assert not ec_eq(derive_base_point(1), derive_base_point(2))

    def test_seed_to_scalar_deterministic(self):
        assert seed_to_scalar(20399) == seed_to_scalar(20399)
        assert isinstance(seed_to_scalar(20399), FR)

    def test_negative_index_raises(self):
        with pytest.raises(ValueError):
            generator_for(-1)
