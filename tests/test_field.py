"""Tests for prime field arithmetic."""

import pytest
from secretfinder.errors import DegenerateInputError
from secretfinder.field import (
    M61, DEFAULT_MODULUS, add, sub, mul, neg, inv, div, egcd,
    rand_element, rand_nonzero,
)


class TestFieldAxioms:
    """Verify field axioms hold for GF(M61)."""

    def test_closure(self, sample_elements):
        for a in sample_elements:
            for b in sample_elements:
                assert 0 <= add(a, b, M61) < M61
                assert 0 <= mul(a, b, M61) < M61

    def test_associativity(self, rng):
        for _ in range(20):
            a, b, c = [rand_element(M61, rng) for _ in range(3)]
            assert add(add(a, b, M61), c, M61) == add(a, add(b, c, M61), M61)
            assert mul(mul(a, b, M61), c, M61) == mul(a, mul(b, c, M61), M61)

    def test_distributivity(self, rng):
        for _ in range(20):
            a, b, c = [rand_element(M61, rng) for _ in range(3)]
            assert mul(a, add(b, c, M61), M61) == add(mul(a, b, M61), mul(a, c, M61), M61)

    def test_additive_inverse(self, sample_elements):
        for a in sample_elements:
            assert add(a, neg(a, M61), M61) == 0

    def test_multiplicative_inverse(self, rng):
        for _ in range(20):
            a = rand_nonzero(M61, rng)
            assert mul(a, inv(a, M61), M61) == 1

    def test_inverse_large_modulus(self, rng):
        for _ in range(20):
            a = rand_nonzero(DEFAULT_MODULUS, rng)
            b = inv(a, DEFAULT_MODULUS)
            assert 1 <= b < DEFAULT_MODULUS
            assert a * b % DEFAULT_MODULUS == 1


class TestArithmetic:
    """Concrete arithmetic over small fields."""

    def test_wraparound(self):
        assert add(16, 1, 17) == 0
        assert sub(0, 1, 17) == 16
        assert sub(3, 5, 17) == 15
        assert mul(16, 2, 17) == 15

    def test_neg(self):
        assert neg(0, 17) == 0
        assert neg(1, 17) == 16
        assert neg(20, 17) == 14

    def test_inputs_outside_range_are_reduced(self):
        assert add(-1, 0, 17) == 16
        assert mul(-3, 5, 17) == 2

    def test_inv_table_mod_17(self):
        for a in range(1, 17):
            assert a * inv(a, 17) % 17 == 1

    def test_inv_reduces_argument(self):
        assert inv(18, 17) == 1
        assert inv(-1, 17) == 16

    def test_div(self):
        assert div(6, 3, 17) == 2
        assert div(1, 2, 17) == 9

    def test_egcd(self):
        g, s, t = egcd(240, 46)
        assert g == 2
        assert s * 240 + t * 46 == 2


class TestDegenerateInverse:

    def test_inverse_of_zero_raises(self):
        with pytest.raises(DegenerateInputError):
            inv(0, 17)

    def test_multiple_of_modulus_raises(self):
        with pytest.raises(DegenerateInputError):
            inv(34, 17)

    def test_non_coprime_raises(self):
        with pytest.raises(DegenerateInputError):
            inv(4, 12)

    def test_is_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            inv(0, M61)


class TestSampling:

    def test_rand_element_range(self, rng):
        for _ in range(100):
            assert 0 <= rand_element(17, rng) < 17

    def test_rand_nonzero(self, rng):
        for _ in range(100):
            assert 1 <= rand_nonzero(2, rng) < 2

    def test_deterministic_with_rng(self):
        import random
        a = [rand_element(M61, random.Random(7)) for _ in range(3)]
        b = [rand_element(M61, random.Random(7)) for _ in range(3)]
        assert a == b

    def test_without_rng(self):
        assert 0 <= rand_element(DEFAULT_MODULUS) < DEFAULT_MODULUS


class TestDefaultModulus:

    def test_small_differences_invertible(self):
        # x-coordinate gaps of realistic share files must all be invertible
        for d in range(1, 200):
            assert mul(d, inv(d, DEFAULT_MODULUS), DEFAULT_MODULUS) == 1

    def test_gap_of_23(self):
        assert mul(23, inv(-23, DEFAULT_MODULUS), DEFAULT_MODULUS) == DEFAULT_MODULUS - 1
