"""Tests for polynomial helpers."""

from secretfinder.field import M61, rand_element
from secretfinder.poly import poly_mul, poly_add, poly_scale, poly_eval_low


def eval_by_powers(coeffs: list, x: int, p: int) -> int:
    """Sum coeff * x^i with ascending powers, independent of Horner."""
    result = 0
    power = 1
    for c in coeffs:
        result = (result + c * power) % p
        power = (power * x) % p
    return result


class TestMultiply:

    def test_linear_factors(self):
        # (x - 1)(x - 2) = x^2 - 3x + 2 over GF(17)
        assert poly_mul([16, 1], [15, 1], 17) == [2, 14, 1]

    def test_result_length(self):
        assert len(poly_mul([1, 2, 3], [4, 5], 17)) == 4

    def test_by_constant(self):
        assert poly_mul([1, 2, 3], [2], 17) == [2, 4, 6]

    def test_coefficients_reduced(self):
        assert poly_mul([10], [10], 17) == [15]

    def test_empty(self):
        assert poly_mul([], [1, 2], 17) == []

    def test_evaluation_is_multiplicative(self, rng):
        a = [rand_element(M61, rng) for _ in range(5)]
        b = [rand_element(M61, rng) for _ in range(4)]
        prod = poly_mul(a, b, M61)
        for _ in range(5):
            x = rand_element(M61, rng)
            expected = poly_eval_low(a, x, M61) * poly_eval_low(b, x, M61) % M61
            assert poly_eval_low(prod, x, M61) == expected


class TestEvaluate:

    def test_constant(self):
        assert poly_eval_low([42], 7, M61) == 42

    def test_linear(self):
        # 3 + 2x over GF(17)
        assert [poly_eval_low([3, 2], x, 17) for x in range(1, 5)] == [5, 7, 9, 11]

    def test_empty_is_zero(self):
        assert poly_eval_low([], 5, 17) == 0

    def test_horner_matches_powers(self, rng):
        coeffs = [rand_element(M61, rng) for _ in range(10)]
        for _ in range(10):
            x = rand_element(M61, rng)
            assert poly_eval_low(coeffs, x, M61) == eval_by_powers(coeffs, x, M61)

    def test_at_zero_is_constant_term(self, rng):
        coeffs = [rand_element(M61, rng) for _ in range(6)]
        assert poly_eval_low(coeffs, 0, M61) == coeffs[0]


class TestHelpers:

    def test_add_pads(self):
        assert poly_add([1, 2], [16, 0, 5], 17) == [0, 2, 5]

    def test_scale(self):
        assert poly_scale([1, 2, 3], 6, 17) == [6, 12, 1]
