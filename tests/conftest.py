"""Shared fixtures for secretfinder tests."""

import random
import pytest
from secretfinder.field import M61, rand_element
from secretfinder.poly import poly_eval_low


@pytest.fixture
def rng():
    """Deterministic RNG for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def sample_elements(rng):
    """10 random GF(M61) elements for property testing."""
    return [rand_element(M61, rng) for _ in range(10)]


@pytest.fixture
def make_shares(rng):
    """Factory: random degree-(k-1) polynomial and its shares at x=1..n.

    Returns (coeffs, shares); coeffs[0] is the secret.
    """
    def make(n: int, k: int, p: int = M61, secret: int = None):
        coeffs = [rand_element(p, rng) for _ in range(k)]
        if secret is not None:
            coeffs[0] = secret
        shares = [(x, poly_eval_low(coeffs, x, p)) for x in range(1, n + 1)]
        return coeffs, shares
    return make


@pytest.fixture
def line_shares():
    """P(x) = 3 + 2x over GF(17): (1,5), (2,7), (3,9)."""
    return [(1, 5), (2, 7), (3, 9)]
