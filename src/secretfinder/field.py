"""Prime field arithmetic over an arbitrary-precision modulus.

Every function takes the modulus p explicitly and returns a value in
[0, p). Python ints carry the full width, so products of 200+ bit
elements need no special reduction. Primality of p is assumed by
callers, never checked here.
"""

import secrets

from secretfinder.errors import DegenerateInputError

M61 = (1 << 61) - 1  # 2^61 - 1, handy Mersenne prime for tests

# 2^255 - 19, prime; field for share files that declare no modulus
DEFAULT_MODULUS = (1 << 255) - 19


def add(a: int, b: int, p: int) -> int:
    """(a + b) mod p."""
    return (a + b) % p


def sub(a: int, b: int, p: int) -> int:
    """(a - b) mod p."""
    return (a - b) % p


def mul(a: int, b: int, p: int) -> int:
    """(a * b) mod p."""
    return (a * b) % p


def neg(a: int, p: int) -> int:
    """(-a) mod p."""
    return -a % p


def egcd(a: int, b: int) -> tuple:
    """Extended Euclid, iterative.

    Returns (g, s, t) with g = gcd(a, b) and s*a + t*b == g.
    """
    s0, s1 = 1, 0
    t0, t1 = 0, 1
    while b:
        q, r = divmod(a, b)
        a, b = b, r
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return a, s0, t0


def inv(a: int, p: int) -> int:
    """Multiplicative inverse of a modulo p via the extended Euclidean algorithm.

    Returns the unique b in [1, p) with a*b == 1 (mod p).

    Raises:
        DegenerateInputError: a is 0 mod p (or shares a factor with p).
    """
    a %= p
    if a == 0:
        raise DegenerateInputError(f"Cannot invert 0 modulo {p}")
    g, s, _ = egcd(a, p)
    if g != 1:
        raise DegenerateInputError(
            f"{a} is not invertible modulo {p} (gcd {g})")
    return s % p


def div(a: int, b: int, p: int) -> int:
    """(a / b) mod p = a * b^(-1) mod p."""
    return mul(a, inv(b, p), p)


def rand_element(p: int, rng=None) -> int:
    """Sample a uniform element of [0, p).

    rng: optional random.Random for reproducible tests; the secrets
    module is used otherwise.
    """
    if rng is not None:
        return rng.randrange(p)
    return secrets.randbelow(p)


def rand_nonzero(p: int, rng=None) -> int:
    """Sample a uniform nonzero element of [1, p)."""
    while True:
        r = rand_element(p, rng)
        if r != 0:
            return r
