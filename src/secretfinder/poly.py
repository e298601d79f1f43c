"""Polynomials over a prime field.

A polynomial is a list of coefficients, lowest degree first:
coeffs[i] is the coefficient of x^i, so coeffs[0] is the constant term.
"""

from secretfinder.field import add, mul


def poly_mul(a: list, b: list, p: int) -> list:
    """Product of two polynomials mod p.

    Result has len(a) + len(b) - 1 coefficients.
    """
    if not a or not b:
        return []
    result = [0] * (len(a) + len(b) - 1)
    for i, ai in enumerate(a):
        if ai == 0:
            continue
        for j, bj in enumerate(b):
            result[i + j] = (result[i + j] + ai * bj) % p
    return result


def poly_add(a: list, b: list, p: int) -> list:
    """Coefficient-wise sum, padded to the longer operand."""
    if len(a) < len(b):
        a, b = b, a
    result = list(a)
    for i, c in enumerate(b):
        result[i] = add(result[i], c, p)
    return [c % p for c in result]


def poly_scale(a: list, c: int, p: int) -> list:
    """Multiply every coefficient by the scalar c."""
    return [mul(ai, c, p) for ai in a]


def poly_eval_low(coeffs: list, x: int, p: int) -> int:
    """Evaluate polynomial at x using Horner's method.

    coeffs = [a_0, a_1, ..., a_d] (lowest degree first)
    Returns a_0 + a_1 * x + ... + a_d * x^d  mod p.
    """
    result = 0
    for c in reversed(coeffs):
        result = (result * x + c) % p
    return result
