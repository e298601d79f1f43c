"""Lagrange interpolation over a prime field.

points = [(x_0, y_0), (x_1, y_1), ...] with pairwise distinct x mod p.
Two forms are offered:

* interpolate() rebuilds the full coefficient list of the unique
  degree-(k-1) polynomial through k points, O(k^2) per basis term.
* interpolate_at_zero() returns only P(0), the shared secret, using
  scalar numerators. It equals interpolate(points, p)[0].

A repeated x makes a denominator vanish; field.inv then raises
DegenerateInputError, which is left for the caller to handle.
"""

from secretfinder.errors import ConfigError
from secretfinder.field import add, sub, mul, neg, inv
from secretfinder.poly import poly_add, poly_mul, poly_scale


def _check_points(points: list):
    if not points:
        raise ConfigError("Need at least one point to interpolate")


def interpolate(points: list, p: int) -> list:
    """Coefficients (lowest degree first) of the interpolating polynomial.

    For each i, L_i(x) = prod_{j!=i} (x - x_j) / (x_i - x_j) is built as an
    explicit coefficient list, scaled by y_i and summed.
    Returns exactly len(points) coefficients.
    """
    _check_points(points)
    k = len(points)
    coeffs = [0] * k

    for i in range(k):
        xi, yi = points[i]
        basis = [1]
        den = 1
        for j in range(k):
            if j == i:
                continue
            xj = points[j][0]
            basis = poly_mul(basis, [neg(xj, p), 1], p)
            den = mul(den, sub(xi, xj, p), p)

        scale = mul(yi, inv(den, p), p)
        coeffs = poly_add(coeffs, poly_scale(basis, scale, p), p)

    return coeffs


def lagrange_basis_at_zero(xs: list, i: int, p: int) -> int:
    """Compute Lagrange basis coefficient L_i(0) for evaluation at x=0.

    xs = list of x-coordinates.
    Returns prod_{j!=i} (0 - x_j) / (x_i - x_j) mod p.
    """
    xi = xs[i]
    num = 1
    den = 1
    for j, xj in enumerate(xs):
        if j == i:
            continue
        num = mul(num, neg(xj, p), p)       # (0 - x_j)
        den = mul(den, sub(xi, xj, p), p)   # (x_i - x_j)
    return mul(num, inv(den, p), p)


def interpolate_at_zero(points: list, p: int) -> int:
    """Value of the interpolating polynomial at x=0 (the secret)."""
    _check_points(points)
    xs = [pt[0] for pt in points]
    result = 0
    for i, (_, yi) in enumerate(points):
        result = add(result, mul(yi, lagrange_basis_at_zero(xs, i, p), p), p)
    return result


def interpolate_at(points: list, x: int, p: int) -> int:
    """Evaluate the interpolating polynomial at an arbitrary x."""
    _check_points(points)
    n = len(points)
    result = 0
    for i in range(n):
        xi, yi = points[i]
        num = 1
        den = 1
        for j in range(n):
            if j == i:
                continue
            xj = points[j][0]
            num = mul(num, sub(x, xj, p), p)
            den = mul(den, sub(xi, xj, p), p)
        result = add(result, mul(yi, mul(num, inv(den, p), p), p), p)
    return result
