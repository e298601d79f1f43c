"""Trusting Shamir reconstruction.

Assumes every share is authentic: any k of them determine the
degree-(k-1) polynomial, so the secret is read off directly. Which k
shares are used is decided by a selection strategy; the default takes
the first k in caller order so results are reproducible.
"""

import logging

from secretfinder.lagrange import interpolate, interpolate_at, interpolate_at_zero
from secretfinder.shares import as_shares, check_modulus, check_threshold

logger = logging.getLogger(__name__)


def first_k(shares: list, k: int) -> list:
    """Select the first k shares."""
    return list(shares[:k])


def random_k(rng):
    """Build a strategy that samples k shares with the given random.Random.

    The sample keeps the original share order.
    """
    def select(shares: list, k: int) -> list:
        idx = sorted(rng.sample(range(len(shares)), k))
        return [shares[i] for i in idx]
    return select


def _select(shares, k: int, p: int, select) -> list:
    check_modulus(p)
    shares = as_shares(shares, p)
    check_threshold(len(shares), k)
    chosen = select(shares, k)
    if len(chosen) != k:
        raise ValueError(
            f"Selection strategy returned {len(chosen)} shares, expected {k}")
    logger.debug("Using shares at x=%s", [s.x for s in chosen])
    return chosen


def reconstruct_secret(shares, k: int, p: int, select=first_k) -> int:
    """Reconstruct the secret f(0) from k of the given shares.

    Args:
        shares: Sequence of (x, y) pairs, at least k of them.
        k: Threshold; exactly k shares are interpolated.
        p: Prime field modulus.
        select: Strategy (shares, k) -> k shares. Defaults to first_k.

    Raises:
        ConfigError: k < 1 or fewer than k shares.
        DegenerateInputError: two selected shares have the same x mod p.
    """
    return interpolate_at_zero(_select(shares, k, p, select), p)


def reconstruct_polynomial(shares, k: int, p: int, select=first_k) -> list:
    """Like reconstruct_secret, but return all k coefficients."""
    return interpolate(_select(shares, k, p, select), p)


def reconstruct_at(shares, k: int, target: int, p: int, select=first_k) -> int:
    """Reconstruct the polynomial value at an arbitrary point."""
    return interpolate_at(_select(shares, k, p, select), target, p)


def consistency_check(shares, k: int, p: int) -> list:
    """Detect corrupt shares by checking polynomial consistency.

    Given n shares that should lie on a degree-(k-1) polynomial, uses
    leave-one-out interpolation: share i is flagged when the polynomial
    through the first k other shares disagrees with it. Only reliable
    while corruption is sparse; use robust.reconstruct_robust otherwise.

    Returns:
        List of indices into shares that are inconsistent.
    """
    shares = as_shares(shares, p)
    n = len(shares)
    check_threshold(n, k)
    if n <= k:
        return []

    corrupt = []
    for i in range(n):
        others = [s for j, s in enumerate(shares) if j != i][:k]
        expected = interpolate_at(others, shares[i].x, p)
        if expected != shares[i].y:
            corrupt.append(i)

    return corrupt
