"""Share data model.

A Share is one (x, y) sample of the secret polynomial. It is a NamedTuple,
so code that works with plain (x, y) tuples accepts Shares unchanged.
"""

from dataclasses import dataclass, field
from typing import NamedTuple

from secretfinder.errors import ConfigError
from secretfinder.field import DEFAULT_MODULUS


class Share(NamedTuple):
    x: int
    y: int


def as_shares(points, p: int = None) -> list:
    """Normalize an iterable of (x, y) pairs into Shares.

    If p is given, both coordinates are reduced into [0, p).
    """
    out = []
    for pt in points:
        x, y = pt
        if p is not None:
            x, y = x % p, y % p
        out.append(Share(int(x), int(y)))
    return out


def check_threshold(n: int, k: int):
    """Validate 1 <= k <= n."""
    if k < 1:
        raise ConfigError(f"Threshold k must be >= 1, got {k}")
    if k > n:
        raise ConfigError(f"Need at least k shares, got n={n}, k={k}")


def check_tolerance(n: int, k: int, max_bad: int):
    """Validate 0 <= max_bad <= n - k."""
    if max_bad < 0:
        raise ConfigError(f"max_bad must be >= 0, got {max_bad}")
    if max_bad > n - k:
        raise ConfigError(
            f"max_bad must be <= n - k = {n - k}, got {max_bad}")


def check_modulus(p: int):
    if p < 2:
        raise ConfigError(f"Modulus must be >= 2, got {p}")


def duplicate_xs(shares: list, p: int) -> list:
    """Return x values (mod p) that appear more than once."""
    seen = set()
    dups = []
    for x, _ in shares:
        r = x % p
        if r in seen and r not in dups:
            dups.append(r)
        seen.add(r)
    return dups


@dataclass
class ShareSet:
    """Everything one reconstruction needs, as handed over by a share source."""

    shares: list
    k: int
    modulus: int = DEFAULT_MODULUS
    max_bad: int = 0
    robust: bool = False  # file asks for the subset search
    source: str = None
    extra: dict = field(default_factory=dict)

    @property
    def n(self) -> int:
        return len(self.shares)

    def validate(self, robust: bool = False):
        """Raise ConfigError if the parameters cannot describe a reconstruction."""
        check_modulus(self.modulus)
        check_threshold(self.n, self.k)
        if robust:
            check_tolerance(self.n, self.k, self.max_bad)
        return self
