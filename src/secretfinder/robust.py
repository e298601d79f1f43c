"""Robust reconstruction in the presence of forged shares.

Given n shares of which at most max_bad may be corrupt, enumerate every
k-subset of share indices in lexicographic order, interpolate it, and
accept the FIRST subset whose polynomial agrees with at least
n - max_bad of the n shares. Ties between several qualifying subsets are
always broken by enumeration order; there is no search for a "best"
subset.

Cost: C(n, k) subsets, each needing O(k^2) field operations to
interpolate and O(n*k) to check against all shares. This is brute force
and grows combinatorially; at n=40, k=20 it is already ~1.4e11 subsets.
Callers should look at RobustReconstructor.cost() and cut n or k before
running anything large. workers > 1 spreads the same walk over a process
pool but does not change its order of growth.
"""

import itertools
import logging
from collections import deque
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from math import comb
from typing import Optional

from secretfinder.errors import ConfigError, DegenerateInputError
from secretfinder.lagrange import interpolate
from secretfinder.poly import poly_eval_low
from secretfinder.shares import (
    as_shares, check_modulus, check_threshold, check_tolerance, duplicate_xs,
)

logger = logging.getLogger(__name__)


class SearchState(Enum):
    SEARCHING = 'searching'
    FOUND = 'found'
    EXHAUSTED = 'exhausted'
    CANCELLED = 'cancelled'


@dataclass
class SearchResult:
    """Outcome of a robust search.

    EXHAUSTED and CANCELLED are normal outcomes: coeffs and secret are
    None, never a fallback value.
    """

    state: SearchState
    coeffs: Optional[list] = None
    subset: Optional[tuple] = None
    matches: int = 0
    attempts: int = 0
    skipped: int = 0
    mismatched: list = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.state == SearchState.FOUND

    @property
    def secret(self) -> Optional[int]:
        """Constant term of the accepted polynomial, or None."""
        if not self.found:
            return None
        return self.coeffs[0]


def combination_count(n: int, k: int) -> int:
    """Number of k-subsets of n shares, C(n, k)."""
    return comb(n, k)


def combinations(n: int, k: int):
    """Yield k-combinations of range(n) in lexicographic order.

    Iterative odometer over an index array: find the rightmost index that
    can still move, bump it, and reset everything to its right.
    """
    if k < 0 or k > n:
        return
    idx = list(range(k))
    while True:
        yield tuple(idx)
        i = k - 1
        while i >= 0 and idx[i] == n - k + i:
            i -= 1
        if i < 0:
            return
        idx[i] += 1
        for j in range(i + 1, k):
            idx[j] = idx[j - 1] + 1


def count_matches(points: list, coeffs: list, p: int) -> int:
    """Number of points (x, y) with poly(x) == y mod p."""
    return sum(1 for x, y in points if poly_eval_low(coeffs, x, p) == y % p)


def mismatched_indices(points: list, coeffs: list, p: int) -> list:
    """Indices of points the polynomial does not pass through."""
    return [i for i, (x, y) in enumerate(points)
            if poly_eval_low(coeffs, x, p) != y % p]


def scan(points: list, subsets, p: int, threshold: int,
         should_stop=None) -> SearchResult:
    """Walk subsets in the given order and stop at the first that qualifies.

    Subsets with a repeated x are counted in `skipped` and otherwise
    treated as a non-match.
    """
    attempts = 0
    skipped = 0
    for subset in subsets:
        if should_stop is not None and should_stop():
            return SearchResult(SearchState.CANCELLED,
                                attempts=attempts, skipped=skipped)
        attempts += 1
        try:
            coeffs = interpolate([points[i] for i in subset], p)
        except DegenerateInputError:
            skipped += 1
            logger.debug("Skipping degenerate subset %s", subset)
            continue

        matches = count_matches(points, coeffs, p)
        if matches >= threshold:
            return SearchResult(
                SearchState.FOUND, coeffs=coeffs, subset=tuple(subset),
                matches=matches, attempts=attempts, skipped=skipped,
                mismatched=mismatched_indices(points, coeffs, p),
            )

    return SearchResult(SearchState.EXHAUSTED,
                        attempts=attempts, skipped=skipped)


def _scan_batch(points: list, batch: list, p: int, threshold: int) -> SearchResult:
    """Process-pool entry point; must stay module level to be picklable."""
    return scan(points, batch, p, threshold)


class RobustReconstructor:
    """Brute-force search for a polynomial consistent with enough shares.

    State moves SEARCHING -> FOUND or EXHAUSTED (or CANCELLED when the
    should_stop hook fires). run() may be called once.
    """

    def __init__(self, shares, k: int, p: int, max_bad: int = 0,
                 workers: int = 1, should_stop=None, batch_size: int = 256):
        """
        shares: sequence of (x, y) pairs.
        k: subset size, the polynomial has degree k-1.
        p: prime field modulus.
        max_bad: how many shares may disagree with the accepted polynomial.
        workers: >1 evaluates batches of subsets in a process pool.
        should_stop: optional zero-arg callable polled between subsets
                     (between batches when workers > 1).
        batch_size: subsets per pool task.
        """
        check_modulus(p)
        self.shares = as_shares(shares, p)
        self.n = len(self.shares)
        check_threshold(self.n, k)
        check_tolerance(self.n, k, max_bad)
        if workers < 1:
            raise ConfigError(f"workers must be >= 1, got {workers}")
        if batch_size < 1:
            raise ConfigError(f"batch_size must be >= 1, got {batch_size}")

        self.k = k
        self.p = p
        self.max_bad = max_bad
        self.threshold = self.n - max_bad
        dups = duplicate_xs(self.shares, p)
        if dups:
            logger.debug("Repeated x values %s; subsets holding them "
                         "will be skipped", dups)
        self.workers = workers
        self.should_stop = should_stop
        self.batch_size = batch_size
        self.state = SearchState.SEARCHING
        self.result: SearchResult = None

    def cost(self) -> int:
        """Worst-case number of subsets run() will interpolate."""
        return combination_count(self.n, self.k)

    def run(self) -> SearchResult:
        if self.result is not None:
            raise RuntimeError("Search already ran")

        logger.debug("Robust search: n=%d k=%d max_bad=%d, %d subsets",
                     self.n, self.k, self.max_bad, self.cost())
        if self.workers == 1:
            result = scan(self.shares, combinations(self.n, self.k),
                          self.p, self.threshold, self.should_stop)
        else:
            result = self._run_parallel()

        self.state = result.state
        self.result = result
        if result.found:
            logger.debug("Accepted subset %s after %d attempts (%d matches)",
                         result.subset, result.attempts, result.matches)
        else:
            logger.debug("Search %s after %d attempts (%d degenerate)",
                         result.state.value, result.attempts, result.skipped)
        return result

    def _batches(self):
        it = combinations(self.n, self.k)
        while True:
            batch = list(itertools.islice(it, self.batch_size))
            if not batch:
                return
            yield batch

    def _run_parallel(self) -> SearchResult:
        """Evaluate contiguous batches concurrently, consume them in order.

        A later batch may finish first, but results are only read from the
        head of the queue, so the winner is the subset the sequential walk
        would have accepted.
        """
        attempts = 0
        skipped = 0
        batches = self._batches()
        pending = deque()

        with ProcessPoolExecutor(max_workers=self.workers) as pool:
            def submit_next() -> bool:
                batch = next(batches, None)
                if batch is None:
                    return False
                pending.append(pool.submit(
                    _scan_batch, self.shares, batch, self.p, self.threshold))
                return True

            for _ in range(2 * self.workers):
                if not submit_next():
                    break

            while pending:
                if self.should_stop is not None and self.should_stop():
                    for fut in pending:
                        fut.cancel()
                    return SearchResult(SearchState.CANCELLED,
                                        attempts=attempts, skipped=skipped)

                partial = pending.popleft().result()
                attempts += partial.attempts
                skipped += partial.skipped
                if partial.found:
                    for fut in pending:
                        fut.cancel()
                    partial.attempts = attempts
                    partial.skipped = skipped
                    return partial
                submit_next()

        return SearchResult(SearchState.EXHAUSTED,
                            attempts=attempts, skipped=skipped)


def reconstruct_robust(shares, k: int, p: int, max_bad: int = 0,
                       **kwargs) -> SearchResult:
    """Find the first k-subset whose polynomial matches >= n - max_bad shares.

    Raises ConfigError for an impossible k or max_bad; an unsolvable input
    comes back as a SearchResult in state EXHAUSTED.
    """
    return RobustReconstructor(shares, k, p, max_bad, **kwargs).run()
