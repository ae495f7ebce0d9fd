"""
Prime-multiple sieve with exponents found by repeated division.

If n = p1^y1 * p2^y2 * ... * pm^ym then d(n) = (y1 + 1)(y2 + 1)...(ym + 1).
Walking the multiples of each prime and multiplying in (exponent + 1) builds
d(n) for every n at once; multiplication commutes, so prime order is free.

Primes need no separate sieve: by the time the outer loop reaches n, every
prime below n has already touched it, so a cell still equal to 1 is prime.
The same argument means array[n] is final when n is reached, so the running
comparison can happen in the same pass.
"""

from typing import Tuple

import numpy as np

from .arith import find_exponent
from .errors import DIVISOR_DTYPE, validate_bound


def _sieve(limit: int) -> Tuple[np.ndarray, int]:
    """Sieve [0, limit] and count n in [2, limit] with d(n) == d(n - 1)."""
    factors = np.ones(limit + 1, dtype=DIVISOR_DTYPE)

    count = 0
    for n in range(2, limit + 1):
        if factors[n] == 1:
            for i in range(n, limit + 1, n):
                factors[i] *= find_exponent(i, n) + 1

        if factors[n] == factors[n - 1]:
            count += 1

    return factors, count


def division_divisor_counts(N: int) -> np.ndarray:
    """
    Divisor counts for all integers up to N.

    Parameters
    ----------
    N : int
        Upper bound (inclusive), N >= 0.

    Returns
    -------
    np.ndarray
        int64 array of length N+1 with array[n] = d(n) for n >= 1.
        array[0] = 1 is an unused sentinel.
    """
    factors, _ = _sieve(validate_bound(N))
    return factors


def count_matches_division(k: int) -> int:
    """Count n in [1, k] with d(n) == d(n + 1) using the division sieve."""
    _, count = _sieve(validate_bound(k) + 1)
    return count
