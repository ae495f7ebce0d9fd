"""
Naive counter: trial division for every integer.

Responsibility: the O(K sqrt K) reference every faster algorithm must match.
"""

from .arith import divisor_count
from .errors import validate_bound


def count_matches_naive(k: int) -> int:
    """
    Count n in [1, k] with d(n) == d(n + 1) by trial division.

    Comparing each value with the one before it is cheaper than looking
    ahead, so the scan runs over [2, k + 1] and compares n with n - 1.
    The first comparison is against d(1) = 1, which never equals d(2).

    Parameters
    ----------
    k : int
        Bound K >= 0.

    Returns
    -------
    int
        Number of matching adjacent pairs.
    """
    limit = validate_bound(k) + 1

    count = 0
    last_divisors = 1
    for n in range(2, limit + 1):
        divisors = divisor_count(n)
        if divisors == last_divisors:
            count += 1
        last_divisors = divisors

    return count
