"""
Prime generation utilities.

Responsibility: prime lists for the parallel sieve only. The sequential sieves
discover primes as they go and never call into this file.
"""

from math import isqrt
from typing import List

import numpy as np


def prime_flags_upto(N: int) -> np.ndarray:
    """
    Return boolean array where flags[i] is True iff i is prime.

    Uses Sieve of Eratosthenes.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Boolean array of length N+1.
    """
    flags = np.ones(N + 1, dtype=bool)
    flags[:2] = False
    for p in range(2, isqrt(N) + 1):
        if flags[p]:
            flags[p*p::p] = False
    return flags


def primes_upto(N: int) -> np.ndarray:
    """Return array of all primes <= N (empty for N < 2)."""
    if N < 2:
        return np.array([], dtype=np.int64)
    return np.nonzero(prime_flags_upto(N))[0]


def partition_primes(primes: np.ndarray, num_chunks: int) -> List[np.ndarray]:
    """
    Split primes round-robin into at most num_chunks non-empty chunks.

    Small primes carry most of the block updates, so dealing them out
    round-robin balances the work better than contiguous slices.

    Parameters
    ----------
    primes : np.ndarray
        Primes in increasing order.
    num_chunks : int
        Requested number of chunks (>= 1).

    Returns
    -------
    list of np.ndarray
        Chunks whose union is primes; every prime appears exactly once.
    """
    if num_chunks < 1:
        raise ValueError(f"num_chunks must be >= 1, got {num_chunks}")

    num_chunks = min(num_chunks, len(primes))
    return [primes[i::num_chunks] for i in range(num_chunks)]
