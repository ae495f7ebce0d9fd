"""
Prime-multiple sieve with block updates instead of per-cell division.

Fix a prime p and list the exponent of p across p, 2p, 3p, ... The list obeys

                      <-------- p times -------->
    eps(p, f + 1) = eps(p, f) ++ ... ++ eps(p, f), last entry + 1
    eps(p, 1) = [1]

so for p = 2 it grows 1, 12, 1213, 12131214, ... and for p = 3 it grows
1, 112, 112112113, ... Peeled into levels, with K = 81 and p = 3:

    112112113112112113112112114
    11 11 11 11 11 11 11 11 11     level 1
      2  2     2  2     2  2       level 2
            3        3             level 3
                              4    level 4

At level i every stride of p^(i+1) cells starts with p - 1 cells of exponent
exactly i, spaced p^i apart. Multiplying those cells by (i + 1) for every
level replaces the division loop of sieve_division with strided slice updates.
"""

from typing import Iterator, List, Tuple

import numpy as np

from .arith import ilog
from .errors import DIVISOR_DTYPE, validate_bound


def apply_block_multiplier(factors: np.ndarray, start: int, end: int,
                           stride: int, multiplier: int) -> None:
    """
    Multiply factors[start:end:stride] by multiplier in place.

    Parameters
    ----------
    factors : np.ndarray
        Divisor-count array being sieved.
    start : int
        First index of the block.
    end : int
        End of the block (exclusive), clamped to len(factors).
    stride : int
        Distance between updated cells.
    multiplier : int
        Factor applied to every cell in the block.
    """
    end = min(end, len(factors))
    factors[start:end:stride] *= multiplier


def exponent_blocks(p: int, limit: int) -> Iterator[Tuple[int, int, int, int]]:
    """
    Yield the block updates that fold prime p into a sieve over [0, limit].

    Parameters
    ----------
    p : int
        Prime, p <= limit.
    limit : int
        Largest index of the sieve.

    Yields
    ------
    tuple
        (start, end, stride, multiplier). Every index in
        range(start, end, stride) is a multiple of p^i but not of p^(i+1)
        and gets multiplier i + 1.
    """
    for level in range(1, ilog(limit, p) + 1):
        step = p ** level
        span = (p - 1) * step
        for start in range(step, limit + 1, p * step):
            yield start, min(start + span, limit + 1), step, level + 1


def exponent_sequence(p: int, levels: int) -> List[int]:
    """
    Exponents of p across p, 2p, ..., p^levels built by concatenation.

    Parameters
    ----------
    p : int
        Prime.
    levels : int
        Number of recurrence steps, >= 1.

    Returns
    -------
    list of int
        p^(levels-1) exponents; entry m-1 is the exponent of p in m*p.
    """
    if levels < 1:
        raise ValueError(f"levels must be >= 1, got {levels}")

    sequence = [1]
    for _ in range(levels - 1):
        sequence = sequence * p
        sequence[-1] += 1  # only p^(f+1) gains a level
    return sequence


def _sieve(limit: int) -> Tuple[np.ndarray, int]:
    """Block-sieve [0, limit] and count n in [2, limit] with d(n) == d(n - 1)."""
    factors = np.ones(limit + 1, dtype=DIVISOR_DTYPE)

    count = 0
    for n in range(2, limit + 1):
        if factors[n] == 1:
            for start, end, stride, multiplier in exponent_blocks(n, limit):
                apply_block_multiplier(factors, start, end, stride, multiplier)

        if factors[n] == factors[n - 1]:
            count += 1

    return factors, count


def block_divisor_counts(N: int) -> np.ndarray:
    """
    Divisor counts for all integers up to N.

    Same layout as sieve_division.division_divisor_counts.
    """
    factors, _ = _sieve(validate_bound(N))
    return factors


def count_matches_block(k: int) -> int:
    """Count n in [1, k] with d(n) == d(n + 1) using block updates."""
    _, count = _sieve(validate_bound(k) + 1)
    return count
