"""
Cross-validation of the counting algorithms.

Compares:
1. Match counts across algorithms for every K in a range
2. Sieved divisor-count arrays against trial division
3. Match counts against known values of A005237

Every check returns a DataFrame of disagreements; an empty frame means pass.
"""

from typing import Dict, Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from .algorithms import ALGORITHMS, get_algorithm
from .arith import divisor_count
from .block_sieve import block_divisor_counts
from .sieve_division import division_divisor_counts

# (K, number of n <= K with d(n) == d(n + 1)). A005237 starts
# 2, 14, 21, 26, 33, 34, 38, 44, 57, 75, ...
KNOWN_COUNTS: Dict[int, int] = {
    1: 0,
    2: 1,
    14: 2,
    21: 3,
    26: 4,
    33: 5,
    100: 15,
    1000: 118,
    10000: 1119,
    100000: 10585,
    1000000: 102093,
}


def _selected(algorithms: Optional[Sequence[str]]) -> Sequence[str]:
    names = list(ALGORITHMS) if algorithms is None else list(algorithms)
    for name in names:
        get_algorithm(name)
    return names


def cross_validate(k_values: Iterable[int],
                   algorithms: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """
    Run every selected algorithm for each K and collect disagreements.

    Parameters
    ----------
    k_values : iterable of int
        Bounds to check.
    algorithms : sequence of str, optional
        Registry names. Defaults to all.

    Returns
    -------
    pd.DataFrame
        One row per K where the counts differ, with column 'K' and one
        column per algorithm.
    """
    names = _selected(algorithms)

    rows = []
    for k in k_values:
        counts = {name: ALGORITHMS[name](k) for name in names}
        if len(set(counts.values())) > 1:
            rows.append({'K': k, **counts})

    return pd.DataFrame(rows, columns=['K', *names])


def verify_divisor_counts(N: int) -> pd.DataFrame:
    """
    Compare both sieves against trial division for every n in [1, N].

    Returns
    -------
    pd.DataFrame
        Rows (n, expected, division, block) where either sieve is wrong.
    """
    division = division_divisor_counts(N)
    block = block_divisor_counts(N)
    expected = np.array([1] + [divisor_count(n) for n in range(1, N + 1)],
                        dtype=division.dtype)

    bad = np.nonzero((division != expected) | (block != expected))[0]
    bad = bad[bad >= 1]

    return pd.DataFrame({
        'n': bad,
        'expected': expected[bad],
        'division': division[bad],
        'block': block[bad],
    })


def check_known_values(algorithms: Optional[Sequence[str]] = None,
                       max_k: Optional[int] = None) -> pd.DataFrame:
    """
    Compare algorithms against KNOWN_COUNTS.

    Parameters
    ----------
    algorithms : sequence of str, optional
        Registry names. Defaults to all.
    max_k : int, optional
        Skip known values above this bound.

    Returns
    -------
    pd.DataFrame
        Rows (algorithm, K, expected, actual) that disagree.
    """
    names = _selected(algorithms)

    rows = []
    for k, expected in KNOWN_COUNTS.items():
        if max_k is not None and k > max_k:
            continue
        for name in names:
            actual = ALGORITHMS[name](k)
            if actual != expected:
                rows.append({'algorithm': name, 'K': k,
                             'expected': expected, 'actual': actual})

    return pd.DataFrame(rows, columns=['algorithm', 'K', 'expected', 'actual'])
