"""
Timing harness.

Runs each counting algorithm once per bound and records count and wall-clock
time. A failing algorithm is reported with its name and bound; the others
still run.
"""

import time
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .algorithms import get_algorithm
from .errors import DivisorPairsError

COLUMNS = ['algorithm', 'K', 'count', 'elapsed_ms', 'error']


def resolve_algorithm(name: str, num_workers: Optional[int] = None) -> Callable[[int], int]:
    """Registry lookup, binding the worker count for the parallel sieve."""
    func = get_algorithm(name)
    if name == 'parallel':
        return partial(func, num_workers=num_workers)
    return func


def time_algorithm(name: str, func: Callable[[int], int], K: int) -> Dict[str, Any]:
    """
    Time one call of func(K).

    Returns
    -------
    dict
        Row with keys algorithm, K, count, elapsed_ms, error. On failure
        count is None and error holds the message.
    """
    t0 = time.time()
    try:
        count = func(K)
        error = None
    except (DivisorPairsError, MemoryError) as e:
        count = None
        error = f"{type(e).__name__}: {e}"
    elapsed_ms = (time.time() - t0) * 1000

    return {'algorithm': name, 'K': K, 'count': count,
            'elapsed_ms': elapsed_ms, 'error': error}


def run_benchmark(K: int, algorithms: Sequence[str],
                  num_workers: Optional[int] = None,
                  verbose: bool = True) -> pd.DataFrame:
    """
    Run every algorithm once on K.

    Parameters
    ----------
    K : int
        Bound.
    algorithms : sequence of str
        Registry names, run in order.
    num_workers : int, optional
        Worker count for the parallel sieve.
    verbose : bool
        Print each result as it arrives.

    Returns
    -------
    pd.DataFrame
        One row per algorithm with columns COLUMNS.
    """
    rows = []
    for name in algorithms:
        row = time_algorithm(name, resolve_algorithm(name, num_workers), K)
        rows.append(row)

        if verbose:
            if row['error'] is None:
                print(f"  {name:<10} count = {row['count']:,}  "
                      f"({row['elapsed_ms']:.0f}ms)")
            else:
                print(f"  {name:<10} FAILED at K={K:,}: {row['error']}")

    return pd.DataFrame(rows, columns=COLUMNS)


def run_sweep(K_grid: Sequence[int], algorithms: Sequence[str],
              slow_algorithms: Sequence[str] = (), slow_max_k: Optional[int] = None,
              num_workers: Optional[int] = None, verbose: bool = True) -> pd.DataFrame:
    """
    Run the benchmark for every K in K_grid.

    Algorithms in slow_algorithms are skipped for K > slow_max_k.
    """
    frames: List[pd.DataFrame] = []
    for K in K_grid:
        selected = [name for name in algorithms
                    if not (name in slow_algorithms and slow_max_k is not None
                            and K > slow_max_k)]
        if verbose:
            print(f"\nK = {K:,}")
        frames.append(run_benchmark(K, selected, num_workers, verbose))

    if not frames:
        return pd.DataFrame(columns=COLUMNS)
    return pd.concat(frames, ignore_index=True)


def results_agree(df: pd.DataFrame) -> bool:
    """True if every successful run on the same K returned the same count."""
    ok = df[df['error'].isna()]
    if ok.empty:
        return True
    return bool(np.all(ok.groupby('K')['count'].nunique() <= 1))
