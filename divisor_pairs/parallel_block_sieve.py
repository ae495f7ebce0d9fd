"""
Parallel block sieve, partitioned by prime.

Each prime's block updates are independent of every other prime's, and the
divisor count is the product of all of them. Workers therefore build private
contribution arrays for disjoint chunks of primes and the parent multiplies
them together. No cell is ever written by two processes.

Primes are listed up front with a Sieve of Eratosthenes, since the incremental
"untouched cell is prime" test of the sequential sieve needs the updates of
every smaller prime already applied.
"""

from multiprocessing import Pool, cpu_count
from typing import Optional, Tuple

import numpy as np

from .block_sieve import apply_block_multiplier, exponent_blocks
from .errors import DIVISOR_DTYPE, validate_bound
from .primes import partition_primes, primes_upto

# Below this N, process start-up costs more than the sieve itself.
PARALLEL_THRESHOLD = 10**5


def _block_contributions(args: Tuple[np.ndarray, int]) -> np.ndarray:
    """
    Apply the block updates of one chunk of primes to a fresh array.

    Returns an array over [0, limit] holding the product of (exponent + 1)
    over the chunk's primes at every index.
    """
    primes, limit = args
    contributions = np.ones(limit + 1, dtype=DIVISOR_DTYPE)

    for p in primes:
        for start, end, stride, multiplier in exponent_blocks(int(p), limit):
            apply_block_multiplier(contributions, start, end, stride, multiplier)

    return contributions


def parallel_divisor_counts(N: int, num_workers: Optional[int] = None,
                            chunks_per_worker: int = 4,
                            min_parallel_limit: int = PARALLEL_THRESHOLD,
                            verbose: bool = False) -> np.ndarray:
    """
    Compute divisor counts for all integers up to N using worker processes.

    Parameters
    ----------
    N : int
        Upper bound (inclusive), N >= 0.
    num_workers : int, optional
        Number of parallel workers. Defaults to CPU count.
    chunks_per_worker : int
        Chunks of primes handed to each worker, for load balancing.
    min_parallel_limit : int
        For N below this, or a single worker, the chunks are processed in
        this process.
    verbose : bool
        Print progress.

    Returns
    -------
    np.ndarray
        Same layout as block_sieve.block_divisor_counts.
    """
    N = validate_bound(N)
    if num_workers is None:
        num_workers = cpu_count()
    if num_workers < 1 or chunks_per_worker < 1:
        raise ValueError(
            f"num_workers and chunks_per_worker must be >= 1, "
            f"got {num_workers} and {chunks_per_worker}"
        )

    primes = primes_upto(N)
    chunks = partition_primes(primes, num_workers * chunks_per_worker)
    tasks = [(chunk, N) for chunk in chunks]

    if verbose:
        print(f"    Found {len(primes):,} primes up to {N:,}")
        print(f"    Processing {len(tasks)} chunks with {num_workers} workers...")

    factors = np.ones(N + 1, dtype=DIVISOR_DTYPE)

    if num_workers == 1 or len(tasks) <= 1 or N < min_parallel_limit:
        for contributions in map(_block_contributions, tasks):
            factors *= contributions
        return factors

    # Merge order is irrelevant: the product commutes.
    with Pool(num_workers) as pool:
        for contributions in pool.imap_unordered(_block_contributions, tasks):
            factors *= contributions

    return factors


def count_matches_parallel(k: int, num_workers: Optional[int] = None,
                           chunks_per_worker: int = 4,
                           min_parallel_limit: int = PARALLEL_THRESHOLD,
                           verbose: bool = False) -> int:
    """
    Count n in [1, k] with d(n) == d(n + 1) using the parallel block sieve.

    The comparison runs after the merge, over the shifted range [2, k + 1].
    """
    factors = parallel_divisor_counts(validate_bound(k) + 1, num_workers,
                                      chunks_per_worker, min_parallel_limit, verbose)
    return int(np.count_nonzero(factors[2:] == factors[1:-1]))
