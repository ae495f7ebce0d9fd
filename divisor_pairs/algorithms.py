"""
Registry of counting algorithms.

Every entry has the same contract: count_matches(k) -> number of n in [1, k]
with d(n) == d(n + 1).
"""

from typing import Callable, Dict

from .block_sieve import count_matches_block
from .errors import UnknownAlgorithmError
from .naive import count_matches_naive
from .parallel_block_sieve import count_matches_parallel
from .sieve_division import count_matches_division

# Ordered from slowest to fastest sequential; parallel last.
ALGORITHMS: Dict[str, Callable[[int], int]] = {
    'naive': count_matches_naive,
    'division': count_matches_division,
    'block': count_matches_block,
    'parallel': count_matches_parallel,
}


def get_algorithm(name: str) -> Callable[[int], int]:
    """Look up a counting algorithm by name."""
    try:
        return ALGORITHMS[name]
    except KeyError:
        raise UnknownAlgorithmError(
            f"Unknown algorithm {name!r}; choose from {', '.join(ALGORITHMS)}"
        ) from None
