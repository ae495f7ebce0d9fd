"""
Error taxonomy and bound validation.

Responsibility: every failure the counting algorithms can raise, and the one
place where a bound K is checked before any array is allocated.
"""

import numbers

import numpy as np

# Dtype of every DivisorCountArray. d(n) <= n, so any index that fits also
# fits as a stored divisor count.
DIVISOR_DTYPE = np.int64
MAX_LIMIT = int(np.iinfo(DIVISOR_DTYPE).max)


class DivisorPairsError(Exception):
    """Base class for all errors raised by divisor_pairs."""


class InvalidBoundError(DivisorPairsError, ValueError):
    """K is not a non-negative integer."""


class DivisorCountOverflowError(DivisorPairsError, OverflowError):
    """K + 1 does not fit the index range of the divisor-count array."""


class UnknownAlgorithmError(DivisorPairsError, KeyError):
    """No counting algorithm is registered under the requested name."""


class ConfigError(DivisorPairsError, ValueError):
    """Configuration file or override has an invalid key or value."""


def validate_bound(k) -> int:
    """
    Check a bound K and return it as a plain int.

    Parameters
    ----------
    k : int
        Upper end of the range [1, K]. numpy integers are accepted.

    Returns
    -------
    int
        The bound as a Python int.

    Raises
    ------
    InvalidBoundError
        If k is a bool, not integral, or negative.
    DivisorCountOverflowError
        If K + 1 exceeds the int64 index range.
    """
    if isinstance(k, (bool, np.bool_)) or not isinstance(k, numbers.Integral):
        raise InvalidBoundError(f"K must be an integer, got {k!r}")

    k = int(k)
    if k < 0:
        raise InvalidBoundError(f"K must be non-negative, got {k}")
    if k + 1 > MAX_LIMIT:
        raise DivisorCountOverflowError(
            f"K={k} exceeds the int64 index range (max {MAX_LIMIT - 1})"
        )
    return k
